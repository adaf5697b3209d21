from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_session(self, session_id: str) -> AddressModel | None:
        return self.db.execute(
            select(AddressModel).where(AddressModel.session_id == session_id)
        ).scalar_one_or_none()

    def save(self, address: AddressModel) -> AddressModel:
        self.db.add(address)
        self.db.commit()
        self.db.refresh(address)
        return address
