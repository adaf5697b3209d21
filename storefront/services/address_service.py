# storefront/services/address_service.py
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.domain.errors import InfrastructureError, ValidationError
from storefront.domain.schemas import AddressIn
from storefront.repos.address_repo import AddressRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AddressService:
    """Jeden adres na sesje: tworzony przy pierwszym checkoucie, potem nadpisywany."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AddressRepo(db)

    def get_address(self, session_id: str | None) -> AddressModel | None:
        if not session_id:
            return None
        return self.repo.get_by_session(session_id)

    def save_address(self, session_id: str, payload: AddressIn) -> AddressModel:
        if not session_id:
            raise ValidationError("Session token is required")

        data = payload.model_dump()
        address = self.repo.get_by_session(session_id)

        if address:
            for field, value in data.items():
                setattr(address, field, value)
            address.updated_at = datetime.now(timezone.utc)
            logger.info(f"Updating address {address.address_id}")
        else:
            address = AddressModel(session_id=session_id, country="Egypt", **data)
            logger.info("Creating address for session")

        try:
            return self.repo.save(address)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Saving address failed: {e}")
            raise InfrastructureError("Failed to save address") from e
