# storefront/repos/product_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.product import ProductModel, ColorVariantModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_product_for_update(self, product_id: str) -> ProductModel | None:
        # blokada wiersza produktu na czas debit (postgres), sqlite ignoruje FOR UPDATE
        return self.db.execute(
            select(ProductModel)
            .where(ProductModel.product_id == product_id)
            .options(selectinload(ProductModel.variants))
            .with_for_update()
        ).scalar_one_or_none()

    def get_variant(self, product_id: str, color: str) -> ColorVariantModel | None:
        return self.db.execute(
            select(ColorVariantModel).where(
                ColorVariantModel.product_id == product_id,
                ColorVariantModel.color == color,
            )
        ).scalar_one_or_none()
