# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal, init_db
from storefront.data.models import StoreModel, ProductModel, ColorVariantModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_CATALOG = [
    {
        "store_name": "Nile Kitchen",
        "products": [
            {"product_name": "Ceramic Mug", "price": "100.00", "variants": {"red": 5, "white": 12}},
            {"product_name": "Chef Knife", "price": "450.00", "variants": {"black": 3}},
        ],
    },
    {
        "store_name": "Delta Bath",
        "products": [
            {"product_name": "Cotton Towel", "price": "180.00", "variants": {"blue": 8, "beige": 2}},
        ],
    },
]


def seed():
    init_db()
    db = SessionLocal()
    try:
        # tylko jesli katalog jest pusty
        if db.query(ProductModel).first():
            logger.info("Catalog already seeded")
            return

        for store_data in DEMO_CATALOG:
            store = StoreModel(store_name=store_data["store_name"])
            db.add(store)
            db.flush()

            for p in store_data["products"]:
                product = ProductModel(
                    store_id=store.store_id,
                    product_name=p["product_name"],
                    price=Decimal(p["price"]),
                    total_inventory=sum(p["variants"].values()),
                )
                product.variants = [
                    ColorVariantModel(color=color, inventory=stock, image_urls=[])
                    for color, stock in p["variants"].items()
                ]
                db.add(product)

        db.commit()
        logger.info("Demo catalog seeded")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
