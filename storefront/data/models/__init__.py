#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.store import StoreModel
from storefront.data.models.product import ProductModel, ColorVariantModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.address import AddressModel
from storefront.data.models.order import OrderModel

__all__ = [
    "StoreModel",
    "ProductModel",
    "ColorVariantModel",
    "CartModel",
    "CartItemModel",
    "AddressModel",
    "OrderModel",
]
