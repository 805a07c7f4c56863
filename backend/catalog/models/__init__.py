from catalog.models.offer import Offer
from catalog.models.product import Product, PRODUCT_CATEGORY_IDS

__all__ = ["Offer", "Product", "PRODUCT_CATEGORY_IDS"]
