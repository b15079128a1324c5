# catalog_admin/models/__init__.py
from .user import User
from .category import Category
from .media import Media
from .product_attribute import ProductAttribute
from .product import Product
from .product_attribute_value import ProductAttributeValue
from .product_variation import ProductVariation, ProductAttributeCombination
from .product_media import ProductMedia
from .product_category import ProductCategory
from .url_slug import UrlSlug

__all__ = [
    "User",
    "Category",
    "Media",
    "ProductAttribute",
    "Product",
    "ProductAttributeValue",
    "ProductVariation",
    "ProductAttributeCombination",
    "ProductMedia",
    "ProductCategory",
    "UrlSlug",
]
