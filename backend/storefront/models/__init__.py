from .catalog import Product, Category, ProductCategory

__all__ = [
    'Product', 'Category', 'ProductCategory',
]
