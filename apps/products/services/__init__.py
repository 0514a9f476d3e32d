"""
Product services module.

All services are exported from this module to maintain backward compatibility.
"""
from .catalog import (
    ProductSnapshot,
    ProductCatalog,
    LockingProductCatalog,
    UnlockedProductCatalog,
    get_product_catalog,
)

__all__ = [
    'ProductSnapshot',
    'ProductCatalog',
    'LockingProductCatalog',
    'UnlockedProductCatalog',
    'get_product_catalog',
]
