"""PostgreSQL product store."""

from .products import (
    PRODUCT_COLUMNS,
    BatchMetrics,
    InsertResult,
    ProductStoreError,
    fetch_existing_skus,
    insert_products,
)

__all__ = [
    "PRODUCT_COLUMNS",
    "BatchMetrics",
    "InsertResult",
    "ProductStoreError",
    "fetch_existing_skus",
    "insert_products",
]
