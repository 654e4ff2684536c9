from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from ..models.product_row import BulkProductRow

"""Product store on PostgreSQL.

The backend collaborator of the bulk import: lists the SKUs already stored and
bulk-creates calculated products with psycopg2.extras.execute_values. The cursor is
owned by the caller, which also owns the transaction boundary.
"""

try:  # pragma: no cover - psycopg2 missing only in stripped-down environments
    from psycopg2.extras import execute_values
except ImportError:  # pragma: no cover
    execute_values = None  # type: ignore

__all__ = [
    "PRODUCT_COLUMNS",
    "ProductStoreError",
    "BatchMetrics",
    "InsertResult",
    "fetch_existing_skus",
    "insert_products",
    "product_values",
]

logger = logging.getLogger(__name__)

_TABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")

# column order of the INSERT; matches product_values()
PRODUCT_COLUMNS: tuple[str, ...] = (
    "sku",
    "product_name",
    "product_type",
    "quantity",
    "weight_per_unit",
    "primary_material",
    "primary_material_percentage",
    "secondary_material",
    "secondary_material_percentage",
    "accessories",
    "material_source",
    "processes",
    "energy_source",
    "market_type",
    "export_country",
    "transport_mode",
    "calculated_co2",
    "scope",
    "confidence_level",
)


class ProductStoreError(Exception):
    pass


@dataclass(frozen=True)
class BatchMetrics:
    """Timing of one execute_values call."""
    batch_size: int
    elapsed_seconds: float
    start_time: float  # time.time()
    end_time: float


@dataclass(frozen=True)
class InsertResult:
    inserted_rows: int
    returned_values: list[tuple[Any, ...]] | None = None


def _check_table(table: str) -> str:
    if not _TABLE_NAME.match(table):
        raise ProductStoreError(f"invalid table name: {table!r}")
    return table


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def product_values(row: BulkProductRow) -> tuple[Any, ...]:
    """One INSERT tuple for `row`, in PRODUCT_COLUMNS order.

    processes is passed as a list so psycopg2 adapts it to text[].
    """
    return (
        row.sku,
        row.product_name,
        row.product_type,
        row.quantity,
        row.weight_per_unit,
        row.primary_material,
        row.primary_material_percentage,
        row.secondary_material,
        row.secondary_material_percentage,
        row.accessories,
        _enum_value(row.material_source),
        list(row.processes),
        _enum_value(row.energy_source),
        _enum_value(row.market_type),
        row.export_country,
        _enum_value(row.transport_mode),
        row.calculated_co2,
        _enum_value(row.scope),
        _enum_value(row.confidence_level),
    )


def fetch_existing_skus(cursor: Any, table: str = "products") -> set[str]:
    """All SKUs currently stored in `table`."""
    sql = f"SELECT sku FROM {_check_table(table)}"
    try:
        cursor.execute(sql)
        rows = cursor.fetchall()
    except Exception as e:
        raise ProductStoreError(f"failed listing SKUs from {table}: {e}") from e
    return {r[0] for r in rows if r and r[0] is not None}


def insert_products(
    cursor: Any,
    table: str,
    rows: Iterable[BulkProductRow],
    page_size: int = 1000,
    returning: bool = False,
    metrics_callback: Callable[[BatchMetrics], None] | None = None,
    columns: Sequence[str] = PRODUCT_COLUMNS,
) -> InsertResult:
    """Bulk-create calculated products.

    Parameters
    ----------
    cursor: psycopg2 cursor (transaction managed by the caller)
    table: target table, validated against [A-Za-z_][A-Za-z0-9_]* (optionally schema-qualified)
    rows: calculated BulkProductRow objects
    page_size: execute_values page size
    returning: append RETURNING id and fetch the generated ids
    metrics_callback: receives one BatchMetrics per call; not invoked for an empty batch

    Example, accumulating batch statistics for the SUMMARY:
        accumulator = BatchStatsAccumulator()
        insert_products(cur, "products", rows,
                        metrics_callback=lambda m: accumulator.add_batch_time(m.elapsed_seconds))
    """
    if execute_values is None:
        raise ProductStoreError("psycopg2 not available")

    values = [product_values(r) for r in rows]
    if not values:
        return InsertResult(inserted_rows=0, returned_values=[] if returning else None)

    cols_sql = ",".join(f'"{c}"' for c in columns)
    sql = f"INSERT INTO {_check_table(table)} ({cols_sql}) VALUES %s"
    if returning:
        sql += " RETURNING id"

    start_time = time.time()
    try:
        returned = execute_values(cursor, sql, values, page_size=page_size, fetch=returning)
    except Exception as e:
        raise ProductStoreError(str(e)) from e
    finally:
        end_time = time.time()
        if metrics_callback is not None:
            metrics_callback(BatchMetrics(
                batch_size=len(values),
                elapsed_seconds=end_time - start_time,
                start_time=start_time,
                end_time=end_time,
            ))

    logger.debug("inserted %d products into %s", len(values), table)
    return InsertResult(inserted_rows=len(values), returned_values=returned if returning else None)
