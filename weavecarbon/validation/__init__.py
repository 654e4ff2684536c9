from .validator import merge_validation_warnings, normalize_sku, validate_row, validate_rows

__all__ = [
    "validate_row",
    "validate_rows",
    "merge_validation_warnings",
    "normalize_sku",
]
