"""Import services: the bulk pipeline, SKU checks and CLI run orchestration."""

from .orchestrator import ProcessingError, process_all, scan_import_files
from .pipeline import run_import
from .sku_check import build_existing_sku_warnings, check_existing_skus
from .summary import render_summary_line

__all__ = [
    "run_import",
    "build_existing_sku_warnings",
    "check_existing_skus",
    "ProcessingError",
    "process_all",
    "scan_import_files",
    "render_summary_line",
]
