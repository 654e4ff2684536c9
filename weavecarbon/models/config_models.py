from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the bulk import CLI.

Built by weavecarbon.config.loader after the YAML document passed JSON Schema
validation, so fields here are already typed and defaulted.
"""


@dataclass(frozen=True)
class DatabaseConfig:
    """Product store connection settings.

    Used as fallback when environment variables are not set.
    Environment variables take precedence over these values.
    """
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for an import run."""
    source_directory: str  # directory scanned for .xlsx / .csv files
    products_table: str = "products"
    sheet_name: str | None = None  # None = first sheet
    check_existing_skus: bool = True
    block_on_errors: bool = False  # reject the whole file if any row is invalid
    database: DatabaseConfig = DatabaseConfig()
