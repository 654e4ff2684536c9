"""Spreadsheet reading and the downloadable import template."""

from .reader import ImportFileError, UnsupportedFileError, read_import_file
from .template import default_template_name, write_template

__all__ = [
    "ImportFileError",
    "UnsupportedFileError",
    "read_import_file",
    "default_template_name",
    "write_template",
]
