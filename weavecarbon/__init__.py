"""WeaveCarbon emissions engine.

Bulk product import (header/value normalization, row validation) and
per-product carbon footprint calculation for garment exporters.
"""

__version__ = "0.3.0"
