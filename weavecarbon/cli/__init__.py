"""Command line entry point (python -m weavecarbon.cli)."""

from .__main__ import main

__all__ = [
    "main",
]
