"""Warpgen - project scaffolding from template directories.

Processes ``{{...}}`` templates (variables, conditional blocks, includes and
text functions) and materializes whole project trees from them.
"""

__version__ = "1.0.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
