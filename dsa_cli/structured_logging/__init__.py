"""
Structured logging package for dsa-cli.

All imports should use explicit paths like
'from dsa_cli.structured_logging.logging_config import get_logger'.

The directory is named 'structured_logging' rather than 'logging' to avoid
namespace conflicts with Python's standard library logging module.
"""

__all__ = []
