"""Rendering of rolls, gauges and hero dumps."""

from .formatters import Formatter, OutputFormat, get_formatter

__all__ = ["Formatter", "OutputFormat", "get_formatter"]
