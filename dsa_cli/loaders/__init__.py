"""Loaders that turn exported hero sheets into Character models."""
