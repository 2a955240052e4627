"""Vitrine - a personal content gallery."""

__version__ = "0.1.0"
