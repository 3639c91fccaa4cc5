"""Perpetual funding-rate scanner with a value-context calculator."""

__version__ = "0.1.0"
