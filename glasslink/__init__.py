"""SPICE wire structures, clipboard agent messages and viewer helpers."""

__version__ = "0.1.0"