"""GOCO - GAMESTICK console session controller."""

__version__ = "0.1.0"
