"""Transition compensation (transitievergoeding) calculator and calculation store."""

__version__ = "0.1.0"
