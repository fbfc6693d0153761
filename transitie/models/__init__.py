"""Database models for saved transition compensation calculations."""
from __future__ import annotations

from .base import Base
from .calculation import TransitieCalculation

__all__ = [
    "Base",
    "TransitieCalculation",
]
