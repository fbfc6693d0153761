"""Repositories wrapping SQLAlchemy sessions."""

from .base import BaseRepository
from .calculation_repository import TransitieCalculationRepository

__all__ = ["BaseRepository", "TransitieCalculationRepository"]
