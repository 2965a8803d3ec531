"""SQLAlchemy models for the motor tax service."""

from src.models.base import Base, TimestampMixin
from src.models.vehicle import Vehicle

__all__ = [
    "Base",
    "TimestampMixin",
    "Vehicle",
]
