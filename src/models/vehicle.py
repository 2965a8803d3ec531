"""Vehicle catalog SQLAlchemy model."""

from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, TimestampMixin


class Vehicle(Base, TimestampMixin):
    """A catalog entry whose assessed value feeds the tax engine."""

    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    assessed_value: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
