"""Exercise model - trackable exercise with its measurement kind."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from fitness.core.constants import EXERCISE_NAME_MAX_LENGTH
from fitness.core.enums import MeasuredIn, enum_values
from fitness.db.base import Base


class Exercise(Base):
    """Exercise definition. Names are unique ignoring case and surrounding whitespace."""

    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(EXERCISE_NAME_MAX_LENGTH), nullable=False)
    measured_in: Mapped[MeasuredIn] = mapped_column(
        Enum(
            MeasuredIn,
            name="measured_in",
            native_enum=False,
            create_constraint=True,
            values_callable=enum_values,
        ),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )


Index("exercise_name_ci_unique", func.lower(func.trim(Exercise.name)), unique=True)
