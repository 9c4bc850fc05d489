"""Workout, SetGroup and WorkoutSet models (instances copied from a template)."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitness.core.constants import DEFAULT_REST_DURATION_SECONDS
from fitness.core.enums import SetType, enum_values
from fitness.db.base import Base


class Workout(Base):
    """A workout started from a template. ``finished_at`` is None while in progress."""

    __tablename__ = "workouts"
    __table_args__ = (Index("ix_workouts_started_at", "started_at"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    # No ON DELETE: a template with workouts must not be deleted.
    template_id: Mapped[int] = mapped_column(ForeignKey("templates.id"), nullable=False, index=True)
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    template: Mapped["Template"] = relationship("Template", back_populates="workouts")
    set_groups: Mapped[list["SetGroup"]] = relationship(
        "SetGroup",
        back_populates="workout",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class SetGroup(Base):
    """One exercise slot within a workout."""

    __tablename__ = "set_groups"
    __table_args__ = (
        CheckConstraint("\"index\" >= 0", name="index_check"),
        CheckConstraint("rest_duration_seconds >= 0", name="rest_duration_check"),
        UniqueConstraint("workout_id", "index", name="uq_set_groups_workout_index"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id"), nullable=False)
    workout_id: Mapped[int] = mapped_column(
        ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    index: Mapped[int] = mapped_column(Integer, nullable=False)
    rest_duration_seconds: Mapped[int] = mapped_column(
        Integer, nullable=False, default=DEFAULT_REST_DURATION_SECONDS
    )
    is_superset: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    workout: Mapped["Workout"] = relationship("Workout", back_populates="set_groups")
    exercise: Mapped["Exercise"] = relationship("Exercise")
    sets: Mapped[list["WorkoutSet"]] = relationship(
        "WorkoutSet",
        back_populates="set_group",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class WorkoutSet(Base):
    """Performed set. Only the metric(s) matching the exercise's ``measured_in`` are non-null;
    ``finished_at`` marks completion (also used to restore the rest timer)."""

    __tablename__ = "sets"
    __table_args__ = (
        CheckConstraint("\"index\" >= 0", name="index_check"),
        CheckConstraint("reps > 0 OR reps IS NULL", name="reps_check"),
        CheckConstraint("weight > 0 OR weight IS NULL", name="weight_check"),
        CheckConstraint("duration > 0 OR duration IS NULL", name="duration_check"),
        UniqueConstraint("set_group_id", "index", name="uq_sets_set_group_index"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id"), nullable=False)
    set_group_id: Mapped[int] = mapped_column(
        ForeignKey("set_groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    workout_id: Mapped[int] = mapped_column(
        ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    index: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[SetType] = mapped_column(
        Enum(
            SetType,
            name="set_type",
            native_enum=False,
            create_constraint=True,
            values_callable=enum_values,
        ),
        nullable=False,
        default=SetType.WORKING,
    )
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    set_group: Mapped["SetGroup"] = relationship("SetGroup", back_populates="sets")
    exercise: Mapped["Exercise"] = relationship("Exercise")

    @property
    def is_complete(self) -> bool:
        return self.finished_at is not None
