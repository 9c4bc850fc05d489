"""Workout template - reusable structure of set-groups and target sets."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, DateTime, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitness.core.constants import DEFAULT_REST_DURATION_SECONDS, TEMPLATE_NAME_MAX_LENGTH
from fitness.core.enums import SetType, enum_values
from fitness.db.base import Base


class Template(Base):
    """Named, reusable workout structure. Cannot be deleted while workouts reference it."""

    __tablename__ = "templates"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(TEMPLATE_NAME_MAX_LENGTH), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    set_groups: Mapped[list["TemplateSetGroup"]] = relationship(
        "TemplateSetGroup",
        back_populates="template",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    workouts: Mapped[list["Workout"]] = relationship("Workout", back_populates="template")


class TemplateSetGroup(Base):
    """One exercise slot in a template; ``index`` is its position within the template."""

    __tablename__ = "template_set_groups"
    __table_args__ = (
        CheckConstraint("\"index\" >= 0", name="index_check"),
        CheckConstraint("rest_duration_seconds >= 0", name="rest_duration_check"),
        UniqueConstraint("template_id", "index", name="uq_template_set_groups_template_index"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id"), nullable=False)
    template_id: Mapped[int] = mapped_column(
        ForeignKey("templates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    index: Mapped[int] = mapped_column(Integer, nullable=False)
    rest_duration_seconds: Mapped[int] = mapped_column(
        Integer, nullable=False, default=DEFAULT_REST_DURATION_SECONDS
    )
    # Performed back-to-back with the next set-group
    is_superset: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    template: Mapped["Template"] = relationship("Template", back_populates="set_groups")
    exercise: Mapped["Exercise"] = relationship("Exercise")
    sets: Mapped[list["TemplateSet"]] = relationship(
        "TemplateSet",
        back_populates="set_group",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class TemplateSet(Base):
    """Target set inside a template set-group."""

    __tablename__ = "template_sets"
    __table_args__ = (
        CheckConstraint("\"index\" >= 0", name="index_check"),
        UniqueConstraint(
            "template_set_group_id", "index", name="uq_template_sets_template_set_group_index"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id"), nullable=False)
    template_set_group_id: Mapped[int] = mapped_column(
        ForeignKey("template_set_groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    template_id: Mapped[int] = mapped_column(
        ForeignKey("templates.id", ondelete="CASCADE"), nullable=False
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

    set_group: Mapped["TemplateSetGroup"] = relationship("TemplateSetGroup", back_populates="sets")
