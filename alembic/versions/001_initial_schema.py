"""Initial schema: exercises, templates (set-groups, sets), workouts (set-groups, sets).

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SET_TYPES = "'warmup', 'working'"


def upgrade() -> None:
    op.create_table(
        "exercises",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("measured_in", sa.String(length=15), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "measured_in IN ('duration', 'reps', 'reps_and_weight')", name="ck_exercises_measured_in"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_exercises"),
    )
    op.create_index(
        "exercise_name_ci_unique",
        "exercises",
        [sa.text("lower(trim(name))")],
        unique=True,
    )

    op.create_table(
        "templates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_templates"),
        sa.UniqueConstraint("name", name="uq_templates_name"),
    )

    op.create_table(
        "template_set_groups",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("exercise_id", sa.Integer(), nullable=False),
        sa.Column("template_id", sa.Integer(), nullable=False),
        sa.Column("index", sa.Integer(), nullable=False),
        sa.Column("rest_duration_seconds", sa.Integer(), nullable=False),
        sa.Column("is_superset", sa.Boolean(), nullable=False),
        sa.CheckConstraint('"index" >= 0', name="ck_template_set_groups_index_check"),
        sa.CheckConstraint("rest_duration_seconds >= 0", name="ck_template_set_groups_rest_duration_check"),
        sa.ForeignKeyConstraint(
            ["exercise_id"], ["exercises.id"], name="fk_template_set_groups_exercise_id_exercises"
        ),
        sa.ForeignKeyConstraint(
            ["template_id"],
            ["templates.id"],
            name="fk_template_set_groups_template_id_templates",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_template_set_groups"),
        sa.UniqueConstraint("template_id", "index", name="uq_template_set_groups_template_index"),
    )
    op.create_index(
        "ix_template_set_groups_template_id", "template_set_groups", ["template_id"], unique=False
    )

    op.create_table(
        "template_sets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("exercise_id", sa.Integer(), nullable=False),
        sa.Column("template_set_group_id", sa.Integer(), nullable=False),
        sa.Column("template_id", sa.Integer(), nullable=False),
        sa.Column("index", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=7), nullable=False),
        sa.CheckConstraint('"index" >= 0', name="ck_template_sets_index_check"),
        sa.CheckConstraint(f"type IN ({SET_TYPES})", name="ck_template_sets_set_type"),
        sa.ForeignKeyConstraint(
            ["exercise_id"], ["exercises.id"], name="fk_template_sets_exercise_id_exercises"
        ),
        sa.ForeignKeyConstraint(
            ["template_set_group_id"],
            ["template_set_groups.id"],
            name="fk_template_sets_template_set_group_id_template_set_groups",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["template_id"],
            ["templates.id"],
            name="fk_template_sets_template_id_templates",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_template_sets"),
        sa.UniqueConstraint(
            "template_set_group_id", "index", name="uq_template_sets_template_set_group_index"
        ),
    )
    op.create_index(
        "ix_template_sets_template_set_group_id", "template_sets", ["template_set_group_id"], unique=False
    )

    op.create_table(
        "workouts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("template_id", sa.Integer(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
        # No ON DELETE: templates with workouts cannot be deleted
        sa.ForeignKeyConstraint(
            ["template_id"], ["templates.id"], name="fk_workouts_template_id_templates"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_workouts"),
    )
    op.create_index("ix_workouts_started_at", "workouts", ["started_at"], unique=False)
    op.create_index("ix_workouts_template_id", "workouts", ["template_id"], unique=False)

    op.create_table(
        "set_groups",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("exercise_id", sa.Integer(), nullable=False),
        sa.Column("workout_id", sa.Integer(), nullable=False),
        sa.Column("index", sa.Integer(), nullable=False),
        sa.Column("rest_duration_seconds", sa.Integer(), nullable=False),
        sa.Column("is_superset", sa.Boolean(), nullable=False),
        sa.CheckConstraint('"index" >= 0', name="ck_set_groups_index_check"),
        sa.CheckConstraint("rest_duration_seconds >= 0", name="ck_set_groups_rest_duration_check"),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], name="fk_set_groups_exercise_id_exercises"),
        sa.ForeignKeyConstraint(
            ["workout_id"], ["workouts.id"], name="fk_set_groups_workout_id_workouts", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_set_groups"),
        sa.UniqueConstraint("workout_id", "index", name="uq_set_groups_workout_index"),
    )
    op.create_index("ix_set_groups_workout_id", "set_groups", ["workout_id"], unique=False)

    op.create_table(
        "sets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("exercise_id", sa.Integer(), nullable=False),
        sa.Column("set_group_id", sa.Integer(), nullable=False),
        sa.Column("workout_id", sa.Integer(), nullable=False),
        sa.Column("index", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=7), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('"index" >= 0', name="ck_sets_index_check"),
        sa.CheckConstraint(f"type IN ({SET_TYPES})", name="ck_sets_set_type"),
        sa.CheckConstraint("reps > 0 OR reps IS NULL", name="ck_sets_reps_check"),
        sa.CheckConstraint("weight > 0 OR weight IS NULL", name="ck_sets_weight_check"),
        sa.CheckConstraint("duration > 0 OR duration IS NULL", name="ck_sets_duration_check"),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], name="fk_sets_exercise_id_exercises"),
        sa.ForeignKeyConstraint(
            ["set_group_id"], ["set_groups.id"], name="fk_sets_set_group_id_set_groups", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["workout_id"], ["workouts.id"], name="fk_sets_workout_id_workouts", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_sets"),
        sa.UniqueConstraint("set_group_id", "index", name="uq_sets_set_group_index"),
    )
    op.create_index("ix_sets_set_group_id", "sets", ["set_group_id"], unique=False)
    op.create_index("ix_sets_workout_id", "sets", ["workout_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_sets_workout_id", table_name="sets")
    op.drop_index("ix_sets_set_group_id", table_name="sets")
    op.drop_table("sets")
    op.drop_index("ix_set_groups_workout_id", table_name="set_groups")
    op.drop_table("set_groups")
    op.drop_index("ix_workouts_template_id", table_name="workouts")
    op.drop_index("ix_workouts_started_at", table_name="workouts")
    op.drop_table("workouts")
    op.drop_index("ix_template_sets_template_set_group_id", table_name="template_sets")
    op.drop_table("template_sets")
    op.drop_index("ix_template_set_groups_template_id", table_name="template_set_groups")
    op.drop_table("template_set_groups")
    op.drop_table("templates")
    op.drop_index("exercise_name_ci_unique", table_name="exercises")
    op.drop_table("exercises")
