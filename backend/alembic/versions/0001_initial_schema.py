"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("phone", sa.String(length=10), nullable=False),
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column(
            "role",
            sa.Enum("USER", "TRAINER", "DIETITIAN", "PHYSIO", "ADMIN", name="role"),
            nullable=False,
        ),
        sa.Column("specialty", sa.String(length=100), nullable=True),
        sa.Column("trainer_phone", sa.String(length=10), nullable=True),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("photo", sa.Text(), nullable=True),
        sa.Column("gender", sa.Enum("MALE", "FEMALE", "OTHER", name="gender"), nullable=True),
        sa.Column("dob", sa.Date(), nullable=True),
        sa.Column("height", sa.Float(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column(
            "activity_level",
            sa.Enum(
                "SEDENTARY", "LIGHT", "MODERATE", "ACTIVE", "VERY_ACTIVE",
                name="activitylevel",
            ),
            nullable=True,
        ),
        sa.Column(
            "fitness_goal",
            sa.Enum(
                "LOSE_WEIGHT", "GAIN_MUSCLE", "MAINTAIN", "IMPROVE_FITNESS",
                name="fitnessgoal",
            ),
            nullable=True,
        ),
        sa.Column(
            "dietary_preference",
            sa.Enum(
                "OMNIVORE", "VEGETARIAN", "VEGAN", "KETO", "PALEO",
                name="dietarypreference",
            ),
            nullable=True,
        ),
        sa.Column("sleep_hours", sa.String(length=20), nullable=True),
        sa.Column("stress_level", sa.Integer(), nullable=True),
        sa.Column("medical_conditions", sa.Text(), nullable=True),
        sa.Column("address", sa.String(length=255), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("country", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("phone", name="pk_profiles"),
        sa.UniqueConstraint("username", name="uq_profiles_username"),
        sa.UniqueConstraint("email", name="uq_profiles_email"),
    )
    op.create_index("ix_profiles_id", "profiles", ["id"], unique=True)
    op.create_index("ix_profiles_role", "profiles", ["role"])
    op.create_index("ix_profiles_trainer_phone", "profiles", ["trainer_phone"])

    op.create_table(
        "diet_plans",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("phone", sa.String(length=10), nullable=False),
        sa.Column("cycle_start", sa.Date(), nullable=False),
        sa.Column("plan", sa.JSON(), nullable=False),
        sa.Column("last_modified_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_modified_by", sa.String(length=10), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_diet_plans"),
        sa.UniqueConstraint("phone", "cycle_start", name="uq_diet_plans_phone_cycle"),
    )
    op.create_index("ix_diet_plans_phone", "diet_plans", ["phone"])

    op.create_table(
        "plan_notes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("plan_id", sa.Integer(), nullable=False),
        sa.Column("author_phone", sa.String(length=10), nullable=True),
        sa.Column("expert", sa.String(length=50), nullable=True),
        sa.Column("section", sa.String(length=50), nullable=True),
        sa.Column("note", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["plan_id"], ["diet_plans.id"],
            name="fk_plan_notes_plan_id_diet_plans", ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_plan_notes"),
    )
    op.create_index("ix_plan_notes_plan_id", "plan_notes", ["plan_id"])
    op.create_index("ix_plan_notes_author_phone", "plan_notes", ["author_phone"])

    op.create_table(
        "workouts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.Column("sets", sa.Integer(), nullable=True),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("muscle_group", sa.String(length=200), nullable=True),
        sa.Column("goal", sa.String(length=200), nullable=True),
        sa.Column("level", sa.String(length=50), nullable=True),
        sa.Column("equipment", sa.String(length=100), nullable=True),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("img", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_workouts"),
    )

    op.create_table(
        "user_workouts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_phone", sa.String(length=10), nullable=False),
        sa.Column("workout_id", sa.Integer(), nullable=False),
        sa.Column("assigned_by", sa.String(length=10), nullable=True),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["workout_id"], ["workouts.id"],
            name="fk_user_workouts_workout_id_workouts", ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_user_workouts"),
        sa.UniqueConstraint("user_phone", "workout_id", name="uq_user_workouts_user_workout"),
    )
    op.create_index("ix_user_workouts_user_phone", "user_workouts", ["user_phone"])
    op.create_index("ix_user_workouts_workout_id", "user_workouts", ["workout_id"])

    op.create_table(
        "time_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_phone", sa.String(length=10), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=True),
        sa.Column("type", sa.Enum("IN", "OUT", name="entrytype"), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_time_logs"),
    )
    op.create_index("ix_time_logs_user_phone", "time_logs", ["user_phone"])
    op.create_index("ix_time_logs_role", "time_logs", ["role"])
    op.create_index("ix_time_logs_timestamp", "time_logs", ["timestamp"])

    op.create_table(
        "body_measurements",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_phone", sa.String(length=10), nullable=False),
        sa.Column("measured_by", sa.String(length=10), nullable=True),
        sa.Column("measurement_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("body_fat", sa.Float(), nullable=True),
        sa.Column("visceral_fat", sa.Float(), nullable=True),
        sa.Column("skeletal_muscle", sa.Float(), nullable=True),
        sa.Column("resting_metabolism", sa.Float(), nullable=True),
        sa.Column("body_age", sa.Integer(), nullable=True),
        sa.Column("bmi", sa.Float(), nullable=True),
        sa.Column("subcutaneous_fat", sa.Float(), nullable=True),
        sa.Column("waist_circumference", sa.Float(), nullable=True),
        sa.Column("hip_circumference", sa.Float(), nullable=True),
        sa.Column("waist_to_hip_ratio", sa.Float(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_body_measurements"),
    )
    op.create_index("ix_body_measurements_user_phone", "body_measurements", ["user_phone"])
    op.create_index(
        "ix_body_measurements_measurement_date", "body_measurements", ["measurement_date"]
    )


def downgrade() -> None:
    op.drop_table("body_measurements")
    op.drop_table("time_logs")
    op.drop_table("user_workouts")
    op.drop_table("workouts")
    op.drop_table("plan_notes")
    op.drop_table("diet_plans")
    op.drop_table("profiles")
