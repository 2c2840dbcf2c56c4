"""Initial schema: owners, chair models, chairs, telemetry, rides, statuses.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── owners ────────────────────────────────────────────────────────
    op.create_table(
        "owners",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(30), unique=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )

    # ── chair_models ──────────────────────────────────────────────────
    op.create_table(
        "chair_models",
        sa.Column("name", sa.String(50), primary_key=True),
        sa.Column("speed", sa.Integer, nullable=False),
    )

    # ── chairs ────────────────────────────────────────────────────────
    op.create_table(
        "chairs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "owner_id", sa.Integer, sa.ForeignKey("owners.id"), nullable=False
        ),
        sa.Column("name", sa.String(30), nullable=False),
        sa.Column("model", sa.String(50), nullable=False),
        sa.Column("is_active", sa.Boolean, default=False, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_chairs_owner", "chairs", ["owner_id"])
    op.create_index("idx_chairs_active", "chairs", ["is_active"])

    # ── chair_locations ───────────────────────────────────────────────
    op.create_table(
        "chair_locations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "chair_id", sa.Integer, sa.ForeignKey("chairs.id"), nullable=False
        ),
        sa.Column("latitude", sa.Integer, nullable=False),
        sa.Column("longitude", sa.Integer, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "idx_chair_locations_chair_created",
        "chair_locations",
        ["chair_id", "created_at"],
    )

    # ── rides ─────────────────────────────────────────────────────────
    op.create_table(
        "rides",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, nullable=True),
        sa.Column(
            "chair_id", sa.Integer, sa.ForeignKey("chairs.id"), nullable=True
        ),
        sa.Column("pickup_latitude", sa.Integer, nullable=False),
        sa.Column("pickup_longitude", sa.Integer, nullable=False),
        sa.Column("destination_latitude", sa.Integer, nullable=True),
        sa.Column("destination_longitude", sa.Integer, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "idx_rides_chair_created", "rides", ["chair_id", "created_at"]
    )

    # ── ride_statuses ─────────────────────────────────────────────────
    op.create_table(
        "ride_statuses",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "ride_id", sa.Integer, sa.ForeignKey("rides.id"), nullable=False
        ),
        sa.Column(
            "status",
            sa.Enum(
                "MATCHING",
                "ENROUTE",
                "PICKUP",
                "CARRYING",
                "ARRIVED",
                "COMPLETED",
                name="ridestatus",
            ),
            nullable=False,
        ),
        sa.Column("chair_sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_ride_statuses_ride", "ride_statuses", ["ride_id"])


def downgrade() -> None:
    op.drop_table("ride_statuses")
    op.drop_table("rides")
    op.drop_table("chair_locations")
    op.drop_table("chairs")
    op.drop_table("chair_models")
    op.drop_table("owners")
    op.execute("DROP TYPE IF EXISTS ridestatus")
