"""initial schema: vehicles, features, images, inquiries, customer forms, admin users

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    cols = [sa.Column("createdAt", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False)]
    if updated:
        cols.append(sa.Column("updatedAt", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False))
    return cols


def upgrade() -> None:
    op.create_table(
        "admin_users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("isActive", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_admin_users_id", "admin_users", ["id"])
    op.create_index("ix_admin_users_username", "admin_users", ["username"], unique=True)

    op.create_table(
        "vehicles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("brand", sa.String(100), nullable=False),
        sa.Column("model", sa.String(100), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False),
        sa.Column("fuelType", sa.String(50), nullable=False),
        sa.Column("transmission", sa.String(50), nullable=False),
        sa.Column("power", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="available"),
        *_timestamps(),
    )
    op.create_index("ix_vehicles_id", "vehicles", ["id"])
    op.create_index("ix_vehicles_brand", "vehicles", ["brand"])

    op.create_table(
        "vehicle_features",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("vehicleId", sa.Integer(), sa.ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("feature", sa.String(255), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index("ix_vehicle_features_id", "vehicle_features", ["id"])
    op.create_index("ix_vehicle_features_vehicleId", "vehicle_features", ["vehicleId"])

    op.create_table(
        "vehicle_images",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("vehicleId", sa.Integer(), sa.ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("imagePath", sa.String(255), nullable=False),
        sa.Column("sortOrder", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(updated=False),
    )
    op.create_index("ix_vehicle_images_id", "vehicle_images", ["id"])
    op.create_index("ix_vehicle_images_vehicleId", "vehicle_images", ["vehicleId"])

    op.create_table(
        "inquiries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("vehicleId", sa.Integer(), sa.ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=True),
        sa.Column("customerName", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="new"),
        *_timestamps(),
    )
    op.create_index("ix_inquiries_id", "inquiries", ["id"])
    op.create_index("ix_inquiries_vehicleId", "inquiries", ["vehicleId"])

    op.create_table(
        "customer_forms",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customerName", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("vehicleBrand", sa.String(100), nullable=False),
        sa.Column("vehicleModel", sa.String(100), nullable=False),
        sa.Column("vehicleYear", sa.Integer(), nullable=True),
        sa.Column("vehicleMileage", sa.Integer(), nullable=True),
        sa.Column("vehiclePrice", sa.Numeric(10, 2), nullable=True),
        sa.Column("vehicleFuelType", sa.String(50), nullable=True),
        sa.Column("vehicleTransmission", sa.String(50), nullable=True),
        sa.Column("vehiclePower", sa.String(50), nullable=True),
        sa.Column("vehicleDescription", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="new"),
        *_timestamps(),
    )
    op.create_index("ix_customer_forms_id", "customer_forms", ["id"])

    op.create_table(
        "customer_form_images",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("formId", sa.Integer(), sa.ForeignKey("customer_forms.id", ondelete="CASCADE"), nullable=False),
        sa.Column("imagePath", sa.String(255), nullable=False),
        sa.Column("sortOrder", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(updated=False),
    )
    op.create_index("ix_customer_form_images_id", "customer_form_images", ["id"])
    op.create_index("ix_customer_form_images_formId", "customer_form_images", ["formId"])


def downgrade() -> None:
    op.drop_table("customer_form_images")
    op.drop_table("customer_forms")
    op.drop_table("inquiries")
    op.drop_table("vehicle_images")
    op.drop_table("vehicle_features")
    op.drop_table("vehicles")
    op.drop_table("admin_users")
