"""Appointments table model using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    String,
    Table,
    Text,
)

from app.database import UTCDateTime, metadata

appointments = Table(
    "appointments",
    metadata,
    Column("id", String(64), primary_key=True),
    # Ownership / references
    Column("user_id", String(64), nullable=False, index=True),
    Column("physician_id", String(64), nullable=False),
    # Schedule: YYYY-MM-DD and HH:MM strings compare lexicographically
    Column("date", String(10), nullable=False, index=True),
    Column("time", String(5), nullable=False),
    Column("type", Text, nullable=False),
    Column("notes", Text, nullable=True),
    Column("status", Text, nullable=False, server_default="scheduled"),
    # Audit
    Column("created_at", UTCDateTime(), nullable=False),
    CheckConstraint(
        "status IN ('scheduled', 'completed', 'cancelled')",
        name="appointments_status_check",
    ),
)
