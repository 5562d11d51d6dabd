"""Reminders table model using SQLAlchemy Core."""

from sqlalchemy import Boolean, Column, String, Table, Text, false

from app.database import UTCDateTime, metadata

reminders = Table(
    "reminders",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("appointment_id", String(64), nullable=False),
    Column("reminder_date", UTCDateTime(), nullable=False),
    Column("message", Text, nullable=True),
    Column("sent", Boolean, nullable=False, server_default=false()),
    Column("created_at", UTCDateTime(), nullable=False),
)
