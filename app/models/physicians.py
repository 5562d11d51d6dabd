"""Physician model definition using SQLAlchemy Core."""

from sqlalchemy import Column, String, Table, Text

from app.database import UTCDateTime, metadata

physicians = Table(
    "physicians",
    metadata,
    Column("id", String(64), primary_key=True),
    # Ownership
    Column("user_id", String(64), nullable=False, index=True),
    # Identity
    Column("first_name", Text, nullable=False),
    Column("last_name", Text, nullable=False),
    Column("specialty", Text, nullable=False),
    # Contact
    Column("phone", Text, nullable=False),
    Column("email", Text),
    Column("address", Text),
    Column("office_hours", Text),
    # Audit
    Column("created_at", UTCDateTime(), nullable=False),
)
