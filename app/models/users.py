"""User model definition using SQLAlchemy Core."""

from sqlalchemy import Column, String, Table, Text

from app.database import UTCDateTime, metadata

users = Table(
    "users",
    metadata,
    Column("id", String(64), primary_key=True),
    # Credentials
    Column("username", Text, nullable=False, unique=True, index=True),
    Column("password", Text, nullable=False),
    # Profile
    Column("email", Text),
    Column("first_name", Text),
    Column("last_name", Text),
    # Audit
    Column("created_at", UTCDateTime(), nullable=False),
)
