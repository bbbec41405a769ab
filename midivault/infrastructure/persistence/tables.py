"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import Column, DateTime, MetaData, String, Table
from sqlalchemy.types import JSON

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# SLOTS TABLE
# ============================================================================
# One row per named document: records, notifications, users, current_user.
slots_table = Table(
    "slots",
    metadata,
    Column("name", String(64), primary_key=True),
    Column("payload", JSON, nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)
