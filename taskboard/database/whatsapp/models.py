"""SQLAlchemy ORM models for the WhatsApp sender account and destination groups."""

import uuid as uuid_module
from datetime import UTC, datetime
from enum import StrEnum

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.database.core import Base

# Primary key of the single sender account row
DEFAULT_ACCOUNT_ID = "default"


class ConnectionStatus(StrEnum):
    """Last known connectivity of an account or group."""

    CONNECTED = "Connected"
    DISCONNECTED = "Disconnected"
    UNKNOWN = "Unknown"


class WhatsappAccount(Base):
    """ORM model for the Watzap sender account.

    A single row keyed ``"default"`` holds the encrypted API key and the
    sender's number key.
    """

    __tablename__ = "whatsapp_accounts"

    id: Mapped[str] = mapped_column(
        String(50),
        primary_key=True,
        default=DEFAULT_ACCOUNT_ID,
    )
    api_key_encrypted: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    number_key: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    connection_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ConnectionStatus.UNKNOWN.value,
    )
    last_tested_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        """Return string representation of the account."""
        return f"<WhatsappAccount(id={self.id}, status={self.connection_status})>"


class WhatsappGroup(Base):
    """ORM model for a WhatsApp group that reminders are delivered to.

    ``type`` is the logical channel name that reminder rules refer to (for
    example ``Marketing``); ``group_id_encrypted`` is the provider's group id.
    """

    __tablename__ = "whatsapp_groups"

    id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid_module.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    group_id_encrypted: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    member_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    connection_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ConnectionStatus.UNKNOWN.value,
    )
    last_message_sent_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    __table_args__ = (Index("idx_whatsapp_groups_type", "type"),)

    def __repr__(self) -> str:
        """Return string representation of the group."""
        return f"<WhatsappGroup(id={self.id}, name={self.name!r}, type={self.type!r})>"
