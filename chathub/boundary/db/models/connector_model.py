"""
Connector and connector cache ORM models.

Connector rows hold encrypted credentials for one external service type.
CachedData rows memoise expensive connector API responses.

Dependencies: sqlalchemy, chathub.boundary.db.base
System role: Connector configuration and response cache persistence
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chathub.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin


class ConnectorModel(Base, UUIDMixin, TimestampMixin):
    """
    Connector ORM model.

    At most one row per connector type.

    Attributes:
        type: Connector type key (e.g. "aws"), unique
        name: Display name
        config: Encrypted JSON config token
        enabled: Whether the connector's tools are offered to the model
        last_healthy: Last successful connection test
    """

    __tablename__ = "connectors"

    type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    config: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="AES-256-GCM encrypted JSON (iv.tag.ciphertext)",
    )

    enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    last_healthy: Mapped[datetime | None] = mapped_column(
        UTCDateTime(),
        nullable=True,
        default=None,
    )

    cached_data = relationship(
        "CachedDataModel",
        back_populates="connector",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class CachedDataModel(Base, UUIDMixin, TimestampMixin):
    """
    Cached connector response.

    Attributes:
        connector_id: Owning connector (ON DELETE CASCADE)
        cache_key: Key unique per connector
        data: JSON-serialized payload
        expires_at: Expiry timestamp (UTC)
    """

    __tablename__ = "cached_data"
    __table_args__ = (
        UniqueConstraint("connector_id", "cache_key", name="uq_cached_data_connector_key"),
    )

    connector_id: Mapped[UUID] = mapped_column(
        ForeignKey("connectors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    cache_key: Mapped[str] = mapped_column(String(255), nullable=False)

    data: Mapped[str] = mapped_column(Text, nullable=False)

    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        index=True,
    )

    connector = relationship("ConnectorModel", back_populates="cached_data")
