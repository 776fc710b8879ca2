"""
Singleton ORM models.

User context and application settings each live in a single row whose
primary key is the literal "singleton".

Dependencies: sqlalchemy, chathub.boundary.db.base
System role: Per-install preferences persistence
"""

from datetime import datetime

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from chathub.boundary.db.base import Base, UTCDateTime, utc_now
from chathub.configs.llm import DEFAULT_MODEL

SINGLETON_ID = "singleton"


class UserContextModel(Base):
    """
    Free-form Markdown the user writes about themselves.

    Injected into every system prompt.
    """

    __tablename__ = "user_context"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=SINGLETON_ID)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )


class AppSettingsModel(Base):
    """
    Application settings.

    Attributes:
        selected_model: Public model id used for chat turns
        system_prompt: Extra instructions appended to the system prompt
        sidebar_collapsed: UI preference persisted for the client
    """

    __tablename__ = "app_settings"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=SINGLETON_ID)
    selected_model: Mapped[str] = mapped_column(String(100), nullable=False, default=DEFAULT_MODEL)
    system_prompt: Mapped[str] = mapped_column(Text, nullable=False, default="")
    sidebar_collapsed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
