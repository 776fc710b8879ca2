"""
Settings and user context schemas.

Dependencies: pydantic
System role: Settings API contracts
"""

from datetime import datetime

from chathub.models.common import CamelModel


class SettingsResponse(CamelModel):
    selected_model: str
    system_prompt: str
    sidebar_collapsed: bool
    updated_at: datetime


class UpdateSettingsRequest(CamelModel):
    """Partial settings update."""

    selected_model: str | None = None
    system_prompt: str | None = None
    sidebar_collapsed: bool | None = None


class UserContextResponse(CamelModel):
    content: str
    updated_at: datetime
