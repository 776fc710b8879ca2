"""
Connector schemas.

Dependencies: pydantic
System role: Connector API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from chathub.models.common import CamelModel


class ConfigFieldResponse(CamelModel):
    key: str
    label: str
    type: str
    placeholder: str | None = None
    required: bool = True
    help_text: str | None = None


class ConnectorSummaryResponse(CamelModel):
    """Connector type with its configuration state."""

    type: str
    name: str
    description: str
    configured: bool
    enabled: bool
    implemented: bool
    last_healthy: datetime | None = None


class ConnectorDetailResponse(ConnectorSummaryResponse):
    """Connector with form fields and its masked config."""

    setup_instructions: str
    config_fields: list[ConfigFieldResponse]
    config: dict[str, Any] = Field(default_factory=dict)


class ConnectionTestResponse(CamelModel):
    success: bool
    error: str | None = None
