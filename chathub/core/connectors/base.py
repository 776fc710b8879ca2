"""
Connector interface.

A connector wraps one external service behind a fixed set of LangChain
tools plus a connection test.

Dependencies: langchain_core.tools, pydantic
System role: Contract between connector implementations and the agent
"""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from langchain_core.tools import BaseTool
from pydantic import BaseModel

from chathub.core.cache.preloader import PreloadTarget


class ConnectionTestResult(BaseModel):
    """Outcome of a connector connection test."""

    success: bool
    error: str | None = None


class Connector(ABC):
    """
    Base class for connector implementations.

    Subclasses set ``type`` and ``name`` and are constructed with the
    decrypted config dict.
    """

    type: str
    name: str
    connector_id: UUID | None = None

    def __init__(self, config: dict[str, Any]) -> None:
        self.config = config

    @abstractmethod
    def get_tools(self) -> list[BaseTool]:
        """Tools this connector exposes to the model."""

    @abstractmethod
    async def test_connection(self) -> ConnectionTestResult:
        """Check the service with the configured credentials."""

    def preload_targets(self) -> list[PreloadTarget]:
        """Listings worth caching before the first tool call."""
        return []
