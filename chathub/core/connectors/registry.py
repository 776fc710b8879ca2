"""
Connector registry.

Maps connector types to their metadata and, where one exists, the class
that implements them.

Dependencies: chathub.core.connectors
System role: Lookup and construction of connectors by type
"""

import logging
from typing import Any

from chathub.core.connectors.base import Connector
from chathub.core.connectors.metadata import (
    CONNECTOR_METADATA,
    CONNECTOR_TYPES,
    ConfigField,
    ConnectorMetadata,
)
from chathub.core.exceptions import ConnectorError

logger = logging.getLogger(__name__)

_constructors: dict[str, type[Connector]] = {}


def is_valid_connector_type(type: str) -> bool:
    return type in CONNECTOR_TYPES


def register_connector(type: str, connector_cls: type[Connector]) -> None:
    """
    Register the implementation class for a connector type.

    Raises:
        ConnectorError: If ``type`` is not a known connector type
    """
    if not is_valid_connector_type(type):
        raise ConnectorError(f"Unknown connector type: {type}", connector_type=type)
    _constructors[type] = connector_cls
    logger.debug("Connector registered", extra={"connector_type": type})


def has_implementation(type: str) -> bool:
    return type in _constructors


def get_connector_metadata(type: str) -> ConnectorMetadata | None:
    return CONNECTOR_METADATA.get(type)


def get_all_connector_metadata() -> list[ConnectorMetadata]:
    """Metadata for every known connector type, in catalogue order."""
    return [CONNECTOR_METADATA[t] for t in CONNECTOR_TYPES]


def get_config_fields(type: str) -> list[ConfigField]:
    metadata = get_connector_metadata(type)
    return list(metadata.config_fields) if metadata else []


def get_setup_instructions(type: str) -> str | None:
    metadata = get_connector_metadata(type)
    return metadata.setup_instructions if metadata else None


def create_connector_instance(type: str, config: dict[str, Any], **kwargs: Any) -> Connector:
    """
    Instantiate the connector registered for ``type``.

    Args:
        type: Connector type key
        config: Decrypted connector config
        **kwargs: Extra constructor arguments (e.g. connector_id, cache)

    Returns:
        Connector: Ready-to-use connector

    Raises:
        ConnectorError: If no implementation is registered for ``type``
    """
    connector_cls = _constructors.get(type)
    if connector_cls is None:
        raise ConnectorError(f"Connector {type} is not implemented", connector_type=type)
    return connector_cls(config, **kwargs)
