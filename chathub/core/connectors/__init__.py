"""
Connector framework.

Importing this package registers the built-in connector implementations.
"""

from chathub.core.connectors.aws import AWSConnector
from chathub.core.connectors.base import ConnectionTestResult, Connector
from chathub.core.connectors.metadata import (
    AUTH_METHOD_LABELS,
    CONNECTOR_METADATA,
    CONNECTOR_TYPES,
    ConfigField,
    ConnectorMetadata,
)
from chathub.core.connectors.registry import (
    create_connector_instance,
    get_all_connector_metadata,
    get_config_fields,
    get_connector_metadata,
    get_setup_instructions,
    has_implementation,
    is_valid_connector_type,
    register_connector,
)

register_connector("aws", AWSConnector)

__all__ = [
    "AUTH_METHOD_LABELS",
    "AWSConnector",
    "CONNECTOR_METADATA",
    "CONNECTOR_TYPES",
    "ConfigField",
    "ConnectionTestResult",
    "Connector",
    "ConnectorMetadata",
    "create_connector_instance",
    "get_all_connector_metadata",
    "get_config_fields",
    "get_connector_metadata",
    "get_setup_instructions",
    "has_implementation",
    "is_valid_connector_type",
    "register_connector",
]
