"""
Connector service orchestrator.

Coordinates connector configuration: listing, masked reads, merged
encrypted writes, deletion, connection tests, and instantiation of the
enabled connectors for a chat turn.

Dependencies: chathub.boundary.db.CRUD, chathub.core.connectors, chathub.core.crypto
System role: Connector use case orchestration
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from chathub.boundary.db.base import utc_now
from chathub.boundary.db.CRUD.connector_crud import connector_crud
from chathub.boundary.db.models.connector_model import ConnectorModel
from chathub.core.cache import ConnectorCache, cache_status, preload_all
from chathub.core.connectors import (
    Connector,
    ConnectionTestResult,
    create_connector_instance,
    get_all_connector_metadata,
    get_config_fields,
    get_connector_metadata,
    has_implementation,
    is_valid_connector_type,
)
from chathub.core.crypto import decrypt_json, encrypt_json
from chathub.core.exceptions import ConnectorError, EncryptionError, ValidationError
from chathub.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

MASKED_VALUE = "••••••••"


def _summary(type: str, row: ConnectorModel | None) -> dict[str, Any]:
    metadata = get_connector_metadata(type)
    return {
        "type": type,
        "name": metadata.name,
        "description": metadata.description,
        "configured": row is not None,
        "enabled": row.enabled if row is not None else False,
        "implemented": has_implementation(type),
        "last_healthy": row.last_healthy if row is not None else None,
    }


def _decrypt_config(row: ConnectorModel) -> dict[str, Any] | None:
    try:
        config = decrypt_json(row.config)
    except EncryptionError as e:
        logger.warning(
            "Connector config could not be decrypted",
            extra={"connector_type": row.type, "error": str(e)},
        )
        return None
    return config if isinstance(config, dict) else None


class ConnectorService:
    """Connector service orchestrator."""

    def __init__(self, db: AsyncSession, cache: ConnectorCache | None = None) -> None:
        """
        Initialize connector service.

        Args:
            db: Async SQLAlchemy session
            cache: Cache handed to connector instances
        """
        self.db = db
        self.cache = cache

    @staticmethod
    def _validate_type(type: str) -> None:
        if not is_valid_connector_type(type):
            raise ValidationError("Invalid connector type", field="type")

    async def list_connectors(self) -> list[dict[str, Any]]:
        """Every known connector type with its configuration state."""
        rows = {row.type: row for row in await connector_crud.get_all(self.db)}
        return [_summary(meta.type, rows.get(meta.type)) for meta in get_all_connector_metadata()]

    async def get_connector(self, type: str) -> dict[str, Any]:
        """
        Connector metadata, form fields and masked config.

        Password fields are replaced by a mask; a config that cannot be
        decrypted is returned as an empty dict.

        Raises:
            ValidationError: If ``type`` is unknown
        """
        self._validate_type(type)
        metadata = get_connector_metadata(type)
        row = await connector_crud.get_by_type(self.db, type)

        masked: dict[str, Any] = {}
        if row is not None:
            config = _decrypt_config(row) or {}
            for field in metadata.config_fields:
                if config.get(field.key):
                    masked[field.key] = MASKED_VALUE if field.type == "password" else config[field.key]

        return {
            **_summary(type, row),
            "setup_instructions": metadata.setup_instructions,
            "config_fields": [field.model_dump() for field in metadata.config_fields],
            "config": masked,
        }

    async def save_connector(
        self,
        type: str,
        config: Any,
        enabled: bool | None = None,
    ) -> dict[str, Any]:
        """
        Validate, merge, encrypt and store a connector config.

        Incoming masked or empty values keep the stored value.

        Args:
            type: Connector type
            config: Field values keyed by field key
            enabled: New enabled flag; defaults to the stored flag, or True

        Raises:
            ValidationError: On unknown type, missing config or a missing
                required field
        """
        self._validate_type(type)
        if not config or not isinstance(config, dict):
            raise ValidationError("Config is required", field="config")

        for field in get_config_fields(type):
            if field.required and not config.get(field.key):
                raise ValidationError(f"{field.label} is required", field=field.key)

        existing = await connector_crud.get_by_type(self.db, type)
        final_config = dict(config)
        if existing is not None:
            stored = _decrypt_config(existing)
            if stored is not None:
                final_config = dict(stored)
                for key, value in config.items():
                    if value not in (MASKED_VALUE, ""):
                        final_config[key] = value

        if enabled is None:
            enabled = existing.enabled if existing is not None else True

        row = await connector_crud.upsert(
            self.db,
            type=type,
            name=get_connector_metadata(type).name,
            config=encrypt_json(final_config),
            enabled=enabled,
        )
        log_with_context(
            logger,
            logging.INFO,
            "Connector saved",
            connector_type=type,
            enabled=enabled,
            is_new=existing is None,
            config=final_config,
        )
        return _summary(type, row)

    async def delete_connector(self, type: str) -> None:
        """
        Remove a connector and its cached data. Unconfigured types succeed.

        Raises:
            ValidationError: If ``type`` is unknown
        """
        self._validate_type(type)
        deleted = await connector_crud.delete_by_type(self.db, type)
        logger.info("Connector deleted", extra={"connector_type": type, "existed": deleted})

    async def test_connector(self, type: str) -> ConnectionTestResult:
        """
        Run the connector's connection test and stamp last_healthy on success.

        Raises:
            ValidationError: If ``type`` is unknown or not configured
            ConnectorError: If the connector cannot be instantiated
        """
        self._validate_type(type)
        row = await connector_crud.get_by_type(self.db, type)
        if row is None:
            raise ValidationError("Connector not configured", field="type")

        config = _decrypt_config(row)
        if config is None or not has_implementation(type):
            raise ConnectorError("Failed to create connector instance", connector_type=type)

        connector = create_connector_instance(type, config, connector_id=row.id, cache=self.cache)
        result = await connector.test_connection()
        if result.success:
            await connector_crud.update_by_id(self.db, row.id, last_healthy=utc_now())

        logger.info(
            "Connector tested",
            extra={"connector_type": type, "success": result.success},
        )
        return result

    async def get_enabled_connectors(self) -> list[Connector]:
        """
        Instantiate every enabled connector that has an implementation.

        Connectors that fail to decrypt or build are logged and skipped.
        """
        connectors: list[Connector] = []
        for row in await connector_crud.list_enabled(self.db):
            if not has_implementation(row.type):
                continue
            config = _decrypt_config(row)
            if config is None:
                continue
            try:
                connectors.append(
                    create_connector_instance(row.type, config, connector_id=row.id, cache=self.cache)
                )
            except (ConnectorError, ValueError, KeyError) as e:
                logger.warning(
                    "Failed to create connector",
                    extra={"connector_type": row.type, "error": str(e)},
                )
        return connectors

    async def preload_caches(self) -> dict[str, Any]:
        """Warm the cache for every enabled connector and summarise the outcome."""
        return await preload_all(self.cache or ConnectorCache(), await self.get_enabled_connectors())

    async def cache_status(self) -> list[dict[str, Any]]:
        """Freshness of each enabled connector's preloadable entries."""
        return await cache_status(self.cache or ConnectorCache(), await self.get_enabled_connectors())
