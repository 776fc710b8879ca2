"""
Tests for ConnectorService on an in-memory database.

Covers the connector catalogue, masked reads, merged encrypted writes,
connection tests and instantiation of enabled connectors.
"""

from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError

from chathub.application.services.connector_service import MASKED_VALUE, ConnectorService
from chathub.boundary.aws.aws_client import AWSClient
from chathub.boundary.db.CRUD.connector_crud import connector_crud
from chathub.core.cache import ConnectorCache
from chathub.core.connectors import AWSConnector
from chathub.core.connectors.metadata import CONNECTOR_TYPES
from chathub.core.crypto import decrypt_json
from chathub.core.exceptions import ConnectorError, ValidationError

AWS_CONFIG = {"accessKeyId": "AKIAEXAMPLE", "secretAccessKey": "s3cret", "region": "eu-west-1"}


@pytest.fixture
def connector_service(test_async_db, encryption_key):
    return ConnectorService(test_async_db)


class TestListConnectors:
    async def test_lists_every_type_unconfigured(self, connector_service):
        # Act
        connectors = await connector_service.list_connectors()

        # Assert
        assert [c["type"] for c in connectors] == list(CONNECTOR_TYPES)
        assert all(not c["configured"] and not c["enabled"] for c in connectors)
        implemented = {c["type"] for c in connectors if c["implemented"]}
        assert implemented == {"aws"}

    async def test_reflects_saved_connector(self, connector_service):
        # Arrange
        await connector_service.save_connector("aws", AWS_CONFIG)

        # Act
        connectors = {c["type"]: c for c in await connector_service.list_connectors()}

        # Assert
        assert connectors["aws"]["configured"] is True
        assert connectors["aws"]["enabled"] is True


class TestSaveConnector:
    async def test_stores_config_encrypted(self, connector_service, test_async_db):
        # Act
        await connector_service.save_connector("aws", AWS_CONFIG)

        # Assert
        row = await connector_crud.get_by_type(test_async_db, "aws")
        assert "s3cret" not in row.config
        assert decrypt_json(row.config) == AWS_CONFIG

    async def test_masked_values_keep_stored_secret(self, connector_service, test_async_db):
        # Arrange
        await connector_service.save_connector("aws", AWS_CONFIG)

        # Act
        await connector_service.save_connector(
            "aws",
            {"accessKeyId": "AKIANEW", "secretAccessKey": MASKED_VALUE, "region": "us-west-2"},
        )

        # Assert
        row = await connector_crud.get_by_type(test_async_db, "aws")
        assert decrypt_json(row.config) == {
            "accessKeyId": "AKIANEW",
            "secretAccessKey": "s3cret",
            "region": "us-west-2",
        }

    async def test_enabled_defaults_to_stored_value(self, connector_service):
        # Arrange
        await connector_service.save_connector("aws", AWS_CONFIG, enabled=False)

        # Act
        summary = await connector_service.save_connector("aws", AWS_CONFIG)

        # Assert
        assert summary["enabled"] is False

    async def test_missing_config_raises(self, connector_service):
        with pytest.raises(ValidationError, match="Config is required"):
            await connector_service.save_connector("aws", None)

    async def test_missing_required_field_names_label(self, connector_service):
        with pytest.raises(ValidationError, match="Secret Access Key is required"):
            await connector_service.save_connector(
                "aws", {"accessKeyId": "AKIA", "region": "us-east-1"}
            )

    async def test_unknown_type_raises(self, connector_service):
        with pytest.raises(ValidationError, match="Invalid connector type"):
            await connector_service.save_connector("gitlab", {"token": "x"})


class TestGetConnector:
    async def test_masks_password_fields(self, connector_service):
        # Arrange
        await connector_service.save_connector("aws", AWS_CONFIG)

        # Act
        detail = await connector_service.get_connector("aws")

        # Assert
        assert detail["config"] == {
            "accessKeyId": "AKIAEXAMPLE",
            "secretAccessKey": MASKED_VALUE,
            "region": "eu-west-1",
        }
        assert detail["setup_instructions"]
        assert [f["key"] for f in detail["config_fields"]] == ["accessKeyId", "secretAccessKey", "region"]

    async def test_unconfigured_has_empty_config(self, connector_service):
        # Act
        detail = await connector_service.get_connector("jira")

        # Assert
        assert detail["configured"] is False
        assert detail["config"] == {}


class TestDeleteConnector:
    async def test_delete_configured_and_unconfigured(self, connector_service):
        # Arrange
        await connector_service.save_connector("aws", AWS_CONFIG)

        # Act
        await connector_service.delete_connector("aws")
        await connector_service.delete_connector("jira")

        # Assert
        connectors = {c["type"]: c for c in await connector_service.list_connectors()}
        assert connectors["aws"]["configured"] is False


class TestTestConnector:
    async def test_not_configured_raises_validation_error(self, connector_service):
        with pytest.raises(ValidationError, match="Connector not configured"):
            await connector_service.test_connector("aws")

    async def test_unimplemented_type_raises_connector_error(self, connector_service):
        # Arrange
        await connector_service.save_connector(
            "github", {"token": "ghp_x", "defaultOwner": "octo"}
        )

        # Act / Assert
        with pytest.raises(ConnectorError, match="Failed to create connector instance"):
            await connector_service.test_connector("github")

    async def test_success_stamps_last_healthy(self, connector_service):
        # Arrange
        await connector_service.save_connector("aws", AWS_CONFIG)

        # Act
        with patch.object(AWSClient, "test_connection", return_value=None):
            result = await connector_service.test_connector("aws")

        # Assert
        assert result.success is True
        connectors = {c["type"]: c for c in await connector_service.list_connectors()}
        assert connectors["aws"]["last_healthy"] is not None

    async def test_auth_failure_is_reported(self, connector_service):
        # Arrange
        await connector_service.save_connector("aws", AWS_CONFIG)
        error = ClientError(
            {"Error": {"Code": "InvalidClientTokenId", "Message": "bad token"}}, "ListBuckets"
        )

        # Act
        with patch.object(AWSClient, "test_connection", side_effect=error):
            result = await connector_service.test_connector("aws")

        # Assert
        assert result.success is False
        assert "AWS authentication failed" in result.error


class TestGetEnabledConnectors:
    async def test_builds_enabled_implemented_connectors(self, connector_service):
        # Arrange
        await connector_service.save_connector("aws", AWS_CONFIG)
        await connector_service.save_connector("github", {"token": "ghp_x", "defaultOwner": "octo"})

        # Act
        connectors = await connector_service.get_enabled_connectors()

        # Assert
        assert len(connectors) == 1
        assert isinstance(connectors[0], AWSConnector)
        assert connectors[0].client.region == "eu-west-1"

    async def test_disabled_connector_is_skipped(self, connector_service):
        # Arrange
        await connector_service.save_connector("aws", AWS_CONFIG, enabled=False)

        # Act / Assert
        assert await connector_service.get_enabled_connectors() == []


class TestPreloadCaches:
    async def test_warms_aws_listings_and_reports_fresh(self, test_async_db, test_session_factory, encryption_key):
        # Arrange
        service = ConnectorService(test_async_db, ConnectorCache(test_session_factory))
        await service.save_connector("aws", AWS_CONFIG)
        await test_async_db.commit()

        # Act
        with patch.object(AWSClient, "list_pipelines", return_value=[{"name": "deploy"}]), \
                patch.object(AWSClient, "list_lambda_functions", return_value=[]):
            summary = await service.preload_caches()
        status = await service.cache_status()

        # Assert
        assert (summary["total"], summary["successful"], summary["fromCache"]) == (2, 2, 0)
        assert [(s["cacheKey"], s["isStale"]) for s in status] == [
            ("aws:pipelines", False),
            ("aws:lambdas", False),
        ]

    async def test_second_preload_is_served_from_cache(self, test_async_db, test_session_factory, encryption_key):
        # Arrange
        service = ConnectorService(test_async_db, ConnectorCache(test_session_factory))
        await service.save_connector("aws", AWS_CONFIG)
        await test_async_db.commit()

        # Act
        with patch.object(AWSClient, "list_pipelines", return_value=[]), \
                patch.object(AWSClient, "list_lambda_functions", return_value=[]):
            await service.preload_caches()
            summary = await service.preload_caches()

        # Assert
        assert summary["fromCache"] == 2
