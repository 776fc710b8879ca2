"""
Tests for connector endpoints.

Covers listing, masked detail, saving, deletion and the connection test's
error payloads.
"""

import pytest

from chathub.api.deps import get_connector_service
from chathub.core.connectors import ConnectionTestResult
from chathub.core.exceptions import ConnectorError, ValidationError

@pytest.fixture
def summary():
    return {
        "type": "aws",
        "name": "AWS",
        "description": "CloudWatch logs, pipelines and Lambda",
        "configured": True,
        "enabled": True,
        "implemented": True,
        "last_healthy": None,
    }

@pytest.fixture
def service_override(app, mock_service):
    app.dependency_overrides[get_connector_service] = lambda: mock_service
    return mock_service

class TestListConnectors:
    def test_lists_connectors(self, client, service_override, summary):
        # Arrange
        service_override.list_connectors.return_value = [summary]

        # Act
        response = client.get("/api/connectors")

        # Assert
        assert response.status_code == 200
        assert response.json()[0]["type"] == "aws"
        assert response.json()[0]["lastHealthy"] is None

class TestGetConnector:
    def test_returns_masked_config(self, client, service_override, summary):
        # Arrange
        service_override.get_connector.return_value = {
            **summary,
            "setup_instructions": "Create an IAM user",
            "config_fields": [
                {"key": "secretAccessKey", "label": "Secret Access Key", "type": "password",
                 "placeholder": None, "required": True, "help_text": None},
            ],
            "config": {"secretAccessKey": "••••••••"},
        }

        # Act
        response = client.get("/api/connectors/aws")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["setupInstructions"] == "Create an IAM user"
        assert data["configFields"][0]["key"] == "secretAccessKey"
        assert data["config"] == {"secretAccessKey": "••••••••"}

    def test_unknown_type_returns_400(self, client, service_override):
        # Arrange
        service_override.get_connector.side_effect = ValidationError("Invalid connector type")

        # Act
        response = client.get("/api/connectors/gitlab")

        # Assert
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid connector type"}

class TestSaveConnector:
    def test_save_forwards_config_and_enabled(self, client, service_override, summary):
        # Arrange
        service_override.save_connector.return_value = summary
        config = {"accessKeyId": "AKIA", "secretAccessKey": "secret", "region": "eu-west-1"}

        # Act
        response = client.put("/api/connectors/aws", json={"config": config, "enabled": False})

        # Assert
        assert response.status_code == 200
        service_override.save_connector.assert_awaited_once_with("aws", config, False)

    def test_missing_config_reports_service_message(self, client, service_override):
        # Arrange
        service_override.save_connector.side_effect = ValidationError("Config is required")

        # Act
        response = client.put("/api/connectors/aws", json={})

        # Assert
        assert response.status_code == 400
        assert response.json() == {"error": "Config is required"}
        service_override.save_connector.assert_awaited_once_with("aws", None, None)

    def test_non_boolean_enabled_returns_400(self, client, service_override):
        # Act
        response = client.put("/api/connectors/aws", json={"config": {"a": "b"}, "enabled": "yes"})

        # Assert
        assert response.status_code == 400
        service_override.save_connector.assert_not_called()

class TestDeleteConnector:
    def test_delete_returns_success(self, client, service_override):
        # Act
        response = client.delete("/api/connectors/aws")

        # Assert
        assert response.json() == {"success": True}
        service_override.delete_connector.assert_awaited_once_with("aws")

class TestConnectionTest:
    def test_success(self, client, service_override):
        # Arrange
        service_override.test_connector.return_value = ConnectionTestResult(success=True)

        # Act
        response = client.post("/api/connectors/aws/test")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"success": True, "error": None}

    def test_failed_connection_test_is_reported_in_body(self, client, service_override):
        # Arrange
        service_override.test_connector.return_value = ConnectionTestResult(
            success=False, error="Invalid credentials"
        )

        # Act
        response = client.post("/api/connectors/aws/test")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"success": False, "error": "Invalid credentials"}

    def test_not_configured_returns_400_payload(self, client, service_override):
        # Arrange
        service_override.test_connector.side_effect = ValidationError("Connector not configured")

        # Act
        response = client.post("/api/connectors/aws/test")

        # Assert
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Connector not configured"}

    def test_instance_failure_returns_500_payload(self, client, service_override):
        # Arrange
        service_override.test_connector.side_effect = ConnectorError(
            "Failed to create connector instance", connector_type="github"
        )

        # Act
        response = client.post("/api/connectors/github/test")

        # Assert
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to create connector instance"}
