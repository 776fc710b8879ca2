"""Tests for connector metadata and the connector registry."""

import pytest

from chathub.core.connectors import (
    AWSConnector,
    create_connector_instance,
    get_all_connector_metadata,
    get_config_fields,
    get_connector_metadata,
    has_implementation,
    is_valid_connector_type,
    register_connector,
)
from chathub.core.exceptions import ConnectorError


class TestMetadata:
    def test_catalogue_order(self):
        assert [m.type for m in get_all_connector_metadata()] == [
            "aws", "github", "jira", "confluence", "jenkins", "outlook",
        ]

    def test_aws_fields(self):
        # Act
        fields = {f.key: f for f in get_config_fields("aws")}

        # Assert
        assert set(fields) == {"accessKeyId", "secretAccessKey", "region"}
        assert fields["secretAccessKey"].type == "password"
        assert get_connector_metadata("aws").auth_method == "access_keys"

    def test_unknown_type(self):
        assert is_valid_connector_type("gitlab") is False
        assert get_connector_metadata("gitlab") is None
        assert get_config_fields("gitlab") == []


class TestRegistry:
    def test_only_aws_is_implemented(self):
        assert has_implementation("aws") is True
        assert has_implementation("jira") is False

    def test_create_instance(self):
        # Act
        connector = create_connector_instance(
            "aws", {"accessKeyId": "A", "secretAccessKey": "S", "region": "us-east-2"}
        )

        # Assert
        assert isinstance(connector, AWSConnector)
        assert connector.type == "aws"

    def test_create_without_implementation_raises(self):
        with pytest.raises(ConnectorError):
            create_connector_instance("jira", {})

    def test_register_unknown_type_raises(self):
        with pytest.raises(ConnectorError, match="Unknown connector type"):
            register_connector("gitlab", AWSConnector)
