"""
Tests for the AWS connector, its tools and the boto3 client wrapper.

Tools run against a mocked AWSClient; the client itself is exercised with
botocore's Stubber so no request leaves the process.
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from botocore.exceptions import ClientError, NoCredentialsError
from botocore.stub import Stubber

from chathub.boundary.aws.aws_client import AWSClient
from chathub.core.cache import CacheKeys, CacheTTL
from chathub.core.connectors.aws import AWSConnector, create_aws_tools
from chathub.core.connectors.aws.tools import AUTH_FAILED, NOT_CONFIGURED, describe_aws_error


def client_error(code, operation="Operation"):
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@pytest.fixture
def aws_client():
    client = MagicMock(spec=AWSClient)
    client.region = "eu-west-1"
    client.has_credentials.return_value = True
    return client


@pytest.fixture
def connector_id_value():
    return uuid4()


def tools_by_name(client, **kwargs):
    return {t.name: t for t in create_aws_tools(client, **kwargs)}


class TestDescribeAwsError:
    def test_credential_errors(self):
        assert describe_aws_error(client_error("InvalidClientTokenId"), "x") == AUTH_FAILED
        assert describe_aws_error(NoCredentialsError(), "x") == AUTH_FAILED

    def test_access_denied_and_not_found_overrides(self):
        # Act
        denied = describe_aws_error(client_error("AccessDeniedException"), "x", access_denied="denied")
        missing = describe_aws_error(client_error("ResourceNotFoundException"), "x", not_found="missing")

        # Assert
        assert denied == "denied"
        assert missing == "missing"

    def test_generic_message(self):
        assert describe_aws_error(client_error("Throttling"), "list pipelines").startswith(
            "Failed to list pipelines:"
        )


class TestAwsTools:
    def test_exposes_seven_tools(self, aws_client):
        assert set(tools_by_name(aws_client)) == {
            "aws_list_log_groups",
            "aws_search_logs",
            "aws_list_pipelines",
            "aws_get_pipeline_status",
            "aws_list_lambda_functions",
            "aws_get_lambda_status",
            "aws_list_s3_buckets",
        }

    async def test_missing_credentials(self, aws_client):
        # Arrange
        aws_client.has_credentials.return_value = False

        # Act
        result = await tools_by_name(aws_client)["aws_list_s3_buckets"].ainvoke({})

        # Assert
        assert result == {"error": NOT_CONFIGURED}
        aws_client.list_s3_buckets.assert_not_called()

    async def test_list_log_groups(self, aws_client):
        # Arrange
        aws_client.list_log_groups.return_value = [{"name": "/aws/lambda/api"}]

        # Act
        result = await tools_by_name(aws_client)["aws_list_log_groups"].ainvoke({"prefix": "/aws/lambda"})

        # Assert
        assert result == {"count": 1, "logGroups": [{"name": "/aws/lambda/api"}]}
        aws_client.list_log_groups.assert_called_once_with("/aws/lambda")

    async def test_search_logs_defaults_to_last_hour(self, aws_client):
        # Arrange
        aws_client.search_logs.return_value = [{"message": "ERROR boom"}]

        # Act
        result = await tools_by_name(aws_client)["aws_search_logs"].ainvoke(
            {"logGroupName": "/aws/lambda/api", "filterPattern": "ERROR"}
        )

        # Assert
        name, pattern, start, end, limit = aws_client.search_logs.call_args.args
        assert (name, pattern, limit) == ("/aws/lambda/api", "ERROR", 50)
        assert end - start == 60 * 60 * 1000
        assert result["count"] == 1
        assert set(result["timeRange"]) == {"start", "end"}

    async def test_search_logs_invalid_pattern(self, aws_client):
        # Arrange
        aws_client.search_logs.side_effect = client_error("InvalidParameterException")

        # Act
        result = await tools_by_name(aws_client)["aws_search_logs"].ainvoke(
            {"logGroupName": "g", "filterPattern": "{ bad"}
        )

        # Assert
        assert result["error"].startswith("Invalid filter pattern")

    async def test_search_logs_missing_group(self, aws_client):
        # Arrange
        aws_client.search_logs.side_effect = client_error("ResourceNotFoundException")

        # Act
        result = await tools_by_name(aws_client)["aws_search_logs"].ainvoke(
            {"logGroupName": "/nope", "filterPattern": "ERROR"}
        )

        # Assert
        assert result["error"].startswith('Log group "/nope" not found')

    async def test_list_pipelines_uses_cache(self, aws_client, connector_id_value):
        # Arrange
        cache = MagicMock()
        cache.get_or_fetch = AsyncMock(return_value=[{"name": "deploy"}])
        tools = tools_by_name(aws_client, connector_id=connector_id_value, cache=cache)

        # Act
        result = await tools["aws_list_pipelines"].ainvoke({})

        # Assert
        assert result == {"count": 1, "region": "eu-west-1", "pipelines": [{"name": "deploy"}]}
        connector_id, key, _, ttl = cache.get_or_fetch.await_args.args
        assert (connector_id, key, ttl) == (connector_id_value, CacheKeys.AWS_PIPELINES, CacheTTL.MEDIUM)

    async def test_list_lambdas_without_cache_calls_client(self, aws_client):
        # Arrange
        aws_client.list_lambda_functions.return_value = [{"functionName": "api"}]

        # Act
        result = await tools_by_name(aws_client)["aws_list_lambda_functions"].ainvoke({})

        # Assert
        assert result["functions"] == [{"functionName": "api"}]

    async def test_list_lambdas_access_denied(self, aws_client):
        # Arrange
        aws_client.list_lambda_functions.side_effect = client_error("AccessDeniedException")

        # Act
        result = await tools_by_name(aws_client)["aws_list_lambda_functions"].ainvoke({})

        # Assert
        assert "lambda:ListFunctions" in result["error"]

    async def test_get_pipeline_status_not_found(self, aws_client):
        # Arrange
        aws_client.get_pipeline_status.side_effect = client_error("PipelineNotFoundException")

        # Act
        result = await tools_by_name(aws_client)["aws_get_pipeline_status"].ainvoke(
            {"pipelineName": "ghost"}
        )

        # Assert
        assert result["error"].startswith('Pipeline "ghost" not found')

    async def test_auth_failure_message(self, aws_client):
        # Arrange
        aws_client.list_s3_buckets.side_effect = client_error("SignatureDoesNotMatch")

        # Act
        result = await tools_by_name(aws_client)["aws_list_s3_buckets"].ainvoke({})

        # Assert
        assert result == {"error": AUTH_FAILED}


@pytest.fixture
def real_client():
    return AWSClient(access_key_id="AKIATEST", secret_access_key="secret", region="us-west-2")


class TestAwsClient:
    def test_has_credentials(self, real_client):
        assert real_client.has_credentials() is True
        assert AWSClient("", "", "us-east-1").has_credentials() is False

    def test_list_lambda_functions_follows_pagination(self, real_client):
        # Arrange
        lambda_client = real_client._client("lambda")
        with Stubber(lambda_client) as stubber:
            stubber.add_response(
                "list_functions",
                {"Functions": [{"FunctionName": "a", "Runtime": "python3.12"}], "NextMarker": "m1"},
                {"MaxItems": 50},
            )
            stubber.add_response(
                "list_functions",
                {"Functions": [{"FunctionName": "b", "Description": "worker"}]},
                {"MaxItems": 50, "Marker": "m1"},
            )

            # Act
            functions = real_client.list_lambda_functions()

        # Assert
        assert [f["functionName"] for f in functions] == ["a", "b"]
        assert functions[0]["description"] == "(No description)"
        assert functions[1]["description"] == "worker"

    def test_get_lambda_status_includes_console_url(self, real_client):
        # Arrange
        lambda_client = real_client._client("lambda")
        with Stubber(lambda_client) as stubber:
            stubber.add_response(
                "get_function",
                {
                    "Configuration": {
                        "FunctionName": "api",
                        "Runtime": "nodejs20.x",
                        "Environment": {"Variables": {"A": "1", "B": "2"}},
                    }
                },
                {"FunctionName": "api"},
            )

            # Act
            status = real_client.get_lambda_status("api")

        # Assert
        assert status["environmentVariableCount"] == 2
        assert status["consoleUrl"] == (
            "https://us-west-2.console.aws.amazon.com/lambda/home?region=us-west-2#/functions/api"
        )

    def test_list_s3_buckets(self, real_client):
        # Arrange
        s3_client = real_client._client("s3")
        with Stubber(s3_client) as stubber:
            stubber.add_response("list_buckets", {"Buckets": [{"Name": "logs"}]}, {})

            # Act
            buckets = real_client.list_s3_buckets()

        # Assert
        assert buckets == [{"name": "logs", "creationDate": None}]


class TestAwsConnector:
    def test_defaults_region(self):
        # Act
        connector = AWSConnector({"accessKeyId": "A", "secretAccessKey": "S"})

        # Assert
        assert connector.client.region == "us-east-1"
        assert len(connector.get_tools()) == 7

    async def test_connection_failure_is_reported(self):
        # Arrange
        connector = AWSConnector({"accessKeyId": "A", "secretAccessKey": "S", "region": "us-east-1"})
        connector.client = MagicMock(spec=AWSClient)
        connector.client.test_connection.side_effect = client_error("Throttling", "ListPipelines")

        # Act
        result = await connector.test_connection()

        # Assert
        assert result.success is False
        assert result.error.startswith("Failed to connect to AWS")

    async def test_preload_targets_list_pipelines_and_lambdas(self, connector_id_value):
        # Arrange
        connector = AWSConnector({"accessKeyId": "A", "secretAccessKey": "S"}, connector_id=connector_id_value)
        connector.client = MagicMock(spec=AWSClient)
        connector.client.list_pipelines.return_value = [{"name": "deploy"}]
        connector.client.list_lambda_functions.return_value = [{"functionName": "fn"}]

        # Act
        targets = connector.preload_targets()
        fetched = [await target.fetcher() for target in targets]

        # Assert
        assert [t.cache_key for t in targets] == [CacheKeys.AWS_PIPELINES, CacheKeys.AWS_LAMBDAS]
        assert {t.ttl for t in targets} == {CacheTTL.MEDIUM}
        assert fetched == [[{"name": "deploy"}], [{"functionName": "fn"}]]
