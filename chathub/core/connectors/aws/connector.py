"""
AWS connector.

Dependencies: boto3, chathub.boundary.aws, chathub.core.connectors
System role: AWS implementation of the connector interface
"""

import logging
from typing import Any
from uuid import UUID

from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool
from langchain_core.tools import BaseTool

from chathub.boundary.aws.aws_client import AWSClient
from chathub.core.cache import CacheKeys, CacheTTL, ConnectorCache, PreloadTarget
from chathub.core.connectors.aws.tools import create_aws_tools, describe_aws_error
from chathub.core.connectors.base import ConnectionTestResult, Connector

logger = logging.getLogger(__name__)


class AWSConnector(Connector):
    """Connector for CloudWatch Logs, CodePipeline, Lambda and S3."""

    type = "aws"
    name = "AWS"

    def __init__(
        self,
        config: dict[str, Any],
        connector_id: UUID | None = None,
        cache: ConnectorCache | None = None,
    ) -> None:
        super().__init__(config)
        self.connector_id = connector_id
        self.cache = cache
        self.client = AWSClient(
            access_key_id=config.get("accessKeyId", ""),
            secret_access_key=config.get("secretAccessKey", ""),
            region=config.get("region") or "us-east-1",
        )

    def get_tools(self) -> list[BaseTool]:
        return create_aws_tools(self.client, connector_id=self.connector_id, cache=self.cache)

    def preload_targets(self) -> list[PreloadTarget]:
        return [
            PreloadTarget(
                CacheKeys.AWS_PIPELINES,
                lambda: run_in_threadpool(self.client.list_pipelines),
                CacheTTL.MEDIUM,
            ),
            PreloadTarget(
                CacheKeys.AWS_LAMBDAS,
                lambda: run_in_threadpool(self.client.list_lambda_functions),
                CacheTTL.MEDIUM,
            ),
        ]

    async def test_connection(self) -> ConnectionTestResult:
        try:
            await run_in_threadpool(self.client.test_connection)
        except (ClientError, BotoCoreError) as e:
            logger.info("AWS connection test failed", extra={"error": str(e)})
            return ConnectionTestResult(
                success=False,
                error=describe_aws_error(e, "connect to AWS"),
            )
        return ConnectionTestResult(success=True)
