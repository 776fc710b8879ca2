"""
AWS connector tools.

LangChain tools over CloudWatch Logs, CodePipeline, Lambda and S3. Every
tool returns a dict; AWS failures are reported as ``{"error": ...}`` so
the model can relay them.

Dependencies: boto3/botocore, fastapi.concurrency, langchain_core.tools, pydantic
System role: Tool surface of the AWS connector
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable
from uuid import UUID

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError, PartialCredentialsError
from fastapi.concurrency import run_in_threadpool
from langchain_core.tools import BaseTool, tool
from pydantic import BaseModel, Field

from chathub.boundary.aws.aws_client import AWSClient
from chathub.core.cache import CacheKeys, CacheTTL, ConnectorCache

logger = logging.getLogger(__name__)

NOT_CONFIGURED = (
    "AWS not configured. Please add your Access Key ID, Secret Access Key, "
    "and Region in Settings → Connectors."
)
AUTH_FAILED = (
    "AWS authentication failed. Please check your Access Key ID and Secret "
    "Access Key in Settings → Connectors."
)

_CREDENTIAL_ERROR_CODES = {
    "UnrecognizedClientException",
    "InvalidClientTokenId",
    "InvalidSignatureException",
    "SignatureDoesNotMatch",
    "ExpiredTokenException",
    "InvalidAccessKeyId",
    "AuthFailure",
}
_ACCESS_DENIED_CODES = {"AccessDenied", "AccessDeniedException"}
_NOT_FOUND_CODES = {
    "ResourceNotFoundException",
    "PipelineNotFoundException",
    "NoSuchBucket",
}

ONE_HOUR_MS = 60 * 60 * 1000


def error_code(exc: Exception) -> str | None:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code")
    return None


def describe_aws_error(
    exc: Exception,
    action: str,
    not_found: str | None = None,
    access_denied: str | None = None,
) -> str:
    """
    Turn an AWS SDK failure into a message for the model.

    Args:
        exc: Exception raised by boto3
        action: Failed action, e.g. "list pipelines"
        not_found: Message for missing resources
        access_denied: Message for IAM permission failures
    """
    code = error_code(exc)
    if isinstance(exc, (NoCredentialsError, PartialCredentialsError)) or code in _CREDENTIAL_ERROR_CODES:
        return AUTH_FAILED
    if access_denied and code in _ACCESS_DENIED_CODES:
        return access_denied
    if not_found and code in _NOT_FOUND_CODES:
        return not_found
    return f"Failed to {action}: {exc}"


class ListLogGroupsInput(BaseModel):
    prefix: str | None = Field(
        None,
        description=(
            'Log group name prefix to filter by. Examples: "/aws/lambda" (all Lambda logs), '
            '"/aws/ecs" (all ECS logs). Omit to list all log groups.'
        ),
    )


class SearchLogsInput(BaseModel):
    logGroupName: str = Field(
        ...,
        description='The full name of the log group to search (e.g., "/aws/lambda/my-function"). Get this from aws_list_log_groups results.',
    )
    filterPattern: str = Field(
        ...,
        description='CloudWatch filter pattern. Examples: "ERROR", "?ERROR ?Exception", "{ $.level = \\"error\\" }"',
    )
    startTime: int | None = Field(
        None, description="Start time as Unix timestamp in milliseconds. Defaults to 1 hour ago."
    )
    endTime: int | None = Field(
        None, description="End time as Unix timestamp in milliseconds. Defaults to now."
    )
    limit: int = Field(
        50, gt=0, le=10000, description="Maximum number of log events to return (default: 50)"
    )


class NoInput(BaseModel):
    pass


class PipelineInput(BaseModel):
    pipelineName: str = Field(
        ...,
        description="The name of the CodePipeline. Get this from aws_list_pipelines results.",
    )


class LambdaInput(BaseModel):
    functionName: str = Field(
        ...,
        description="The Lambda function name or ARN. Get this from aws_list_lambda_functions results.",
    )


def _iso_ms(epoch_ms: int) -> str:
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).isoformat()


def create_aws_tools(
    client: AWSClient,
    connector_id: UUID | None = None,
    cache: ConnectorCache | None = None,
) -> list[BaseTool]:
    """
    Build the AWS tools bound to ``client``.

    Args:
        client: Configured AWS client
        connector_id: Connector row id, required for caching
        cache: Optional cache for list operations

    Returns:
        list[BaseTool]: The seven AWS tools
    """

    async def cached(key: str, fetch: Callable[[], list[dict[str, Any]]]) -> list[dict[str, Any]]:
        if cache is None or connector_id is None:
            return await run_in_threadpool(fetch)

        async def fetcher() -> list[dict[str, Any]]:
            return await run_in_threadpool(fetch)

        return await cache.get_or_fetch(connector_id, key, fetcher, CacheTTL.MEDIUM)

    def failed(tool_name: str, exc: Exception, message: str) -> dict[str, Any]:
        logger.warning(
            "AWS tool failed",
            extra={"tool_name": tool_name, "error_code": error_code(exc), "error": str(exc)},
        )
        return {"error": message}

    @tool("aws_list_log_groups", args_schema=ListLogGroupsInput)
    async def aws_list_log_groups(prefix: str | None = None) -> dict[str, Any]:
        """List CloudWatch log groups in AWS. Returns log group names, storage sizes, and retention settings. Use aws_search_logs with the log group name to search for specific log entries."""
        if not client.has_credentials():
            return {"error": NOT_CONFIGURED}
        try:
            groups = await run_in_threadpool(client.list_log_groups, prefix)
        except (ClientError, BotoCoreError) as e:
            return failed("aws_list_log_groups", e, describe_aws_error(e, "list log groups"))
        return {"count": len(groups), "logGroups": groups}

    @tool("aws_search_logs", args_schema=SearchLogsInput)
    async def aws_search_logs(
        logGroupName: str,
        filterPattern: str,
        startTime: int | None = None,
        endTime: int | None = None,
        limit: int = 50,
    ) -> dict[str, Any]:
        """Search CloudWatch logs for specific patterns in a log group. Returns matching log events with timestamps and messages. Use aws_list_log_groups first to find log group names."""
        if not client.has_credentials():
            return {"error": NOT_CONFIGURED}
        now_ms = int(time.time() * 1000)
        start = startTime if startTime is not None else now_ms - ONE_HOUR_MS
        end = endTime if endTime is not None else now_ms
        try:
            events = await run_in_threadpool(
                client.search_logs, logGroupName, filterPattern, start, end, limit
            )
        except (ClientError, BotoCoreError) as e:
            message = describe_aws_error(
                e,
                "search logs",
                not_found=(
                    f'Log group "{logGroupName}" not found. '
                    "Use aws_list_log_groups to find available log groups."
                ),
            )
            if error_code(e) == "InvalidParameterException":
                message = f"Invalid filter pattern: {e}. Check CloudWatch filter pattern syntax."
            return failed("aws_search_logs", e, message)
        return {
            "count": len(events),
            "timeRange": {"start": _iso_ms(start), "end": _iso_ms(end)},
            "events": events,
        }

    @tool("aws_list_pipelines", args_schema=NoInput)
    async def aws_list_pipelines() -> dict[str, Any]:
        """List all CodePipeline pipelines in the configured AWS region. Returns pipeline names and versions. Use aws_get_pipeline_status with the pipeline name to see execution status and stage details."""
        if not client.has_credentials():
            return {"error": NOT_CONFIGURED}
        try:
            pipelines = await cached(CacheKeys.AWS_PIPELINES, client.list_pipelines)
        except (ClientError, BotoCoreError) as e:
            return failed(
                "aws_list_pipelines",
                e,
                describe_aws_error(
                    e,
                    "list pipelines",
                    access_denied=(
                        "Access denied to CodePipeline. Your IAM user may need "
                        "codepipeline:ListPipelines permission."
                    ),
                ),
            )
        return {"count": len(pipelines), "region": client.region, "pipelines": pipelines}

    @tool("aws_get_pipeline_status", args_schema=PipelineInput)
    async def aws_get_pipeline_status(pipelineName: str) -> dict[str, Any]:
        """Get the current execution status of a CodePipeline, including the status of each stage and action. Use aws_list_pipelines first to find pipeline names."""
        if not client.has_credentials():
            return {"error": NOT_CONFIGURED}
        try:
            return await run_in_threadpool(client.get_pipeline_status, pipelineName)
        except (ClientError, BotoCoreError) as e:
            return failed(
                "aws_get_pipeline_status",
                e,
                describe_aws_error(
                    e,
                    "get pipeline status",
                    not_found=(
                        f'Pipeline "{pipelineName}" not found. '
                        "Use aws_list_pipelines to find available pipelines."
                    ),
                ),
            )

    @tool("aws_list_lambda_functions", args_schema=NoInput)
    async def aws_list_lambda_functions() -> dict[str, Any]:
        """List all Lambda functions in the configured AWS region. Returns function names, runtimes, and basic configuration. Use aws_get_lambda_status for detailed information about a specific function."""
        if not client.has_credentials():
            return {"error": NOT_CONFIGURED}
        try:
            functions = await cached(CacheKeys.AWS_LAMBDAS, client.list_lambda_functions)
        except (ClientError, BotoCoreError) as e:
            return failed(
                "aws_list_lambda_functions",
                e,
                describe_aws_error(
                    e,
                    "list Lambda functions",
                    access_denied=(
                        "Access denied to Lambda. Your IAM user may need "
                        "lambda:ListFunctions permission."
                    ),
                ),
            )
        return {"count": len(functions), "region": client.region, "functions": functions}

    @tool("aws_get_lambda_status", args_schema=LambdaInput)
    async def aws_get_lambda_status(functionName: str) -> dict[str, Any]:
        """Get configuration and status of a Lambda function: runtime, memory, timeout, state and a console link."""
        if not client.has_credentials():
            return {"error": NOT_CONFIGURED}
        try:
            return await run_in_threadpool(client.get_lambda_status, functionName)
        except (ClientError, BotoCoreError, ValueError) as e:
            return failed(
                "aws_get_lambda_status",
                e,
                describe_aws_error(
                    e,
                    "get Lambda status",
                    not_found=(
                        f'Lambda function "{functionName}" not found. '
                        "Check the function name or ARN."
                    ),
                ),
            )

    @tool("aws_list_s3_buckets", args_schema=NoInput)
    async def aws_list_s3_buckets() -> dict[str, Any]:
        """List all S3 buckets in your AWS account. Returns bucket names and creation dates."""
        if not client.has_credentials():
            return {"error": NOT_CONFIGURED}
        try:
            buckets = await run_in_threadpool(client.list_s3_buckets)
        except (ClientError, BotoCoreError) as e:
            return failed(
                "aws_list_s3_buckets",
                e,
                describe_aws_error(
                    e,
                    "list S3 buckets",
                    access_denied=(
                        "Access denied to S3. Your IAM user may need "
                        "s3:ListAllMyBuckets permission."
                    ),
                ),
            )
        return {"count": len(buckets), "buckets": buckets}

    return [
        aws_list_log_groups,
        aws_search_logs,
        aws_list_pipelines,
        aws_get_pipeline_status,
        aws_list_lambda_functions,
        aws_get_lambda_status,
        aws_list_s3_buckets,
    ]
