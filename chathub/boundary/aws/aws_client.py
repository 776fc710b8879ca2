"""
AWS client for the AWS connector.

Thin synchronous wrapper over the boto3 clients the connector needs
(CloudWatch Logs, CodePipeline, Lambda, S3). Responses are reduced to
JSON-serializable dicts; callers run these methods in a threadpool.

Dependencies: boto3
System role: Boundary to AWS APIs for connector tools
"""

from datetime import datetime, timezone
from typing import Any

import boto3


def _iso(value: Any) -> str | None:
    """ISO-format a boto3 datetime or an epoch-milliseconds integer."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc).isoformat()


class AWSClient:
    """boto3-backed client built from connector credentials."""

    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        region: str,
    ) -> None:
        """
        Initialize AWS clients.

        Args:
            access_key_id: IAM access key id
            secret_access_key: IAM secret access key
            region: AWS region for regional services
        """
        self.region = region
        self._credentials = {
            "aws_access_key_id": access_key_id,
            "aws_secret_access_key": secret_access_key,
        }
        self._session = boto3.session.Session(region_name=region, **self._credentials)
        self._clients: dict[str, Any] = {}

    def has_credentials(self) -> bool:
        return all((
            self._credentials["aws_access_key_id"],
            self._credentials["aws_secret_access_key"],
            self.region,
        ))

    def _client(self, service: str) -> Any:
        if service not in self._clients:
            self._clients[service] = self._session.client(service)
        return self._clients[service]

    # CloudWatch Logs

    def list_log_groups(self, prefix: str | None = None) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"limit": 50}
        if prefix:
            params["logGroupNamePrefix"] = prefix
        response = self._client("logs").describe_log_groups(**params)
        return [
            {
                "name": group.get("logGroupName"),
                "storedBytes": group.get("storedBytes"),
                "retentionInDays": group.get("retentionInDays"),
                "createdAt": _iso(group.get("creationTime")),
                "arn": group.get("arn"),
            }
            for group in response.get("logGroups", [])
        ]

    def search_logs(
        self,
        log_group_name: str,
        filter_pattern: str,
        start_time: int,
        end_time: int,
        limit: int = 50,
    ) -> list[dict[str, Any]]:
        """
        Filter log events in a log group.

        Args:
            log_group_name: Full log group name
            filter_pattern: CloudWatch filter pattern
            start_time: Start of range, epoch milliseconds
            end_time: End of range, epoch milliseconds
            limit: Maximum number of events

        Returns:
            list[dict]: timestamp, message, logStreamName per event

        Raises:
            ClientError: On AWS API failure
        """
        response = self._client("logs").filter_log_events(
            logGroupName=log_group_name,
            filterPattern=filter_pattern,
            startTime=start_time,
            endTime=end_time,
            limit=limit,
        )
        return [
            {
                "timestamp": _iso(event.get("timestamp")),
                "message": event.get("message"),
                "logStreamName": event.get("logStreamName"),
            }
            for event in response.get("events", [])
        ]

    # CodePipeline

    def list_pipelines(self) -> list[dict[str, Any]]:
        response = self._client("codepipeline").list_pipelines()
        return [
            {
                "name": pipeline.get("name"),
                "version": pipeline.get("version"),
                "created": _iso(pipeline.get("created")),
                "updated": _iso(pipeline.get("updated")),
            }
            for pipeline in response.get("pipelines", [])
        ]

    def get_pipeline_status(self, pipeline_name: str) -> dict[str, Any]:
        response = self._client("codepipeline").get_pipeline_state(name=pipeline_name)
        stages = []
        for stage in response.get("stageStates", []):
            latest = stage.get("latestExecution", {})
            stages.append({
                "stageName": stage.get("stageName"),
                "status": latest.get("status"),
                "pipelineExecutionId": latest.get("pipelineExecutionId"),
                "actions": [
                    {
                        "actionName": action.get("actionName"),
                        "status": action.get("latestExecution", {}).get("status"),
                        "summary": action.get("latestExecution", {}).get("summary"),
                        "lastStatusChange": _iso(
                            action.get("latestExecution", {}).get("lastStatusChange")
                        ),
                        "externalExecutionUrl": action.get("latestExecution", {}).get(
                            "externalExecutionUrl"
                        ),
                    }
                    for action in stage.get("actionStates", [])
                ],
            })
        return {
            "pipelineName": response.get("pipelineName", pipeline_name),
            "stageCount": len(stages),
            "stages": stages,
        }

    # Lambda

    def list_lambda_functions(self) -> list[dict[str, Any]]:
        """List every Lambda function, following NextMarker pagination."""
        functions: list[dict[str, Any]] = []
        params: dict[str, Any] = {"MaxItems": 50}
        while True:
            response = self._client("lambda").list_functions(**params)
            for fn in response.get("Functions", []):
                functions.append({
                    "functionName": fn.get("FunctionName"),
                    "runtime": fn.get("Runtime"),
                    "memorySize": fn.get("MemorySize"),
                    "timeout": fn.get("Timeout"),
                    "codeSize": fn.get("CodeSize"),
                    "description": fn.get("Description") or "(No description)",
                    "lastModified": fn.get("LastModified"),
                    "state": fn.get("State"),
                })
            marker = response.get("NextMarker")
            if not marker:
                return functions
            params["Marker"] = marker

    def get_lambda_status(self, function_name: str) -> dict[str, Any]:
        response = self._client("lambda").get_function(FunctionName=function_name)
        fn = response.get("Configuration")
        if not fn:
            raise ValueError(f"Lambda function {function_name} not found")
        variables = fn.get("Environment", {}).get("Variables", {})
        name = fn.get("FunctionName", function_name)
        return {
            "functionName": name,
            "functionArn": fn.get("FunctionArn"),
            "runtime": fn.get("Runtime"),
            "handler": fn.get("Handler"),
            "codeSize": fn.get("CodeSize"),
            "description": fn.get("Description") or "(No description)",
            "timeout": fn.get("Timeout"),
            "memorySize": fn.get("MemorySize"),
            "lastModified": fn.get("LastModified"),
            "state": fn.get("State"),
            "stateReason": fn.get("StateReason"),
            "version": fn.get("Version"),
            "environmentVariableCount": len(variables),
            "consoleUrl": (
                f"https://{self.region}.console.aws.amazon.com/lambda/home"
                f"?region={self.region}#/functions/{name}"
            ),
        }

    # S3

    def list_s3_buckets(self) -> list[dict[str, Any]]:
        response = self._client("s3").list_buckets()
        return [
            {"name": bucket.get("Name"), "creationDate": _iso(bucket.get("CreationDate"))}
            for bucket in response.get("Buckets", [])
        ]

    def test_connection(self) -> None:
        """Raise if the credentials cannot list pipelines."""
        self.list_pipelines()
