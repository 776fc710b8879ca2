"""
Connector API endpoints.

Routes:
- GET /connectors - All connector types with status
- GET /connectors/{type} - Metadata, fields and masked config
- PUT /connectors/{type} - Save config
- DELETE /connectors/{type} - Remove config
- POST /connectors/{type}/test - Run connection test

Dependencies: chathub.application.services, chathub.models
System role: Connector configuration HTTP API
"""

import logging

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from chathub.api.deps.dependencies import get_connector_service
from chathub.api.routers.error_handling import handle_api_errors
from chathub.application.services.connector_service import ConnectorService
from chathub.core.exceptions import ConnectorError, ValidationError
from chathub.models.common import SuccessResponse
from chathub.models.connector import (
    ConnectionTestResponse,
    ConnectorDetailResponse,
    ConnectorSummaryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/connectors", tags=["connectors"])


@router.get("", response_model=list[ConnectorSummaryResponse])
@handle_api_errors
async def list_connectors(
    connector_service: ConnectorService = Depends(get_connector_service),
) -> list[ConnectorSummaryResponse]:
    return await connector_service.list_connectors()


@router.get("/{type}", response_model=ConnectorDetailResponse)
@handle_api_errors
async def get_connector(
    type: str,
    connector_service: ConnectorService = Depends(get_connector_service),
) -> ConnectorDetailResponse:
    """
    Connector metadata with password fields masked.

    Raises:
        HTTPException(400): Invalid connector type
    """
    return await connector_service.get_connector(type)


@router.put("/{type}", response_model=ConnectorSummaryResponse)
@handle_api_errors
async def save_connector(
    type: str,
    body: dict = Body(...),
    connector_service: ConnectorService = Depends(get_connector_service),
) -> ConnectorSummaryResponse:
    """
    Save connector config, merging with the stored values.

    The body is read as a plain object so a missing or malformed config
    is reported with the connector's own messages.

    Raises:
        HTTPException(400): Invalid type, missing config or required field
    """
    enabled = body.get("enabled")
    if enabled is not None and not isinstance(enabled, bool):
        raise ValidationError("enabled must be a boolean", field="enabled")
    return await connector_service.save_connector(type, body.get("config"), enabled)


@router.delete("/{type}", response_model=SuccessResponse)
@handle_api_errors
async def delete_connector(
    type: str,
    connector_service: ConnectorService = Depends(get_connector_service),
) -> SuccessResponse:
    await connector_service.delete_connector(type)
    return SuccessResponse()


@router.post("/{type}/test", response_model=ConnectionTestResponse)
@handle_api_errors
async def test_connector(
    type: str,
    connector_service: ConnectorService = Depends(get_connector_service),
):
    """
    Test a configured connector.

    Failures to run the test are returned as ``{success: false, error}``:
    400 when the connector is unknown or not configured, 500 when it
    cannot be instantiated.
    """
    try:
        result = await connector_service.test_connector(type)
    except ValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": str(e)},
        )
    except ConnectorError as e:
        logger.error("Connector test could not run", extra={"connector_type": type, "error": str(e)})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(e)},
        )
    return ConnectionTestResponse(success=result.success, error=result.error)
