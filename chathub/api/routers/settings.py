"""
Settings and user context API endpoints.

Routes:
- GET /settings, PATCH /settings
- GET /context, PUT /context

Dependencies: chathub.application.services, chathub.models
System role: Preferences HTTP API
"""

import logging

from fastapi import APIRouter, Body, Depends

from chathub.api.deps.dependencies import get_context_service, get_settings_service
from chathub.api.routers.error_handling import handle_api_errors
from chathub.application.services.settings_service import ContextService, SettingsService
from chathub.core.exceptions import ValidationError
from chathub.models.settings import SettingsResponse, UpdateSettingsRequest, UserContextResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["settings"])


@router.get("/settings", response_model=SettingsResponse)
@handle_api_errors
async def get_app_settings(
    settings_service: SettingsService = Depends(get_settings_service),
) -> SettingsResponse:
    """Settings, created with defaults on first read."""
    return await settings_service.get_settings()


@router.patch("/settings", response_model=SettingsResponse)
@handle_api_errors
async def update_app_settings(
    request: UpdateSettingsRequest,
    settings_service: SettingsService = Depends(get_settings_service),
) -> SettingsResponse:
    """
    Partially update settings.

    Raises:
        HTTPException(400): Unknown model id
    """
    return await settings_service.update_settings(request.model_dump(exclude_unset=True))


@router.get("/context", response_model=UserContextResponse)
@handle_api_errors
async def get_user_context(
    context_service: ContextService = Depends(get_context_service),
) -> UserContextResponse:
    """User context document, seeded with a template on first read."""
    return await context_service.get_context()


@router.put("/context", response_model=UserContextResponse)
@handle_api_errors
async def update_user_context(
    body: dict = Body(...),
    context_service: ContextService = Depends(get_context_service),
) -> UserContextResponse:
    """
    Replace the user context document.

    Raises:
        HTTPException(400): Missing content
    """
    content = body.get("content")
    if content is not None and not isinstance(content, str):
        raise ValidationError("Content must be a string", field="content")
    return await context_service.update_context(content)
