"""
Settings and user context services.

Both are singleton rows created with defaults on first read.

Dependencies: chathub.boundary.db.CRUD, chathub.configs
System role: Preferences use case orchestration
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from chathub.boundary.db.CRUD.singleton_crud import settings_crud, user_context_crud
from chathub.boundary.db.models.singleton_models import AppSettingsModel, UserContextModel
from chathub.configs import get_settings
from chathub.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_USER_CONTEXT = """# About Me

<!-- Edit this section with information about yourself -->
- Name:
- Role:
- Team:

# Key Identifiers

<!-- These help the AI find your stuff across services -->
- GitHub username:
- Jira assignee name:
- Email address:

# Projects & Repositories

<!-- List the repos, Jira projects, and AWS resources you work with most -->

# Preferences

<!-- How do you like responses? Any specific formatting preferences? -->
- Preferred response style: concise / detailed
- Timezone:
"""


def _settings_to_dict(row: AppSettingsModel) -> dict[str, Any]:
    return {
        "selected_model": row.selected_model,
        "system_prompt": row.system_prompt,
        "sidebar_collapsed": row.sidebar_collapsed,
        "updated_at": row.updated_at,
    }


def _context_to_dict(row: UserContextModel) -> dict[str, Any]:
    return {"content": row.content, "updated_at": row.updated_at}


class SettingsService:
    """Application settings orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_settings(self) -> dict[str, Any]:
        row = await settings_crud.get_or_create(self.db)
        return _settings_to_dict(row)

    async def update_settings(self, updates: dict[str, Any]) -> dict[str, Any]:
        """
        Partially update settings, creating the row if absent.

        Args:
            updates: Subset of selected_model, system_prompt, sidebar_collapsed;
                None values are ignored

        Raises:
            ValidationError: If ``selected_model`` is not a known model id
        """
        values = {key: value for key, value in updates.items() if value is not None}
        model = values.get("selected_model")
        if model is not None and model not in get_settings().llm.models:
            raise ValidationError(f"Unknown model: {model}", field="selectedModel")

        row = await settings_crud.upsert(self.db, **values)
        logger.info("Settings updated", extra={"fields": sorted(values)})
        return _settings_to_dict(row)


class ContextService:
    """User context orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_context(self) -> dict[str, Any]:
        """User context Markdown, seeded with a template on first read."""
        row = await user_context_crud.get_or_create(self.db, content=DEFAULT_USER_CONTEXT)
        return _context_to_dict(row)

    async def update_context(self, content: str | None) -> dict[str, Any]:
        """
        Replace the user context.

        Raises:
            ValidationError: If ``content`` is missing (empty is allowed)
        """
        if content is None:
            raise ValidationError("Content is required", field="content")
        row = await user_context_crud.upsert(self.db, content=content)
        logger.info("User context updated", extra={"content_length": len(content)})
        return _context_to_dict(row)
