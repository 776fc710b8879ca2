"""
Configuration for ChatHub.

Settings groups are read from environment variables and ``.env``:
``POSTGRES_*`` (database), ``LLM_*`` (Bedrock models), ``CHATHUB_*``
(credential encryption), ``SERP_API_KEY`` and ``OPEN_WEATHER_API_KEY``
(optional tool keys) plus the top-level ``LOG_LEVEL``, ``ENVIRONMENT`` and
``CORS_ORIGINS``.
"""

from chathub.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
