from chathub.api.deps.dependencies import (
    get_chat_model_factory,
    get_chat_service,
    get_chat_stream_service,
    get_connector_cache,
    get_connector_service,
    get_context_service,
    get_folder_service,
    get_settings_service,
)

__all__ = [
    "get_chat_model_factory",
    "get_chat_service",
    "get_chat_stream_service",
    "get_connector_cache",
    "get_connector_service",
    "get_context_service",
    "get_folder_service",
    "get_settings_service",
]
