"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_card_generator,
    get_card_service,
    get_current_user_id,
    get_deck_service,
    get_generation_runner,
    get_generation_service,
    get_generation_session_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "get_card_generator",
    "get_card_service",
    "get_current_user_id",
    "get_deck_service",
    "get_generation_runner",
    "get_generation_service",
    "get_generation_session_service",
    "get_service_cache",
    "get_settings_dependency",
]
