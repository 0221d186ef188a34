"""
Content curator backend: configuration, persistence, and services.

Usage:
    from backend import get_state
    state = get_state()
    state.feed.random_recommendations(20)
"""

from .config import BackendConfig, configure_logging, get_config, reload_config
from .state import AppState, get_state, reset_state

__all__ = [
    "AppState",
    "BackendConfig",
    "configure_logging",
    "get_config",
    "get_state",
    "reload_config",
    "reset_state",
]
