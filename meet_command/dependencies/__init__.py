"""Expose dependency helpers for FastAPI routers."""

from .clients import build_object_store, build_orchestrator, get_meet_command_orchestrator
from .config import SettingsDependency, get_app_settings

__all__ = [
    "SettingsDependency",
    "build_object_store",
    "build_orchestrator",
    "get_app_settings",
    "get_meet_command_orchestrator",
]
