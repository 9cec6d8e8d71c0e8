"""Configuration management module."""

from .settings import ClinicSettings, get_settings, load_env_variables, reset_settings

__all__ = [
    "ClinicSettings",
    "get_settings",
    "load_env_variables",
    "reset_settings",
]
