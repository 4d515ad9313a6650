"""Configuration for the plan tracker.

Provides PlanTrackerSettings plus global and context-based accessors.

Settings Management:
    1. Global singleton (simple cases):
        set_settings(my_settings)
        settings = get_settings()

    2. Context-based (isolated contexts, tests):
        with SettingsContext(my_settings):
            settings = get_settings()  # Returns my_settings

Settings Loading Priority (highest to lowest):
    1. Constructor arguments
    2. Environment variables (PLAN_TRACKER_* prefix)
    3. Project config (./.plan_tracker/settings.json)
    4. User config (~/.plan_tracker/settings.json)
    5. .env file
    6. Default values
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from pathlib import Path
from typing import Generator, Literal, Tuple, Type

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings as PydanticBaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from plan_tracker.constants import TOOL_NAME, WIDGET_KEY

__all__ = [
    "PlanTrackerSettings",
    "SettingsContext",
    "get_settings",
    "set_settings",
    "set_context_settings",
    "get_context_settings",
    "reload_settings",
]

APP_NAME = "plan_tracker"


def _get_json_config_source(
    settings_cls: Type[PydanticBaseSettings],
    json_file: Path,
) -> PydanticBaseSettingsSource | None:
    """Create a JSON config source if the file exists."""
    if not json_file.exists():
        return None
    return JsonConfigSettingsSource(settings_cls, json_file=json_file)


class PlanTrackerSettings(PydanticBaseSettings):
    """Settings for the plan tracker tool and its widget.

    Loaded from (in order of precedence) constructor arguments,
    PLAN_TRACKER_* environment variables, project and user JSON files,
    a .env file, then defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="PLAN_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default=APP_NAME,
        title="App Name",
        description="Application name, used to locate JSON config files",
    )

    # Tool identity
    tool_name: str = Field(
        default=TOOL_NAME,
        title="Tool Name",
        description="Tool name registered with the host and matched during history replay",
    )
    widget_key: str = Field(
        default=WIDGET_KEY,
        title="Widget Key",
        description="Key of the progress widget on the host display",
    )
    show_widget: bool = Field(
        default=True,
        title="Show Widget",
        description="Show the live progress widget while a plan is active",
    )

    # Logging configuration
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
    )

    @field_validator("tool_name", "widget_key")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Reject empty identifiers."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[PydanticBaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Layer JSON config files between env vars and the .env file.

        JSON sources are only included if the files exist.
        """
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]

        project_json = _get_json_config_source(
            settings_cls,
            Path.cwd() / f".{APP_NAME}" / "settings.json",
        )
        if project_json:
            sources.append(project_json)

        user_json = _get_json_config_source(
            settings_cls,
            Path.home() / f".{APP_NAME}" / "settings.json",
        )
        if user_json:
            sources.append(user_json)

        sources.append(dotenv_settings)
        return tuple(sources)


# Context variable for settings (takes precedence over global singleton)
_settings_context: ContextVar[PlanTrackerSettings | None] = ContextVar(
    "settings_context", default=None
)

# Global settings instance holder (fallback when no context)
_settings_instance: PlanTrackerSettings | None = None


def get_settings() -> PlanTrackerSettings:
    """Get the current settings instance.

    Resolution order:
    1. Context variable (set via SettingsContext or set_context_settings)
    2. Global singleton (set via set_settings)
    3. Fresh PlanTrackerSettings instance (created on first access)
    """
    context_settings = _settings_context.get()
    if context_settings is not None:
        return context_settings

    global _settings_instance
    if _settings_instance is None:
        _settings_instance = PlanTrackerSettings()
    return _settings_instance


def set_settings(settings: PlanTrackerSettings) -> None:
    """Set the global settings instance."""
    global _settings_instance
    _settings_instance = settings


def set_context_settings(settings: PlanTrackerSettings | None) -> Token:
    """Set settings for the current context.

    Args:
        settings: Settings to use in current context, or None to clear

    Returns:
        Token that can be used to reset the context variable.
    """
    return _settings_context.set(settings)


def get_context_settings() -> PlanTrackerSettings | None:
    """Get settings from current context (if any)."""
    return _settings_context.get()


@contextmanager
def SettingsContext(settings: PlanTrackerSettings) -> Generator[PlanTrackerSettings, None, None]:
    """Context manager for isolated settings.

    Example:
        with SettingsContext(test_settings) as s:
            tracker = PlanTracker()  # Uses test_settings
    """
    token = _settings_context.set(settings)
    try:
        yield settings
    finally:
        _settings_context.reset(token)


def reload_settings() -> PlanTrackerSettings:
    """Reload settings (clears global singleton and context)."""
    global _settings_instance
    _settings_instance = None
    _settings_context.set(None)
    return get_settings()
