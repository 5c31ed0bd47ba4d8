from functools import cached_property
from typing import Any

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from sasswatch.config.groups import SassOptions, WatcherConfig
from sasswatch.errors import InvalidConfigurationError


class Settings(BaseSettings):
    """
    sasswatch settings

    Environment variables use the SASSWATCH_ prefix, e.g. SASSWATCH_INPUT,
    SASSWATCH_SMART_PARTIALS. A local ``.env`` file is read when present.

    Grouped access:
        settings.sass     # SassOptions
        settings.watcher  # WatcherConfig
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SASSWATCH_",
        extra="ignore",
    )

    @cached_property
    def sass(self) -> SassOptions:
        """Guard and compiler options."""
        return SassOptions(
            input=self.input,
            output=self.output,
            load_paths=self._parse_list(self.load_paths),
            smart_partials=self.smart_partials,
            all_on_start=self.all_on_start,
            extension=self.extension,
            style=self.style,
            shallow=self.shallow,
            noop=self.noop,
            hide_success=self.hide_success,
            sass_executable=self.sass_executable,
        )

    @cached_property
    def watcher(self) -> WatcherConfig:
        """Watch host settings."""
        return WatcherConfig(
            debounce_ms=self.debounce_ms,
            max_batch_window_ms=self.max_batch_window_ms,
        )

    @staticmethod
    def _parse_list(value: str) -> list[str]:
        """Comma separated string -> list."""
        return [p.strip() for p in value.split(",") if p.strip()]

    # ========================================================================
    # Sass
    # ========================================================================
    input: str | None = None
    output: str | None = None  # None = same as input
    load_paths: str = ""  # comma separated
    smart_partials: bool = False
    all_on_start: bool = False
    extension: str = ".css"
    style: str = "expanded"
    shallow: bool = False
    noop: bool = False
    hide_success: bool = False
    sass_executable: str = "sass"

    # ========================================================================
    # Watcher
    # ========================================================================
    debounce_ms: int = 300
    max_batch_window_ms: int = 5000

    # ========================================================================
    # Logging
    # ========================================================================
    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"


def resolve_options(settings: Settings, **overrides: Any) -> SassOptions:
    """
    ``settings.sass`` with explicit overrides (e.g. CLI flags) applied on top.

    None means "not given". An overridden ``input`` also moves ``output``
    unless an output was configured explicitly.

    Raises:
        InvalidConfigurationError: The merged options do not validate
    """
    given = {k: v for k, v in overrides.items() if v is not None}
    try:
        data = settings.sass.model_dump()
        if "input" in given and "output" not in given and settings.output is None:
            data["output"] = None
        data.update(given)
        return SassOptions(**data)
    except ValidationError as e:
        raise InvalidConfigurationError("Invalid sass options", {"errors": e.errors(include_url=False)}) from e
