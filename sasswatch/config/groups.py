"""
Option groups.

``SassOptions`` is what the guard and the compiler consume; ``WatcherConfig``
tunes the watch host. Both are usable on their own and are assembled by
``Settings``.
"""

from pathlib import PurePosixPath
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_OUTPUT = "css"


class SassOptions(BaseModel):
    """Guard and compiler options."""

    input: str | None = Field(default=None, description="Input directory to watch and compile")
    output: str = Field(default=DEFAULT_OUTPUT, description="Output directory (defaults to input)")
    load_paths: list[str] = Field(default_factory=list, description="Extra directories to @import from")
    smart_partials: bool = Field(default=False, description="Resolve changed partials to their owners")
    all_on_start: bool = Field(default=False, description="Build everything when the guard starts")
    extension: str = Field(default=".css", description="Output file extension")
    style: Literal["expanded", "compressed"] = Field(default="expanded", description="Output style")
    shallow: bool = Field(default=False, description="Flatten the output tree")
    noop: bool = Field(default=False, description="Validate only, write nothing")
    hide_success: bool = Field(default=False, description="Hide per-file success messages")
    sass_executable: str = Field(default="sass", description="Sass compiler executable")

    @model_validator(mode="before")
    @classmethod
    def _output_defaults_to_input(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("output") is not None:
            return data
        data = {k: v for k, v in data.items() if k != "output"}
        if data.get("input"):
            data["output"] = data["input"]
        return data

    @field_validator("input")
    @classmethod
    def _strip_input(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = PurePosixPath(v).as_posix() if v.strip() else ""
        if not v or v == ".":
            raise ValueError("input must name a directory")
        return v

    @field_validator("extension")
    @classmethod
    def _dotted_extension(cls, v: str) -> str:
        if not v.startswith("."):
            return f".{v}"
        return v


class WatcherConfig(BaseModel):
    """Watch host settings."""

    debounce_ms: int = Field(default=300, ge=50, le=5000, description="Debounce (ms)")
    max_batch_window_ms: int = Field(default=5000, ge=500, le=30000, description="Max batch window (ms)")
    recursive: bool = Field(default=True, description="Watch subdirectories")
