"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

Theme = Literal["classic", "modern"]


class LoggingConfig(BaseModel):
    level: str = "INFO"

    model_config = ConfigDict(extra="forbid")


class ValidationConfig(BaseModel):
    schema_path: str | None = None
    extra_formats: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class ExportConfig(BaseModel):
    default_format: str = "cfrs"
    theme: Theme = "classic"

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        validation = self.validation.model_dump(exclude_none=True, exclude_defaults=True)
        if validation:
            settings["validation"] = validation
        settings["export"] = self.export.model_dump()
        return settings


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
