"""Visibility engine configuration via pydantic-settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class EngineSettings(BaseSettings):
    environment: str = "development"
    envelope_key: str = "show_when"
    # Governs both parse and serialize
    flatten_nested_groups: bool = True
    trace_evaluations: bool = False

    model_config = {"env_prefix": "FORMS_", "env_file": ".env", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() in {"prod", "production"}


settings = EngineSettings()
