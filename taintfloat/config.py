"""Settings from TAINTFLOAT_* environment variables, via pydantic-settings.

Invariants:
    - get_settings() is cached; the float types read it once, at import
    - diagnostics defaults to __debug__, so `python -O` selects the release build
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TAINTFLOAT_", case_sensitive=False)

    # Register a diagnostic for every new NaN and decode payloads on sanitize.
    diagnostics: bool = __debug__

    # "unbounded": verified values exclude NaN only.
    # "bounded": verified values exclude NaN and both infinities.
    policy: Literal["unbounded", "bounded"] = "unbounded"

    # Record the first caller outside this package in each diagnostic.
    capture_location: bool = True

    @field_validator("policy", mode="before")
    @classmethod
    def normalize_policy(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
