"""Environment-backed settings primitives for :mod:`greendex`."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["GreendexSettings", "LogFormat", "get_settings"]

LogFormat = Literal["json", "text"]


class GreendexSettings(BaseSettings):
    """Expose environment-derived configuration knobs for Greendex.

    The calculator itself is not configurable; these settings only steer the
    command line and its logging. Malformed values fall back to defaults.

    Attributes:
        log_level: Logging level name applied by the CLI.
        log_format: ``json`` for structured records, ``text`` for plain lines.
        activities_file: Default project activities file used when the CLI is
            not given ``--activities``.
    """

    log_level: str = Field(default="INFO", alias="GREENDEX_LOG_LEVEL")
    log_format: LogFormat = Field(default="json", alias="GREENDEX_LOG_FORMAT")
    activities_file: str | None = Field(default=None, alias="GREENDEX_ACTIVITIES_FILE")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_log_level(cls, value: object) -> str:
        """Normalise level names, tolerating unknown input.

        Args:
            value: Raw environment value.

        Returns:
            Upper-case level name known to :mod:`logging`, otherwise ``INFO``.
        """

        if isinstance(value, str):
            candidate = value.strip().upper()
            if isinstance(logging.getLevelNamesMapping().get(candidate), int):
                return candidate
        return "INFO"

    @field_validator("log_format", mode="before")
    @classmethod
    def _parse_log_format(cls, value: object) -> str:
        if isinstance(value, str) and value.strip().lower() in {"json", "text"}:
            return value.strip().lower()
        return "json"

    @field_validator("activities_file", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> str | None:
        if value in (None, ""):
            return None
        return str(value)

    @property
    def log_level_number(self) -> int:
        """Return the numeric logging level."""

        return logging.getLevelNamesMapping()[self.log_level]


def get_settings() -> GreendexSettings:
    """Return a :class:`GreendexSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return GreendexSettings()
