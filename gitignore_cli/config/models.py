"""Pydantic models describing gitignore-cli runtime configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_API_BASE = "https://api.github.com"
DEFAULT_RAW_BASE = "https://raw.githubusercontent.com"
DEFAULT_USER_AGENT = "gitignore-cli"


class GlobalConfig(BaseModel):
    """Settings controlling where templates come from and how output is written."""

    api_base: str = DEFAULT_API_BASE
    raw_base: str = DEFAULT_RAW_BASE
    repository: str = "github/gitignore"
    ref: str = "main"
    template_suffix: str = ".gitignore"
    request_timeout: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT
    # None keeps one worker per resolved template
    max_workers: int | None = None
    ordered_output: bool = False
    overwrite: bool = False
    output_path: Path = Field(default=Path(".gitignore"))
    log_file: Path | None = None

    @field_validator("api_base", "raw_base", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("Base URLs must use http:// or https://")
        return value

    @field_validator("repository", mode="after")
    @classmethod
    def _validate_repository(cls, value: str) -> str:
        value = value.strip().strip("/")
        owner, sep, name = value.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError("repository must look like 'owner/name'")
        return value

    @field_validator("output_path", "log_file", mode="before")
    @classmethod
    def _coerce_path(cls, value: Any) -> Any:
        if value in (None, ""):
            return None
        return Path(value)

    @model_validator(mode="after")
    def _validate_limits(self) -> "GlobalConfig":
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be >= 1 or null")
        if not self.template_suffix:
            raise ValueError("template_suffix cannot be empty")
        return self

    @property
    def commit_url(self) -> str:
        return f"{self.api_base}/repos/{self.repository}/commits/{self.ref}"

    def tree_url(self, sha: str) -> str:
        return f"{self.api_base}/repos/{self.repository}/git/trees/{sha}"

    def template_url(self, canonical_name: str) -> str:
        return f"{self.raw_base}/{self.repository}/{self.ref}/{canonical_name}{self.template_suffix}"


__all__ = ["DEFAULT_API_BASE", "DEFAULT_RAW_BASE", "DEFAULT_USER_AGENT", "GlobalConfig"]
