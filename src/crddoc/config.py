"""⚙️ Generator Configuration - Pydantic models for crddoc settings.

Settings come from, lowest priority first:
1. Environment variables (`CRDDOC_TEMPLATE`, `CRDDOC_OUTPUT`)
2. A YAML config file (`--config crddoc.yaml`)
3. Command line flags

Example YAML:
    template: hack/api-docs.tmpl
    output: docs/api.md
    words: [alpha, beta, gamma]
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from .docs.examples import DEFAULT_WORDS


class GeneratorConfig(BaseModel):
    """Configuration for one documentation run."""

    template: Path | None = Field(
        default=None, description="Jinja2 template file (default: built-in Markdown)"
    )
    output: Path | None = Field(
        default=None, description="Output file (default: stdout)"
    )
    words: list[str] = Field(
        default_factory=lambda: list(DEFAULT_WORDS),
        description="Placeholder words used for string examples",
    )
    verbose: bool = Field(default=False, description="Report build steps")

    @field_validator("words")
    @classmethod
    def words_not_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("words must contain at least one word")
        return v

    @classmethod
    def from_yaml(cls, path: Path | str) -> "GeneratorConfig":
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def merged(self, **overrides) -> "GeneratorConfig":
        """Return a copy with every non-None override applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        return self.model_copy(update=updates)


class Settings(BaseSettings):
    """Environment-based settings."""

    template: Path | None = Field(default=None)
    output: Path | None = Field(default=None)

    class Config:
        env_prefix = "CRDDOC_"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings from environment."""
    return Settings()


def load_config(
    path: Path | str | None = None, settings: Settings | None = None
) -> GeneratorConfig:
    """Build the generator configuration from environment and config file.

    Args:
        path: Optional YAML config file
        settings: Environment settings (default: read from environment)

    Returns:
        GeneratorConfig
    """
    settings = settings or get_settings()
    config = GeneratorConfig(template=settings.template, output=settings.output)

    if path is not None:
        from_file = GeneratorConfig.from_yaml(path)
        config = config.merged(**from_file.model_dump(exclude_unset=True))

    return config
