"""
Resolver configuration.

The cascade thresholds were tuned empirically; the defaults here are the
values highlights have always been resolved with and should only be changed
together with a re-check of existing anchors.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TEXTANCHOR_CONFIG"


class ResolverConfig(BaseModel):
    """Thresholds and limits for anchor resolution."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Strategy 2: minimum average prefix/suffix similarity for a verbatim hit
    exact_context_threshold: float = Field(default=0.5, gt=0, le=1)
    # Strategy 3: fuzzy prefix/suffix location and validation of the span between
    prefix_threshold: float = Field(default=0.7, gt=0, le=1)
    suffix_threshold: float = Field(default=0.7, gt=0, le=1)
    span_similarity_threshold: float = Field(default=0.6, gt=0, le=1)
    prefix_fallback_threshold: float = Field(default=0.8, gt=0, le=1)
    # Strategy 4
    text_threshold: float = Field(default=0.75, gt=0, le=1)

    context_length: int = Field(default=80, ge=0)
    max_workers: int = Field(default=1, ge=1)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ResolverConfig":
        """Load configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if isinstance(data, dict) and "resolver" in data:
            data = data["resolver"] or {}
        return cls.model_validate(data)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"resolver": self.model_dump()}, f, default_flow_style=False)


def load_config(path: Optional[str | Path] = None) -> ResolverConfig:
    """
    Load resolver configuration.

    Args:
        path: YAML file to load. Falls back to the TEXTANCHOR_CONFIG
              environment variable (a local .env is honoured), then defaults.

    Returns:
        ResolverConfig
    """
    if path is None:
        load_dotenv(Path.cwd() / ".env")
        path = os.environ.get(CONFIG_ENV_VAR) or None

    if path is None:
        return ResolverConfig()

    logger.debug("Loading resolver config from %s", path)
    return ResolverConfig.from_yaml(path)
