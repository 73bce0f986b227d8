"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for maps.

Usage:
    from cowmap.config import CowMapSettings

    # Load from environment variables (COWMAP_*)
    settings = CowMapSettings()

    # Or override with explicit values
    settings = CowMapSettings(clone_depth=CloneDepth.SHALLOW)
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cowmap.core.entry import CloneDepth


class CowMapSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for copy-on-write maps.

    Attributes:
        clone_depth: Fallback clone for values without __clone__ (DEEP, SHALLOW).
        default_capacity: Initial capacity hint for new maps.
        warn_on_promotion: Issue PromotionWarning on every borrowed -> owned clone.

    Environment Variables:
        COWMAP_CLONE_DEPTH (deep or shallow)
        COWMAP_DEFAULT_CAPACITY
        COWMAP_WARN_ON_PROMOTION
    """

    model_config = SettingsConfigDict(
        env_prefix="COWMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    clone_depth: CloneDepth = CloneDepth.DEEP
    default_capacity: int = Field(default=0, ge=0)
    warn_on_promotion: bool = False

    @field_validator("clone_depth", mode="before")
    @classmethod
    def _parse_clone_depth(cls, value: object) -> object:
        # Enum members are auto() ints, so accept their names from env vars
        if isinstance(value, str):
            try:
                return CloneDepth[value.strip().upper()]
            except KeyError:
                raise ValueError(
                    f"clone_depth must be one of {[d.name.lower() for d in CloneDepth]}"
                ) from None
        return value
