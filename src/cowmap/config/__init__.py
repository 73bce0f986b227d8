"""Configuration module using Pydantic Settings.

Provides typed configuration for maps with environment variable support.

Usage:
    from cowmap.config import CowMapSettings

    settings = CowMapSettings(warn_on_promotion=True)
"""

from cowmap.config.settings import CowMapSettings

__all__ = [
    "CowMapSettings",
]
