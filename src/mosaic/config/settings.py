"""Environment-driven application settings.

All values are loaded from environment variables (prefix ``MOSAIC_``) or a
``.env`` file in the working directory.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RenderSettings(BaseSettings):
    """Terminal rendering of the grid."""

    model_config = SettingsConfigDict(env_prefix="MOSAIC_RENDER_")

    cell_width: int = Field(default=2, ge=1, le=8)
    """Characters per cell; two roughly squares a cell in most fonts."""
    on_glyph: str = Field(default="█", min_length=1, max_length=1)
    off_glyph: str = Field(default="█", min_length=1, max_length=1)
    show_border: bool = True


class Settings(BaseSettings):
    """Top-level settings aggregator."""

    model_config = SettingsConfigDict(
        env_prefix="MOSAIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = "http://localhost:8000/mosaic/"
    """Bare page URL that share links are built on."""
    token_param: str = Field(default="cfg", min_length=1)
    """Query key that carries the compact token."""

    render: RenderSettings = Field(default_factory=RenderSettings)


# Module-level singleton; import and use directly.
settings = Settings()


def get_settings() -> Settings:
    """Return the module-level Settings singleton."""
    return settings
