"""Library settings via Pydantic BaseSettings.

All configuration uses the TVG_ environment variable prefix.
Centralized here so search bounds and export paths are not hardcoded
across the codebase.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class SearchSettings(BaseSettings):
    """Path exploration defaults."""

    model_config = {"env_prefix": "TVG_SEARCH_"}

    # Branch history length at which expansion stops
    default_max_depth: int = Field(default=3, ge=0)

    # Bounded result channel; a full channel blocks the search worker
    channel_capacity: int = Field(default=50, ge=1)

    # Also collect reverse-direction intervals on every hop
    bidirectional: bool = False

    # How long closing a stream waits for its worker thread (seconds)
    join_timeout_s: float = 5.0


class ExportSettings(BaseSettings):
    """Debug export settings."""

    model_config = {"env_prefix": "TVG_EXPORT_"}

    dot_path: str = "tvg.dot"
    dot_edge_labels: bool = False


class Settings(BaseSettings):
    """Root settings."""

    model_config = {"env_prefix": "TVG_"}

    search: SearchSettings = Field(default_factory=SearchSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
