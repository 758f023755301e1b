"""Settings loading entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Mapping

from .models import DEFAULT_CONFIG_PATH, InwrapSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> InwrapSettings:
    """Load settings with ``cli_params`` overriding env, YAML, and defaults.

    A missing YAML file is skipped.
    """
    resolved_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    class _LoadedSettings(InwrapSettings):
        _config_path: ClassVar[Path] = resolved_path

    return _LoadedSettings(**dict(cli_params or {}))
