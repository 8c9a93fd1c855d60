"""Loading and saving OutputSettings as TOML."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import tomlkit

from domain.models import OutputSettings
from domain.toml_sections import flat_to_sectioned, sectioned_to_flat
from shared.constants import SETTINGS_DIR_NAME, SETTINGS_ENV_VAR, SETTINGS_FILE_NAME

logger = logging.getLogger(__name__)


def default_settings_path() -> Path:
    """
    Determine settings file location.

    1) ``$GEOCOORD_SETTINGS`` if set.
    2) ``$XDG_CONFIG_HOME/geocoord/settings.toml``.
    3) ``~/.config/geocoord/settings.toml``.
    """
    explicit = os.getenv(SETTINGS_ENV_VAR)
    if explicit:
        return Path(explicit)
    config_home = Path(os.getenv('XDG_CONFIG_HOME') or (Path.home() / '.config'))
    return config_home / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME


def load_settings(path: str | Path | None = None) -> OutputSettings:
    """
    Load and validate TOML -> OutputSettings.

    A missing file yields the defaults; an invalid one raises
    ``pydantic.ValidationError``.
    """
    path = Path(path) if path is not None else default_settings_path()
    if not path.exists():
        logger.info('Settings file not found, using defaults: %s', path)
        return OutputSettings()
    text = path.read_text(encoding='utf-8')
    data = tomlkit.parse(text).unwrap()
    settings = OutputSettings.model_validate(sectioned_to_flat(data))
    logger.info('Settings loaded from %s', path)
    return settings


def save_settings(settings: OutputSettings, path: str | Path | None = None) -> Path:
    """Save settings as sectioned TOML, creating the parent directory."""
    path = Path(path) if path is not None else default_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    data = flat_to_sectioned(settings.model_dump(mode='json'))
    path.write_text(tomlkit.dumps(data), encoding='utf-8')
    logger.info('Settings saved to %s', path)
    return path
