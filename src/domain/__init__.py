"""Domain layer - pydantic models and settings files."""
from domain.models import BoundingBoxModel, GeoPointModel, OutputSettings
from domain.settings import default_settings_path, load_settings, save_settings

__all__ = [
    'BoundingBoxModel',
    'GeoPointModel',
    'OutputSettings',
    'default_settings_path',
    'load_settings',
    'save_settings',
]
