"""Services package - PROJ-backed reference transformations."""

from services.coordinate_transformer import (
    UtmTransformer,
    build_utm_crs,
    projection_deviation_m,
)

__all__ = [
    'UtmTransformer',
    'build_utm_crs',
    'projection_deviation_m',
]
