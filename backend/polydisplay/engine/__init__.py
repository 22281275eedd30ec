"""polydisplay conversion engine."""

from polydisplay.engine.registry import transform, Layer, get_registry
from polydisplay.engine.config import ColorMode, ConvertConfig
from polydisplay.engine.context import ConvertContext, PolygonData
from polydisplay.engine.pipeline import Pipeline, convert_polygons, create_pipeline

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "ColorMode",
    "ConvertConfig",
    "ConvertContext",
    "PolygonData",
    "Pipeline",
    "convert_polygons",
    "create_pipeline",
]
