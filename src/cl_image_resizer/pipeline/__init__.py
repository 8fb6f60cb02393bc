"""Load -> resize -> encode pipeline."""

from .algo.dimensions import resolve_dimensions, round_half_away
from .pipeline import process
from .raster import Raster

__all__ = ["process", "Raster", "resolve_dimensions", "round_half_away"]
