"""Pipeline stages and dimension resolution."""

from .dimensions import resolve_dimensions, round_half_away
from .image_encode import encode_image
from .image_load import load_image
from .image_resize import resize_image

__all__ = ["load_image", "resize_image", "encode_image", "resolve_dimensions", "round_half_away"]
