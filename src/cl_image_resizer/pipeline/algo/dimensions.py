"""Target dimension resolution for a resize request."""

import math

from ...common.errors import FailedToResize
from ...common.schemas import (
    ResizeByScale,
    ResizeSpec,
    ResizeToHeight,
    ResizeToWidth,
    ResizeToWidthAndHeight,
)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    magnitude = abs(value)
    rounded = math.floor(magnitude)
    # The fraction is exact, unlike magnitude + 0.5
    if magnitude - rounded >= 0.5:
        rounded += 1
    return int(math.copysign(rounded, value))


def resolve_dimensions(source_width: int, source_height: int, spec: ResizeSpec) -> tuple[int, int]:
    """Map source dimensions and a resize spec to a concrete (width, height).

    Args:
        source_width: Source raster width, > 0
        source_height: Source raster height, > 0
        spec: Requested size

    Returns:
        Target (width, height), both > 0

    Raises:
        FailedToResize: If the source is empty or a resolved dimension is 0
    """
    if source_width <= 0 or source_height <= 0:
        raise FailedToResize(f"invalid source dimensions {source_width}x{source_height}")

    try:
        match spec:
            case ResizeToWidth(width=width):
                height = round_half_away(width * source_height / source_width)
            case ResizeToHeight(height=height):
                width = round_half_away(height * source_width / source_height)
            case ResizeToWidthAndHeight(width=width, height=height):
                pass
            case ResizeByScale(scale=scale):
                width = round_half_away(source_width * scale)
                height = round_half_away(source_height * scale)
    except OverflowError as exc:
        raise FailedToResize(f"target dimensions out of range: {exc}") from exc

    if width <= 0 or height <= 0:
        raise FailedToResize(
            f"resolved target {width}x{height} from source "
            + f"{source_width}x{source_height} has a zero dimension"
        )
    return width, height
