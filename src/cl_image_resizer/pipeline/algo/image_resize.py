"""Resize stage: resample a raster to the resolved target dimensions."""

from loguru import logger

from ...common.encoding import FilterType
from ...common.errors import FailedToResize
from ...common.schemas import ResizeSpec
from ...utils.profiling import timed
from ..raster import Raster
from .dimensions import resolve_dimensions


@timed("resized")
def resize_image(raster: Raster, spec: ResizeSpec, filter_type: FilterType) -> Raster:
    """
    Resample a raster with Pillow's separable convolution.

    Target dimensions are resolved and validated before the resampler
    allocates anything.

    Args:
        raster: Source raster
        spec: Requested size
        filter_type: Resampling kernel

    Returns:
        New raster of exactly the resolved dimensions

    Raises:
        FailedToResize: If resolution fails or the resampler reports an error
    """
    width, height = resolve_dimensions(raster.width, raster.height, spec)
    logger.debug(f"resizing {raster.width}x{raster.height} -> {width}x{height} ({filter_type})")

    try:
        resized = raster.to_image().resize((width, height), filter_type.resampling)
        result = Raster.from_image(resized)
    except Exception as exc:
        raise FailedToResize(str(exc)) from exc

    if result.size != (width, height):
        raise FailedToResize(
            f"resampler returned {result.width}x{result.height}, expected {width}x{height}"
        )
    return result
