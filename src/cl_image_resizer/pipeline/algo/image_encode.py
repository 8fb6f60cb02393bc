"""Encode stage: compress a raster to AVIF or JPEG bytes."""

from io import BytesIO

from loguru import logger

from ...common.encoding import Encoding
from ...common.errors import FailedToResize
from ...utils.profiling import timed
from ..raster import Raster
from .dimensions import round_half_away


def get_save_options(encoding: Encoding, quality: float, speed: int) -> dict[str, object]:
    """Translate encoder settings into Pillow save keyword arguments.

    Pillow accepts integer quality only, for both AVIF and JPEG.
    """
    save_kwargs: dict[str, object] = {"quality": round_half_away(quality)}

    if encoding is Encoding.AVIF:
        save_kwargs["speed"] = speed
    else:
        # Single-pass baseline encode keeps output byte-identical across runs
        save_kwargs["optimize"] = False
        save_kwargs["progressive"] = False

    return save_kwargs


@timed("encoded image")
def encode_image(raster: Raster, encoding: Encoding, quality: float, speed: int) -> bytes:
    """
    Encode a raster.

    Args:
        raster: Resized RGBA raster
        encoding: Output encoding
        quality: 1-100, rounded half away from zero
        speed: 1-10, lower is slower and smaller (AVIF only)

    Returns:
        Encoded image bytes

    Raises:
        FailedToResize: If the encoder fails
    """
    buffer = BytesIO()

    try:
        img = raster.to_image()
        # JPEG does not support alpha channel
        if encoding is Encoding.JPEG:
            img = img.convert("RGB")

        img.save(buffer, format=encoding.pil_format, **get_save_options(encoding, quality, speed))
    except Exception as exc:
        raise FailedToResize(str(exc)) from exc

    data = buffer.getvalue()
    logger.debug(f"encoded {encoding} kilobytes={len(data) / 1024.0:.1f}")
    return data
