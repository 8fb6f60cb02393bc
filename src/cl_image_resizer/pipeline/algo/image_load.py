"""Load stage: decode a source file into an RGBA raster."""

from pathlib import Path

from loguru import logger
from PIL import Image

from ...common.errors import NotFound
from ...utils.profiling import timed
from ..raster import Raster


@timed("loaded image")
def load_image(input_path: str | Path) -> Raster:
    """
    Decode an image file and normalize it to 8-bit RGBA.

    Sources without alpha get an opaque alpha channel; sources with extra
    channels are reduced to RGBA.

    Args:
        input_path: Path to the source image

    Returns:
        Decoded raster

    Raises:
        NotFound: If the file cannot be opened or decoded as a supported format
    """
    input_path = Path(input_path)

    try:
        with Image.open(input_path) as img:
            img.load()
            raster = Raster.from_image(img)
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        logger.debug(f"cannot load {input_path}: {exc}")
        raise NotFound(str(input_path)) from exc

    logger.debug(f"decoded {input_path.name} as {raster.width}x{raster.height}")
    return raster
