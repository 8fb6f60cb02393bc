"""Load -> resize -> encode pipeline for a single image."""

from pathlib import Path

from loguru import logger

from ..common.encoding import Encoding
from ..common.schemas import EncodeConfig, EncodedOutput, ResizeSpec, describe_resize_spec
from ..utils.profiling import timed
from .algo.image_encode import encode_image
from .algo.image_load import load_image
from .algo.image_resize import resize_image


@timed("done")
def process(
    source_path: str | Path,
    resize_spec: ResizeSpec,
    encoding: Encoding,
    config: EncodeConfig,
) -> EncodedOutput:
    """Run the three stages in order on one source image.

    Blocking and CPU-bound: async callers go through the Dispatcher.
    The first failing stage aborts the run and its error propagates unchanged.

    Raises:
        NotFound: If the source cannot be opened or decoded
        FailedToResize: If dimension resolution, resampling or encoding fails
    """
    source_path = Path(source_path)
    logger.debug(
        f"processing {source_path.name} ({describe_resize_spec(resize_spec)}, {encoding})"
    )

    original = load_image(source_path)
    resized = resize_image(original, resize_spec, config.filter)
    del original

    data = encode_image(resized, encoding, config.quality, config.speed)

    return EncodedOutput(
        data=data,
        encoding=encoding,
        width=resized.width,
        height=resized.height,
        filename=f"{source_path.stem}.{encoding.extension}",
    )
