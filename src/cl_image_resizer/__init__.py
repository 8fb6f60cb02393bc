"""cl_image_resizer - resize images on demand and encode them as AVIF or JPEG."""

from .common.concurrency_gate import ConcurrencyGate, ConcurrencyToken
from .common.dispatcher import Dispatcher
from .common.encoding import Encoding, FilterType
from .common.errors import FailedToResize, NotFound, ResizerError, UnsupportedEncoding
from .common.schemas import (
    EncodeConfig,
    EncodedOutput,
    ResizeByScale,
    ResizeSpec,
    ResizeToHeight,
    ResizeToWidth,
    ResizeToWidthAndHeight,
    ServerConfig,
    resize_spec_from_options,
)
from .pipeline import Raster, process, resolve_dimensions
from .server import create_app

__version__ = "0.1.0"

__all__ = [
    "ConcurrencyGate",
    "ConcurrencyToken",
    "Dispatcher",
    "Encoding",
    "FilterType",
    "ResizerError",
    "NotFound",
    "FailedToResize",
    "UnsupportedEncoding",
    "EncodeConfig",
    "EncodedOutput",
    "ServerConfig",
    "ResizeSpec",
    "ResizeToWidth",
    "ResizeToHeight",
    "ResizeToWidthAndHeight",
    "ResizeByScale",
    "resize_spec_from_options",
    "Raster",
    "process",
    "resolve_dimensions",
    "create_app",
    "__version__",
]
