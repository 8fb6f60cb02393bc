"""Common module - schemas, errors and admission control."""

from .concurrency_gate import ConcurrencyGate, ConcurrencyToken
from .encoding import Encoding, FilterType
from .errors import FailedToResize, NotFound, ResizerError, UnsupportedEncoding
from .schemas import EncodeConfig, EncodedOutput, ResizeSpec, ServerConfig

__all__ = [
    "ConcurrencyGate",
    "ConcurrencyToken",
    "Encoding",
    "FilterType",
    "ResizerError",
    "NotFound",
    "FailedToResize",
    "UnsupportedEncoding",
    "EncodeConfig",
    "EncodedOutput",
    "ResizeSpec",
    "ServerConfig",
]
