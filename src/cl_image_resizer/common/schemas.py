"""Pydantic schemas for resize requests, encoder settings and outputs."""

import os
from pathlib import Path
from typing import Annotated, ClassVar, Literal
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .encoding import Encoding, FilterType

DEFAULT_QUALITY = 90.0
DEFAULT_SPEED = 4
DEFAULT_CONCURRENCY_LIMIT = 50


# ─────────────────────────────────────────────────────────────
# Resize specification (tagged variant)
# ─────────────────────────────────────────────────────────────


class _FrozenModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class ResizeToWidth(_FrozenModel):
    """Fixed width, height derived from the source aspect ratio."""

    kind: Literal["width"] = "width"
    width: int = Field(..., gt=0, description="Target width in pixels")


class ResizeToHeight(_FrozenModel):
    """Fixed height, width derived from the source aspect ratio."""

    kind: Literal["height"] = "height"
    height: int = Field(..., gt=0, description="Target height in pixels")


class ResizeToWidthAndHeight(_FrozenModel):
    """Exact target size; the image is stretched if the aspect ratio differs."""

    kind: Literal["width_and_height"] = "width_and_height"
    width: int = Field(..., gt=0, description="Target width in pixels")
    height: int = Field(..., gt=0, description="Target height in pixels")


class ResizeByScale(_FrozenModel):
    """Uniform scale factor applied to both source dimensions."""

    kind: Literal["scale"] = "scale"
    scale: float = Field(..., gt=0, allow_inf_nan=False, description="Scale factor")


ResizeSpec = Annotated[
    ResizeToWidth | ResizeToHeight | ResizeToWidthAndHeight | ResizeByScale,
    Field(discriminator="kind"),
]


def resize_spec_from_options(
    width: int | None = None,
    height: int | None = None,
    scale: float | None = None,
) -> ResizeSpec:
    """Build a ResizeSpec from optional front-end options.

    Raises:
        ValueError: If no option is given, or scale is combined with a dimension.
            pydantic's ValidationError (a ValueError) for non-positive values.
    """
    if scale is not None:
        if width is not None or height is not None:
            raise ValueError("provide one or both of width and height, or only scale")
        return ResizeByScale(scale=scale)
    if width is not None and height is not None:
        return ResizeToWidthAndHeight(width=width, height=height)
    if width is not None:
        return ResizeToWidth(width=width)
    if height is not None:
        return ResizeToHeight(height=height)
    raise ValueError("provide one or both of width and height, or only scale")


def describe_resize_spec(spec: ResizeSpec) -> str:
    match spec:
        case ResizeToWidth(width=width):
            return f"width={width}"
        case ResizeToHeight(height=height):
            return f"height={height}"
        case ResizeToWidthAndHeight(width=width, height=height):
            return f"{width}x{height}"
        case ResizeByScale(scale=scale):
            return f"scale={scale}"


# ─────────────────────────────────────────────────────────────
# Process-wide configuration
# ─────────────────────────────────────────────────────────────


class EncodeConfig(_FrozenModel):
    """Encoder and resampler settings shared read-only by every pipeline run."""

    quality: float = Field(default=DEFAULT_QUALITY, ge=1, le=100, description="1 <= quality <= 100")
    speed: int = Field(default=DEFAULT_SPEED, ge=1, le=10, description="1 <= speed <= 10 (AVIF only)")
    filter: FilterType = Field(default=FilterType.LANCZOS3, description="Resampling kernel")


class ServerConfig(_FrozenModel):
    """Startup parameters of the HTTP front end."""

    host: str = Field(default="0.0.0.0", description="Address to bind")
    port: int = Field(default=3000, ge=0, le=65535, description="Port to bind")
    images_dir: Path = Field(default=Path("images"), description="Directory of source images")
    concurrency_limit: int = Field(
        default=DEFAULT_CONCURRENCY_LIMIT,
        ge=1,
        description="Maximum number of pipeline runs executing at once",
    )
    workers: int | None = Field(default=None, ge=1, description="Worker thread pool size")

    @field_validator("images_dir")
    @classmethod
    def validate_images_dir(cls, v: Path) -> Path:
        if not v.is_dir():
            raise ValueError(f"Images directory does not exist: {v}")
        return v

    @property
    def worker_count(self) -> int:
        if self.workers is not None:
            return self.workers
        return min(self.concurrency_limit, os.cpu_count() or 1)


# ─────────────────────────────────────────────────────────────
# Pipeline output
# ─────────────────────────────────────────────────────────────


class EncodedOutput(_FrozenModel):
    """Fully materialized encoded image."""

    data: bytes = Field(..., repr=False, description="Encoded image bytes")
    encoding: Encoding
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    filename: str | None = Field(default=None, description="Display name for downloads")

    @property
    def mime(self) -> str:
        return self.encoding.mime

    @property
    def content_disposition(self) -> str | None:
        if self.filename is None:
            return None
        if self.filename.isascii() and '"' not in self.filename:
            return f'inline; filename="{self.filename}"'
        return f"inline; filename*=UTF-8''{quote(self.filename)}"
