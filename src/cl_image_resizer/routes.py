"""Resize route factory."""

from pathlib import Path as FilePath
from typing import Annotated

from fastapi import APIRouter, Path, Response

from .common.dispatcher import Dispatcher
from .common.encoding import Encoding
from .common.errors import NotFound
from .common.schemas import (
    EncodedOutput,
    ResizeByScale,
    ResizeSpec,
    ResizeToHeight,
    ResizeToWidth,
    ResizeToWidthAndHeight,
)

PositiveInt = Annotated[int, Path(gt=0, description="Target size in pixels")]
ScaleFactor = Annotated[float, Path(gt=0, allow_inf_nan=False, description="Scale factor")]
ImageName = Annotated[str, Path(description="Source image file name")]
EncodingName = Annotated[str, Path(description="Output encoding: avif, jpeg or jpg (case-insensitive)")]


def resolve_image_path(images_dir: FilePath, image: str) -> FilePath:
    """Resolve an image name against the image directory.

    Raises:
        NotFound: If the name is not a valid path or escapes the directory
    """
    base = images_dir.resolve()
    try:
        candidate = (base / image).resolve()
    except (OSError, ValueError) as exc:
        raise NotFound(image) from exc
    if candidate == base or not candidate.is_relative_to(base):
        raise NotFound(image)
    return candidate


def to_response(output: EncodedOutput) -> Response:
    headers: dict[str, str] = {}
    if output.content_disposition is not None:
        headers["Content-Disposition"] = output.content_disposition
    return Response(content=output.data, media_type=output.mime, headers=headers)


def create_router(dispatcher: Dispatcher, images_dir: FilePath) -> APIRouter:
    """Create router with injected dependencies.

    Routes with a literal size keyword are registered before the generic
    /{width}/{height}/ route so that e.g. /width/100/a.jpg is not parsed as
    a width of "width".

    Args:
        dispatcher: Gate and worker pool executing the pipeline
        images_dir: Directory source image names are resolved against

    Returns:
        Configured APIRouter with the resize endpoints
    """
    router = APIRouter(prefix="/images/resized", tags=["resize"])

    async def resize(image: str, resize_spec: ResizeSpec, encoding: str | None) -> Response:
        selected = Encoding.parse(encoding) if encoding is not None else Encoding.AVIF
        source_path = resolve_image_path(images_dir, image)
        output = await dispatcher.submit(source_path, resize_spec, selected)
        return to_response(output)

    @router.get("/width/{width}/{image}/{encoding}")
    async def resize_width(width: PositiveInt, image: ImageName, encoding: EncodingName) -> Response:
        return await resize(image, ResizeToWidth(width=width), encoding)

    @router.get("/width/{width}/{image}")
    async def resize_width_avif(width: PositiveInt, image: ImageName) -> Response:
        return await resize(image, ResizeToWidth(width=width), None)

    @router.get("/height/{height}/{image}/{encoding}")
    async def resize_height(height: PositiveInt, image: ImageName, encoding: EncodingName) -> Response:
        return await resize(image, ResizeToHeight(height=height), encoding)

    @router.get("/height/{height}/{image}")
    async def resize_height_avif(height: PositiveInt, image: ImageName) -> Response:
        return await resize(image, ResizeToHeight(height=height), None)

    @router.get("/scale/{scale}/{image}/{encoding}")
    async def resize_scale(scale: ScaleFactor, image: ImageName, encoding: EncodingName) -> Response:
        return await resize(image, ResizeByScale(scale=scale), encoding)

    @router.get("/scale/{scale}/{image}")
    async def resize_scale_avif(scale: ScaleFactor, image: ImageName) -> Response:
        return await resize(image, ResizeByScale(scale=scale), None)

    @router.get("/{width}/{height}/{image}/{encoding}")
    async def resize_width_and_height(
        width: PositiveInt,
        height: PositiveInt,
        image: ImageName,
        encoding: EncodingName,
    ) -> Response:
        return await resize(image, ResizeToWidthAndHeight(width=width, height=height), encoding)

    @router.get("/{width}/{height}/{image}")
    async def resize_width_and_height_avif(
        width: PositiveInt,
        height: PositiveInt,
        image: ImageName,
    ) -> Response:
        return await resize(image, ResizeToWidthAndHeight(width=width, height=height), None)

    # Mark functions as used (accessed via FastAPI decorator)
    _ = (
        resize_width,
        resize_width_avif,
        resize_height,
        resize_height_avif,
        resize_scale,
        resize_scale_avif,
        resize_width_and_height,
        resize_width_and_height_avif,
    )

    return router
