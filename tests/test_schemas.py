"""Tests for encodings, filters and pydantic schemas."""

from pathlib import Path

import pytest
from PIL import Image
from pydantic import ValidationError

from cl_image_resizer.common.encoding import Encoding, FilterType
from cl_image_resizer.common.errors import UnsupportedEncoding
from cl_image_resizer.common.schemas import (
    DEFAULT_QUALITY,
    DEFAULT_SPEED,
    EncodeConfig,
    EncodedOutput,
    ResizeByScale,
    ResizeToHeight,
    ResizeToWidth,
    ResizeToWidthAndHeight,
    ServerConfig,
    describe_resize_spec,
    resize_spec_from_options,
)

# ============================================================================
# ENCODING
# ============================================================================


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("avif", Encoding.AVIF),
        ("AVIF", Encoding.AVIF),
        ("jpeg", Encoding.JPEG),
        ("jpg", Encoding.JPEG),
        ("JPG", Encoding.JPEG),
        (" jpeg ", Encoding.JPEG),
    ],
)
def test_encoding_parse(text: str, expected: Encoding):
    assert Encoding.parse(text) is expected


@pytest.mark.parametrize("text", ["png", "webp", "", "jpe g"])
def test_encoding_parse_rejects_unknown(text: str):
    with pytest.raises(UnsupportedEncoding) as exc_info:
        _ = Encoding.parse(text)

    assert exc_info.value.value == text


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("out.avif", Encoding.AVIF),
        ("out.jpg", Encoding.JPEG),
        ("dir/out.JPEG", Encoding.JPEG),
        ("out", Encoding.AVIF),
        ("out.png", Encoding.AVIF),
    ],
)
def test_encoding_from_suffix(path: str, expected: Encoding):
    assert Encoding.from_suffix(path) is expected


def test_encoding_properties():
    assert Encoding.AVIF.mime == "image/avif"
    assert Encoding.JPEG.mime == "image/jpeg"
    assert Encoding.AVIF.extension == "avif"
    assert Encoding.JPEG.extension == "jpg"
    assert Encoding.JPEG.pil_format == "JPEG"


def test_every_filter_maps_to_a_resampler():
    for filter_type in FilterType:
        assert isinstance(filter_type.resampling, Image.Resampling)

    assert FilterType("catmull-rom").resampling is Image.Resampling.BICUBIC
    assert FilterType.LANCZOS3.resampling is Image.Resampling.LANCZOS


# ============================================================================
# RESIZE SPEC
# ============================================================================


def test_resize_spec_is_frozen():
    spec = ResizeToWidth(width=10)

    with pytest.raises(ValidationError):
        spec.width = 20  # pyright: ignore[reportAttributeAccessIssue]


def test_resize_spec_rejects_extra_fields():
    with pytest.raises(ValidationError):
        _ = ResizeToWidth(width=10, height=5)  # pyright: ignore[reportCallIssue]


@pytest.mark.parametrize(
    ("options", "expected"),
    [
        ({"width": 10}, ResizeToWidth(width=10)),
        ({"height": 20}, ResizeToHeight(height=20)),
        ({"width": 10, "height": 20}, ResizeToWidthAndHeight(width=10, height=20)),
        ({"scale": 0.5}, ResizeByScale(scale=0.5)),
    ],
)
def test_resize_spec_from_options(options: dict[str, float], expected: object):
    assert resize_spec_from_options(**options) == expected  # pyright: ignore[reportArgumentType]


@pytest.mark.parametrize(
    "options",
    [
        {},
        {"scale": 2.0, "width": 10},
        {"scale": 2.0, "height": 10},
        {"width": 0},
        {"scale": -1.0},
    ],
)
def test_resize_spec_from_options_rejects(options: dict[str, float]):
    with pytest.raises(ValueError):
        _ = resize_spec_from_options(**options)  # pyright: ignore[reportArgumentType]


def test_describe_resize_spec():
    assert describe_resize_spec(ResizeToWidth(width=5)) == "width=5"
    assert describe_resize_spec(ResizeToHeight(height=6)) == "height=6"
    assert describe_resize_spec(ResizeToWidthAndHeight(width=5, height=6)) == "5x6"
    assert describe_resize_spec(ResizeByScale(scale=1.5)) == "scale=1.5"


# ============================================================================
# CONFIGURATION
# ============================================================================


def test_encode_config_defaults():
    config = EncodeConfig()

    assert config.quality == DEFAULT_QUALITY
    assert config.speed == DEFAULT_SPEED
    assert config.filter is FilterType.LANCZOS3


@pytest.mark.parametrize(
    "options",
    [
        {"quality": 0},
        {"quality": 100.5},
        {"speed": 0},
        {"speed": 11},
        {"filter": "mitchell"},
    ],
)
def test_encode_config_bounds(options: dict[str, object]):
    with pytest.raises(ValidationError):
        _ = EncodeConfig(**options)  # pyright: ignore[reportArgumentType]


def test_server_config_requires_existing_directory(tmp_path: Path):
    with pytest.raises(ValidationError):
        _ = ServerConfig(images_dir=tmp_path / "missing")


def test_server_config_worker_count(tmp_path: Path):
    assert ServerConfig(images_dir=tmp_path, workers=3).worker_count == 3
    assert ServerConfig(images_dir=tmp_path, concurrency_limit=1).worker_count == 1


def test_server_config_rejects_zero_limit(tmp_path: Path):
    with pytest.raises(ValidationError):
        _ = ServerConfig(images_dir=tmp_path, concurrency_limit=0)


# ============================================================================
# OUTPUT
# ============================================================================


def test_encoded_output_headers():
    output = EncodedOutput(data=b"x", encoding=Encoding.AVIF, width=1, height=1, filename="cat.avif")

    assert output.mime == "image/avif"
    assert output.content_disposition == 'inline; filename="cat.avif"'


def test_encoded_output_non_ascii_filename():
    output = EncodedOutput(data=b"x", encoding=Encoding.JPEG, width=1, height=1, filename="café.jpg")

    assert output.content_disposition == "inline; filename*=UTF-8''caf%C3%A9.jpg"


def test_encoded_output_without_filename():
    output = EncodedOutput(data=b"x", encoding=Encoding.JPEG, width=1, height=1)

    assert output.content_disposition is None
