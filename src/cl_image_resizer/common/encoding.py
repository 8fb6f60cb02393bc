from enum import StrEnum
from os import PathLike
from pathlib import Path

from PIL import Image

from .errors import UnsupportedEncoding


class Encoding(StrEnum):
    AVIF = "avif"
    JPEG = "jpeg"

    @property
    def mime(self) -> str:
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        return "jpg" if self is Encoding.JPEG else self.value

    @property
    def pil_format(self) -> str:
        return self.value.upper()

    @classmethod
    def parse(cls, text: str) -> "Encoding":
        value = text.strip().lower()
        if value == "jpg":
            return Encoding.JPEG
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedEncoding(text) from None

    @classmethod
    def from_suffix(cls, path: str | PathLike[str]) -> "Encoding":
        """Infer the encoding from an output file name, AVIF when unknown."""
        suffix = Path(path).suffix.lstrip(".")
        if not suffix:
            return Encoding.AVIF
        try:
            return cls.parse(suffix)
        except UnsupportedEncoding:
            return Encoding.AVIF


class FilterType(StrEnum):
    BOX = "box"
    BILINEAR = "bilinear"
    HAMMING = "hamming"
    CATMULL_ROM = "catmull-rom"
    LANCZOS3 = "lanczos3"

    @property
    def resampling(self) -> Image.Resampling:
        return _RESAMPLING[self]


# Pillow's bicubic kernel uses a = -0.5, i.e. Catmull-Rom; its Lanczos window has 3 lobes.
_RESAMPLING: dict[FilterType, Image.Resampling] = {
    FilterType.BOX: Image.Resampling.BOX,
    FilterType.BILINEAR: Image.Resampling.BILINEAR,
    FilterType.HAMMING: Image.Resampling.HAMMING,
    FilterType.CATMULL_ROM: Image.Resampling.BICUBIC,
    FilterType.LANCZOS3: Image.Resampling.LANCZOS,
}
