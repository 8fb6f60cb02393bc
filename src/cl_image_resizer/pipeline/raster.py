import numpy as np
from numpy.typing import NDArray
from PIL import Image

CHANNELS = 4


class Raster:
    """Decoded 8-bit RGBA image.

    Pixels are stored row-major in a contiguous ``(height, width, 4)`` uint8
    array, so ``pixels.nbytes == width * height * 4``.
    """

    pixels: NDArray[np.uint8]

    def __init__(self, pixels: NDArray[np.uint8]) -> None:
        if pixels.dtype != np.uint8 or pixels.ndim != 3 or pixels.shape[2] != CHANNELS:
            raise ValueError(
                f"Raster expects a (height, width, {CHANNELS}) uint8 array, "
                + f"got shape {pixels.shape} dtype {pixels.dtype}"
            )
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError("Raster dimensions must be positive")
        self.pixels = np.ascontiguousarray(pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @classmethod
    def from_image(cls, image: Image.Image) -> "Raster":
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.asarray(image, dtype=np.uint8))

    def to_image(self) -> Image.Image:
        # (height, width, 4) uint8 arrays map to RGBA
        return Image.fromarray(self.pixels)

    def __repr__(self) -> str:
        return f"Raster(width={self.width}, height={self.height})"
