# frame_packer.py
import cv2
import numpy as np

from frame_errors import InvalidInputError

DEFAULT_THRESHOLD = 128


def bytes_per_frame(width: int, height: int) -> int:
    # Trailing pixels that don't fill a whole byte are dropped
    return (width * height) // 8


class Thresholder:
    def __init__(self, threshold: int = DEFAULT_THRESHOLD, invert: bool = False):
        if not 0 <= int(threshold) <= 255:
            raise InvalidInputError(f"Threshold must be within 0..255, got {threshold}")
        self.threshold = int(threshold)
        self.invert = bool(invert)

    # ------------------------------------------------------------------
    # 1-bit classification
    # ------------------------------------------------------------------

    def to_bits(self, pixels: np.ndarray, width: int, height: int) -> np.ndarray:
        """Return a (height, width) uint8 mask, 1 where the pixel is "on"."""
        _check_buffer(pixels, width, height)
        rgba = np.asarray(pixels, dtype=np.uint8).reshape(height, width, 4)

        # Plain mean of R, G, B; alpha is ignored
        brightness = rgba[:, :, :3].sum(axis=2, dtype=np.float32) / 3.0

        mode = cv2.THRESH_BINARY_INV if self.invert else cv2.THRESH_BINARY
        _, bw = cv2.threshold(brightness, float(self.threshold), 1, mode)
        return bw.astype(np.uint8)

    # ------------------------------------------------------------------
    # Pack to bytes, MSB = first pixel
    # ------------------------------------------------------------------

    def pack(self, pixels: np.ndarray, width: int, height: int) -> bytes:
        bits = self.to_bits(pixels, width, height).reshape(-1)
        n_bytes = bytes_per_frame(width, height)
        out = np.packbits(bits[:n_bytes * 8], bitorder="big")
        return out.tobytes()


def pack_frame(pixels: np.ndarray, width: int, height: int) -> bytes:
    return Thresholder().pack(pixels, width, height)


def _check_buffer(pixels, width: int, height: int):
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"Frame size must be positive, got {width}x{height}")
    expected = width * height * 4
    size = np.size(pixels)
    if size != expected:
        raise InvalidInputError(
            f"Pixel buffer has {size} samples, expected {expected} for {width}x{height} RGBA"
        )
