# frame_decoder.py
import io

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from frame_errors import DecodeError, InvalidInputError


def load_pixels(path, width: int, height: int) -> np.ndarray:
    """Decode an image and stretch it to (height, width, 4) RGBA uint8.

    Reading the file can raise OSError; anything Pillow refuses to parse
    is reported as DecodeError.
    """
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"Frame size must be positive, got {width}x{height}")

    with open(path, "rb") as f:
        data = f.read()

    rgba = _decode_rgba(data, path)

    # Transparent areas end up black, like drawing onto an empty canvas
    rgba[rgba[:, :, 3] == 0, :3] = 0

    src_h, src_w = rgba.shape[:2]
    if (src_w, src_h) == (width, height):
        return rgba

    shrinking = width <= src_w and height <= src_h
    interp = cv2.INTER_AREA if shrinking else cv2.INTER_LINEAR

    # Interpolate premultiplied colour so transparent neighbours don't
    # darken the edges, then divide alpha back out
    buf = rgba.astype(np.float32)
    buf[:, :, :3] *= buf[:, :, 3:4] / 255.0
    buf = cv2.resize(buf, (width, height), interpolation=interp)

    alpha = buf[:, :, 3:4] / 255.0
    rgb = np.zeros_like(buf[:, :, :3])
    np.divide(buf[:, :, :3], alpha, out=rgb, where=alpha > 0)
    buf[:, :, :3] = rgb
    return np.clip(np.rint(buf), 0, 255).astype(np.uint8)


def _decode_rgba(data: bytes, path) -> np.ndarray:
    try:
        with Image.open(io.BytesIO(data)) as img:
            # Animated GIFs: first frame only
            img.seek(0)
            img = img.convert("RGBA")
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError,
            Image.DecompressionBombError) as exc:
        raise DecodeError(f"Cannot decode {path}: {exc}") from exc

    return np.array(img, dtype=np.uint8)
