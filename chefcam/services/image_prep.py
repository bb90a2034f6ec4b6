# chefcam/services/image_prep.py
from __future__ import annotations

import io
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

ALLOWED_MIME_TYPES = {"image/jpeg", "image/png", "image/webp"}
MAX_UPLOAD_BYTES = 4 * 1024 * 1024

UPLOAD_MAX_SIDE = 1024
UPLOAD_JPEG_QUALITY = 74
CAMERA_MAX_SIDE = 880
CAMERA_JPEG_QUALITY = 66


class ImageRejected(ValueError):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class PreparedImage:
    data: bytes
    mime_type: str
    width: int
    height: int


def check_media_type(mime_type: str | None) -> None:
    mime = (mime_type or "").lower()
    if not mime.startswith("image/"):
        raise ImageRejected("Please choose a valid image file.", status_code=415)
    if mime not in ALLOWED_MIME_TYPES:
        raise ImageRejected("Use JPG, PNG, or WebP. HEIC/HEIF is not supported.", status_code=415)


def _to_rgb(image: Image.Image) -> Image.Image:
    # JPEG has no alpha channel; flatten onto white
    if image.mode in ("RGBA", "LA", "P"):
        if image.mode == "P":
            image = image.convert("RGBA")
        rgb = Image.new("RGB", image.size, (255, 255, 255))
        rgb.paste(image, mask=image.split()[-1])
        return rgb
    if image.mode != "RGB":
        return image.convert("RGB")
    return image


def scaled_size(width: int, height: int, max_side: int) -> tuple[int, int]:
    scale = min(1.0, max_side / max(width, height))
    return max(1, int(width * scale + 0.5)), max(1, int(height * scale + 0.5))


def prepare_image(data: bytes, mime_type: str | None, from_camera: bool = False) -> PreparedImage:
    """
    Bound an uploaded photo before it is sent to the model.

    The image is re-encoded as JPEG with its longest side capped (880px for
    camera captures, 1024px otherwise). Images are never upscaled.
    """
    check_media_type(mime_type)

    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except Image.DecompressionBombError as e:
        raise ImageRejected("Image is too large. Try another photo.", status_code=413) from e
    except (UnidentifiedImageError, OSError) as e:
        raise ImageRejected("Unsupported image format. Use JPG, PNG, or WebP.", status_code=400) from e

    image = _to_rgb(ImageOps.exif_transpose(image))

    max_side = CAMERA_MAX_SIDE if from_camera else UPLOAD_MAX_SIDE
    quality = CAMERA_JPEG_QUALITY if from_camera else UPLOAD_JPEG_QUALITY

    size = scaled_size(image.width, image.height, max_side)
    if size != image.size:
        image = image.resize(size, Image.LANCZOS)

    buf = io.BytesIO()
    image.save(buf, format="JPEG", quality=quality)
    out = buf.getvalue()

    if len(out) > MAX_UPLOAD_BYTES:
        raise ImageRejected("Image is too large after compression. Try another photo.", status_code=413)

    return PreparedImage(data=out, mime_type="image/jpeg", width=image.width, height=image.height)
