"""输出写入模块。"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from imgfilter.core.exceptions import ImageFilterError

LOGGER = logging.getLogger(__name__)

SUPPORTED_FORMATS = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
    ".gif": "GIF",
    ".bmp": "BMP",
    ".tif": "TIFF",
    ".tiff": "TIFF",
}


class ImageWriteError(ImageFilterError):
    """输出写入失败。"""


def save_image(image: Image.Image, destination: Path) -> None:
    """将 PIL Image 保存到磁盘，格式由扩展名决定，已存在的文件直接覆盖。"""

    suffix = destination.suffix.lower()
    image_format = SUPPORTED_FORMATS.get(suffix)
    if not image_format:
        raise ImageWriteError(f"unsupported output format: {suffix or destination.name}")

    image_to_save = image
    if image_format == "JPEG" and image.mode not in {"RGB", "L"}:
        image_to_save = image.convert("RGB")

    try:
        image_to_save.save(destination, format=image_format)
    except (OSError, ValueError) as exc:
        raise ImageWriteError(f"failed to write {destination}: {exc}") from exc
    finally:
        if image_to_save is not image:
            image_to_save.close()

    LOGGER.debug("已写入 %s", destination)
