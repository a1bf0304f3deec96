"""图片加载与基础预处理实现。"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from imgfilter.core.exceptions import ImageFilterError

LOGGER = logging.getLogger(__name__)

# 滤镜可以直接处理的模式，其余模式在加载时转换。
FILTERABLE_MODES = {"L", "RGB", "RGBA"}


class ImageLoadingError(ImageFilterError):
    """图片加载失败。"""


def load_image(path: Path) -> Image.Image:
    """加载并完整解码单张图片。

    返回值为新的 Image 对象，调用者负责关闭。
    """

    try:
        with Image.open(path) as img:
            img.load()
            if img.mode not in FILTERABLE_MODES:
                return _normalize_mode(img)
            return img.copy()
    except (UnidentifiedImageError, OSError) as exc:
        LOGGER.debug("无法识别图像文件 %s: %s", path, exc)
        raise ImageLoadingError(str(exc)) from exc


def _normalize_mode(img: Image.Image) -> Image.Image:
    """将调色板、CMYK 等模式转换为 RGB/RGBA。"""

    if img.mode in {"LA", "PA"}:
        return img.convert("RGBA")

    if img.mode == "P":
        if "transparency" in img.info:
            return img.convert("RGBA")
        return img.convert("RGB")

    if img.mode in {"I", "I;16", "F"}:
        return img.convert("L")

    return img.convert("RGB")
