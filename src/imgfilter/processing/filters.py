"""像素变换：灰度与高斯模糊，均委托给 Pillow。"""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable

from PIL import Image, ImageFilter, ImageOps

from imgfilter.core.config import DEFAULT_BLUR_SIGMA, FilterKind
from imgfilter.core.exceptions import ImageFilterError

LOGGER = logging.getLogger(__name__)

Transform = Callable[[Image.Image], Image.Image]


class InvalidFilterError(ImageFilterError):
    """滤镜名称未知。"""


class TransformError(ImageFilterError):
    """变换执行失败。"""


def grayscale(image: Image.Image) -> Image.Image:
    """色调重映射为 8 位灰度；带 Alpha 通道的输入输出 RGBA 以保留透明度。"""

    if image.mode == "RGBA":
        gray = ImageOps.grayscale(image)
        alpha = image.getchannel("A")
        return Image.merge("RGBA", (gray, gray, gray, alpha))
    return ImageOps.grayscale(image)


def blur(image: Image.Image, sigma: float = DEFAULT_BLUR_SIGMA) -> Image.Image:
    """高斯模糊，``sigma`` 为标准差。"""

    if sigma <= 0:
        return image.copy()
    return image.filter(ImageFilter.GaussianBlur(radius=sigma))


def resolve_transform(filter_name: str, *, blur_sigma: float = DEFAULT_BLUR_SIGMA) -> Transform:
    """根据名称返回变换函数，未知名称抛出 InvalidFilterError。"""

    try:
        kind = FilterKind(filter_name)
    except ValueError as exc:
        raise InvalidFilterError(f"Invalid filter: {filter_name}") from exc

    if kind is FilterKind.GRAYSCALE:
        return grayscale
    return partial(blur, sigma=blur_sigma)


def apply_transform(transform: Transform, image: Image.Image) -> Image.Image:
    """执行变换并把 Pillow 的异常统一包装为 TransformError。"""

    try:
        return transform(image)
    except (OSError, ValueError) as exc:
        LOGGER.debug("变换失败: %s", exc)
        raise TransformError(str(exc)) from exc
