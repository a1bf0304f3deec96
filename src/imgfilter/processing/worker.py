"""单个文件的处理单元。"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PIL import Image

from imgfilter.core.config import DEFAULT_BLUR_SIGMA
from imgfilter.core.models import FileOutcome, WorkItem
from imgfilter.core.output_manager import ImageWriteError, save_image
from imgfilter.processing.filters import (
    InvalidFilterError,
    TransformError,
    apply_transform,
    resolve_transform,
)
from imgfilter.processing.image_loader import ImageLoadingError, load_image

LOGGER = logging.getLogger(__name__)

ReportCallback = Optional[Callable[[str], None]]
ItemProcessor = Callable[..., FileOutcome]


def process_item(
    item: WorkItem,
    filter_name: str,
    *,
    report: ReportCallback = None,
    blur_sigma: float = DEFAULT_BLUR_SIGMA,
) -> FileOutcome:
    """加载、变换并写出一张图片。

    所有单文件错误都通过 ``report`` 输出并转换为失败的 FileOutcome，
    不会向调用方抛出，因此每个 WorkItem 恰好产生一个结果。
    """

    try:
        transform = resolve_transform(filter_name, blur_sigma=blur_sigma)
    except InvalidFilterError as exc:
        emit_report(report, str(exc))
        return _failure(item, "error-filter", str(exc))

    image: Optional[Image.Image] = None
    filtered: Optional[Image.Image] = None

    try:
        image = load_image(item.source_path)
    except ImageLoadingError as exc:
        return _reported_failure(item, filter_name, "error-load", exc, report)

    try:
        filtered = apply_transform(transform, image)
    except TransformError as exc:
        _close_if_needed(image)
        return _reported_failure(item, filter_name, "error-transform", exc, report)

    try:
        save_image(filtered, item.dest_path)
    except ImageWriteError as exc:
        return _reported_failure(item, filter_name, "error-write", exc, report)
    finally:
        _close_if_needed(image, filtered)

    LOGGER.info("%s 已处理 -> %s", item.name, item.dest_path)
    return FileOutcome(
        name=item.name,
        source_path=item.source_path,
        status="processed",
        output_path=item.dest_path,
    )


def _reported_failure(
    item: WorkItem,
    filter_name: str,
    status: str,
    exc: Exception,
    report: ReportCallback,
) -> FileOutcome:
    emit_report(report, f"Error applying {filter_name} filter to {item.name}: {exc}")
    return _failure(item, status, str(exc))


def _failure(item: WorkItem, status: str, message: str) -> FileOutcome:
    LOGGER.debug("%s 处理失败 (%s): %s", item.name, status, message)
    return FileOutcome(
        name=item.name,
        source_path=item.source_path,
        status=status,
        message=message,
    )


def emit_report(report: ReportCallback, message: str) -> None:
    """把面向操作者的消息交给回调；未提供回调时写入日志。"""

    if report is None:
        LOGGER.warning(message)
        return
    report(message)


def _close_if_needed(*images: Optional[Image.Image]) -> None:
    for img in images:
        if img is not None:
            img.close()
