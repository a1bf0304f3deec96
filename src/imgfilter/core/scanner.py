"""源目录扫描逻辑。"""

from __future__ import annotations

import logging
from pathlib import Path

from imgfilter.core.exceptions import SourceEnumerationError
from imgfilter.core.models import WorkItem

LOGGER = logging.getLogger(__name__)


def list_work_items(source_dir: Path, dest_dir: Path) -> list[WorkItem]:
    """读取一次源目录，按文件名排序返回所有非目录条目。

    目录无法读取时抛出 SourceEnumerationError。不按扩展名过滤，
    非图片文件会在加载阶段失败并作为单个文件的错误报告。
    """

    try:
        entries = sorted(source_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise SourceEnumerationError(str(exc)) from exc

    items: list[WorkItem] = []
    for entry in entries:
        if entry.is_dir():
            continue
        items.append(
            WorkItem(
                name=entry.name,
                source_path=entry,
                dest_path=dest_dir / entry.name,
            )
        )

    LOGGER.info("在 %s 中发现 %d 个待处理文件", source_dir, len(items))
    return items
