"""处理流水线：选择分发策略并收集完成事件。"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from imgfilter.core.channel import CompletionChannel
from imgfilter.core.config import JobConfig, TaskMethod
from imgfilter.core.exceptions import InvalidConfigurationError
from imgfilter.core.models import BatchResult, FileOutcome
from imgfilter.processing.dispatch import STRATEGIES
from imgfilter.processing.worker import ItemProcessor, ReportCallback, process_item

LOGGER = logging.getLogger(__name__)

FinishedCallback = Optional[Callable[[FileOutcome], None]]


def collect_completions(
    channel: CompletionChannel[FileOutcome],
    on_finished: FinishedCallback = None,
) -> BatchResult:
    """取空通道直到其关闭，每收到一个事件回调一次。"""

    result = BatchResult()
    for outcome in channel:
        result.record(outcome)
        if on_finished:
            on_finished(outcome)
    return result


def process_images(
    config: JobConfig,
    *,
    report: ReportCallback = None,
    on_finished: FinishedCallback = None,
    processor: ItemProcessor = process_item,
) -> BatchResult:
    """批量处理入口：按 ``config.task`` 分发任务并阻塞到全部完成。"""

    try:
        method = TaskMethod(config.task)
    except ValueError as exc:
        raise InvalidConfigurationError(f"Invalid task method: {config.task}") from exc

    LOGGER.info(
        "开始处理 %s -> %s (filter=%s, task=%s)",
        config.source_dir,
        config.dest_dir,
        config.filter_name,
        method.value,
    )
    channel = STRATEGIES[method](config, report=report, processor=processor)
    result = collect_completions(channel, on_finished)
    LOGGER.info("处理完成：成功 %d，失败 %d", len(result.succeeded), len(result.failed))
    return result
