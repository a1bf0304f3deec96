"""任务分发策略。

两种策略都返回一个 CompletionChannel，由调用方的收集循环负责取空；
通道的关闭只由 supervisor 线程在 WaitGroup 归零后执行一次。

* ``waitgrp``：一个工作线程在内部扫描目录并顺序处理全部文件，
  通过无缓冲通道逐个发送结果，完成顺序与目录顺序一致；
* ``channel``：调用线程扫描目录，为每个文件启动一个线程（不限并发），
  通道容量等于文件数，工作线程发送时永不阻塞，完成顺序不确定。
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict

from imgfilter.core.channel import CompletionChannel
from imgfilter.core.config import JobConfig, TaskMethod
from imgfilter.core.exceptions import SourceEnumerationError
from imgfilter.core.models import FileOutcome, WorkItem
from imgfilter.core.scanner import list_work_items
from imgfilter.core.sync import WaitGroup
from imgfilter.processing.worker import ItemProcessor, ReportCallback, emit_report, process_item

LOGGER = logging.getLogger(__name__)

Dispatcher = Callable[..., CompletionChannel[FileOutcome]]


def dispatch_with_waitgroup(
    config: JobConfig,
    *,
    report: ReportCallback = None,
    processor: ItemProcessor = process_item,
) -> CompletionChannel[FileOutcome]:
    """单工作线程 + 无缓冲通道。"""

    channel: CompletionChannel[FileOutcome] = CompletionChannel()
    wg = WaitGroup()

    wg.add(1)
    worker = threading.Thread(
        target=_drain_directory,
        args=(config, channel, wg, report, processor),
        name="imgfilter-worker",
        daemon=True,
    )
    worker.start()
    _start_supervisor(wg, channel)
    return channel


def dispatch_with_channel(
    config: JobConfig,
    *,
    report: ReportCallback = None,
    processor: ItemProcessor = process_item,
) -> CompletionChannel[FileOutcome]:
    """每个文件一个工作线程 + 容量等于文件数的缓冲通道。"""

    try:
        items = list_work_items(config.source_dir, config.dest_dir)
    except SourceEnumerationError as exc:
        emit_report(report, f"Error reading directory: {exc}")
        closed: CompletionChannel[FileOutcome] = CompletionChannel()
        closed.close()
        return closed

    channel: CompletionChannel[FileOutcome] = CompletionChannel(capacity=len(items))
    wg = WaitGroup()

    for index, item in enumerate(items):
        wg.add(1)
        threading.Thread(
            target=_run_one,
            args=(item, config, channel, wg, report, processor),
            name=f"imgfilter-item-{index}",
            daemon=True,
        ).start()

    LOGGER.info("已启动 %d 个工作线程", len(items))
    _start_supervisor(wg, channel)
    return channel


STRATEGIES: Dict[TaskMethod, Dispatcher] = {
    TaskMethod.WAITGROUP: dispatch_with_waitgroup,
    TaskMethod.CHANNEL: dispatch_with_channel,
}


def _drain_directory(
    config: JobConfig,
    channel: CompletionChannel[FileOutcome],
    wg: WaitGroup,
    report: ReportCallback,
    processor: ItemProcessor,
) -> None:
    try:
        try:
            items = list_work_items(config.source_dir, config.dest_dir)
        except SourceEnumerationError as exc:
            emit_report(report, f"Error reading directory: {exc}")
            return

        for item in items:
            channel.send(_safe_process(item, config, report, processor))
    finally:
        wg.done()


def _run_one(
    item: WorkItem,
    config: JobConfig,
    channel: CompletionChannel[FileOutcome],
    wg: WaitGroup,
    report: ReportCallback,
    processor: ItemProcessor,
) -> None:
    try:
        channel.send(_safe_process(item, config, report, processor))
    finally:
        wg.done()


def _safe_process(
    item: WorkItem,
    config: JobConfig,
    report: ReportCallback,
    processor: ItemProcessor,
) -> FileOutcome:
    """调用处理函数；意外异常也转换为结果，保证每个文件恰好发送一次。"""

    try:
        return processor(item, config.filter_name, report=report, blur_sigma=config.blur_sigma)
    except Exception as exc:  # noqa: BLE001
        LOGGER.exception("处理 %s 时发生意外异常", item.name)
        emit_report(report, f"Error applying {config.filter_name} filter to {item.name}: {exc}")
        return FileOutcome(
            name=item.name,
            source_path=item.source_path,
            status="error-worker",
            message=str(exc),
        )


def _start_supervisor(wg: WaitGroup, channel: CompletionChannel[FileOutcome]) -> None:
    def supervise() -> None:
        wg.wait()
        channel.close()
        LOGGER.debug("全部工作线程已结束，通道已关闭")

    threading.Thread(target=supervise, name="imgfilter-supervisor", daemon=True).start()

