"""核心数据模型定义。"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(slots=True, frozen=True)
class WorkItem:
    """扫描阶段得到的单个待处理文件。"""

    name: str
    source_path: Path
    dest_path: Path


@dataclass(slots=True)
class FileOutcome:
    """单个文件的处理结果，也是工作线程通过通道发送的完成事件。"""

    name: str
    source_path: Path
    status: str
    output_path: Optional[Path] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "processed"


@dataclass(slots=True)
class BatchResult:
    """按到达顺序汇总的批处理结果。"""

    succeeded: list[FileOutcome] = field(default_factory=list)
    failed: list[FileOutcome] = field(default_factory=list)
    order: list[str] = field(default_factory=list)

    def record(self, outcome: FileOutcome) -> None:
        self.order.append(outcome.name)
        if outcome.ok:
            self.succeeded.append(outcome)
        else:
            self.failed.append(outcome)

    def all_outcomes(self) -> list[FileOutcome]:
        """返回所有结果记录，方便生成报告。"""

        return [*self.succeeded, *self.failed]
