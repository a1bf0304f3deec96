"""处理任务的配置模型。"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

DEFAULT_BLUR_SIGMA = 5.0


class FilterKind(str, Enum):
    """可选的像素变换。"""

    GRAYSCALE = "grayscale"
    BLUR = "blur"


class TaskMethod(str, Enum):
    """任务分发策略。"""

    WAITGROUP = "waitgrp"  # 单个工作线程顺序处理，无缓冲通道
    CHANNEL = "channel"  # 每个文件一个工作线程，缓冲通道


@dataclass(slots=True)
class JobConfig:
    """单次批处理任务的配置集合。

    ``filter_name`` 与 ``task`` 保留原始字符串：未知的滤镜名称在逐个文件处理时
    才会被报告，未知的分发策略由 pipeline 统一拒绝。
    """

    source_dir: Path
    dest_dir: Path
    filter_name: str
    task: str
    blur_sigma: float = DEFAULT_BLUR_SIGMA
