"""命令行入口。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from imgfilter.core.config import DEFAULT_BLUR_SIGMA, JobConfig
from imgfilter.core.exceptions import InvalidConfigurationError
from imgfilter.core.models import FileOutcome
from imgfilter.core.report import write_csv_report
from imgfilter.processing.pipeline import process_images
from imgfilter.utils.logging import setup_logging

USAGE = (
    "Usage: imgfilter -src <source_folder> -dst <destination_folder> "
    "-filter <filter_type> -task <task_method>"
)

app = typer.Typer(help="批量为目录中的图片应用灰度或模糊滤镜。", add_completion=False)
console = Console(highlight=False, emoji=False, soft_wrap=True)


def _echo(message: str, *, style: Optional[str] = None) -> None:
    console.print(message, style=style, markup=False)


def _report_error(message: str) -> None:
    _echo(message, style="red")


def _notify_finished(outcome: FileOutcome) -> None:
    _echo(f"Finished processing: {outcome.name}")


@app.command("run")
def run_cli(  # noqa: PLR0913
    src: str = typer.Option("", "-src", "--src", help="Source folder containing the images"),
    dst: str = typer.Option("", "-dst", "--dst", help="Destination folder to save the filtered images"),
    filter_name: str = typer.Option("", "-filter", "--filter", help="Filter to apply (grayscale or blur)"),
    task: str = typer.Option("", "-task", "--task", help="Task method to use (waitgrp or channel)"),
    blur_sigma: float = typer.Option(DEFAULT_BLUR_SIGMA, "--blur-sigma", help="Gaussian blur sigma"),
    report: Optional[Path] = typer.Option(None, "--report", help="Write a CSV report of every outcome"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """执行批量滤镜处理。"""

    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    if not (src and dst and filter_name and task):
        _echo(USAGE)
        return

    job = JobConfig(
        source_dir=Path(src).expanduser(),
        dest_dir=Path(dst).expanduser(),
        filter_name=filter_name,
        task=task,
        blur_sigma=blur_sigma,
    )

    try:
        result = process_images(job, report=_report_error, on_finished=_notify_finished)
    except InvalidConfigurationError as exc:
        _report_error(str(exc))
        return

    _echo(f"Done: {len(result.succeeded)} succeeded, {len(result.failed)} failed.")

    if report is not None:
        try:
            write_csv_report(result.all_outcomes(), report.expanduser())
        except OSError as exc:
            _report_error(f"Error writing report: {exc}")
            return
        _echo(f"Report: {report}")


if __name__ == "__main__":
    app()
