"""Per-run context and the scoped scratch workspace."""

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional

from .config import AppConfig
from .logger import add_run_log

logger = logging.getLogger("docs_mirror")

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


@dataclass(frozen=True)
class RunContext:
    """Everything one run needs to know about where it writes."""

    timestamp: str
    scratch_dir: str
    target_dir: str
    report_path: str
    log_path: Optional[str] = None
    keep_temp: bool = False


@contextmanager
def run_context(config: AppConfig, keep_temp: bool = False,
                now: Optional[datetime] = None) -> Iterator[RunContext]:
    """Create the scratch workspace for a run and release it on every exit path.

    With ``keep_temp`` the scratch directory survives, a per-run log file is
    written inside it, and its location is reported instead.
    """
    timestamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    scratch_dir = tempfile.mkdtemp(prefix="docs_mirror.")
    log_handler = None

    try:
        os.makedirs(config.reports_dir, exist_ok=True)
        os.makedirs(config.target_dir, exist_ok=True)

        log_path = None
        if keep_temp:
            log_path = os.path.join(scratch_dir, f"download_{timestamp}.log")
            log_handler = add_run_log(logger, log_path)

        yield RunContext(
            timestamp=timestamp,
            scratch_dir=scratch_dir,
            target_dir=config.target_dir,
            report_path=os.path.join(config.reports_dir, f"changes_{timestamp}.txt"),
            log_path=log_path,
            keep_temp=keep_temp,
        )
    finally:
        if log_handler is not None:
            logger.removeHandler(log_handler)
            log_handler.close()
        if keep_temp:
            logger.info(f"Temporary files kept in: {scratch_dir}")
        else:
            shutil.rmtree(scratch_dir, ignore_errors=True)
