import logging
import os
import shutil
import signal
from datetime import datetime
from pathlib import Path

import pytest

from docs_mirror.main import _terminate
from docs_mirror.workspace import run_context

NOW = datetime(2026, 3, 4, 5, 6, 7)


def test_scratch_is_removed_on_normal_exit(config) -> None:
    with run_context(config, now=NOW) as ctx:
        scratch = ctx.scratch_dir
        assert os.path.isdir(scratch)
        assert os.path.isdir(config.reports_dir)
        assert os.path.isdir(config.target_dir)

    assert not os.path.exists(scratch)
    assert ctx.report_path == os.path.join(config.reports_dir, "changes_2026-03-04_05-06-07.txt")
    assert ctx.log_path is None


def test_scratch_is_removed_when_run_aborts(config) -> None:
    with pytest.raises(KeyboardInterrupt):
        with run_context(config) as ctx:
            scratch = ctx.scratch_dir
            raise KeyboardInterrupt

    assert not os.path.exists(scratch)


def test_keep_temp_retains_scratch_and_writes_run_log(config, caplog) -> None:
    with caplog.at_level(logging.INFO, logger="docs_mirror"):
        with run_context(config, keep_temp=True, now=NOW) as ctx:
            logging.getLogger("docs_mirror").info("hello from the run")

    try:
        assert os.path.isdir(ctx.scratch_dir)
        log = Path(ctx.log_path)
        assert log.name == "download_2026-03-04_05-06-07.log"
        assert "hello from the run" in log.read_text(encoding="utf-8")
        assert f"Temporary files kept in: {ctx.scratch_dir}" in caplog.text
        handlers = logging.getLogger("docs_mirror").handlers
        assert not any(getattr(h, "baseFilename", None) == os.path.abspath(ctx.log_path) for h in handlers)
    finally:
        shutil.rmtree(ctx.scratch_dir, ignore_errors=True)


def test_scratch_is_removed_on_sigterm(config) -> None:
    with pytest.raises(SystemExit) as exc:
        with run_context(config) as ctx:
            scratch = ctx.scratch_dir
            _terminate(signal.SIGTERM, None)

    assert exc.value.code == 128 + signal.SIGTERM
    assert not os.path.exists(scratch)
