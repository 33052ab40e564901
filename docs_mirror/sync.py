"""Differential sync: fetch each path, compare with the local copy, record the outcome."""

import filecmp
import logging
import os
import posixpath
import shutil
from typing import Iterable, Optional, Tuple

from .config import AppConfig
from .downloader import Downloader
from .models import Outcome, SyncCounts
from .report import RunReport

logger = logging.getLogger("docs_mirror")


def filename_for(path: str) -> str:
    """Local filename for a document path: its last segment plus ``.md``.

    Trailing slashes are ignored. Paths that differ only in their directory
    map to the same file.
    """
    return posixpath.basename(path.rstrip("/")) + ".md"


class SyncEngine:
    def __init__(self, config: AppConfig, downloader: Downloader,
                 report: Optional[RunReport] = None):
        self.config = config
        self.downloader = downloader
        self.report = report if report is not None else RunReport()

    def sync_all(self, paths: Iterable[str], scratch_dir: str) -> Tuple[RunReport, SyncCounts]:
        """Sync every path in order. Per-document failures are recorded, never raised."""
        paths = list(paths)
        counts = SyncCounts(total=len(paths))
        os.makedirs(self.config.target_dir, exist_ok=True)

        print(f"Downloading {len(paths)} documentation files...")

        for path in paths:
            if self.sync_one(path, scratch_dir) is Outcome.FAILED:
                counts.failed += 1
            else:
                counts.downloaded += 1

        return self.report, counts

    def sync_one(self, path: str, scratch_dir: str) -> Outcome:
        filename = filename_for(path)
        target_file = os.path.join(self.config.target_dir, filename)
        print(f"  Processing: {filename}")

        result = self.downloader.fetch_document(path, filename, scratch_dir)
        if not result.ok:
            logger.error(result.message)
            self.report.append(Outcome.FAILED, filename)
            return Outcome.FAILED

        # filecmp caches on (size, mtime); the staged name is reused across runs
        filecmp.clear_cache()
        try:
            if not os.path.exists(target_file):
                shutil.copyfile(result.staged_path, target_file)
                outcome = Outcome.NEW
            elif filecmp.cmp(result.staged_path, target_file, shallow=False):
                outcome = Outcome.UNCHANGED
            else:
                shutil.copyfile(result.staged_path, target_file)
                outcome = Outcome.UPDATED
        except OSError as e:
            logger.error(f"Cannot write {target_file}: {e}")
            self.report.append(Outcome.FAILED, filename)
            return Outcome.FAILED
        finally:
            os.remove(result.staged_path)

        logger.debug(f"{outcome.value} {filename} ({_format_bytes(result.size)})")
        self.report.append(outcome, filename)
        return outcome


def _format_bytes(n: int) -> str:
    if n < 1024:
        return f"{n} B"
    elif n < 1024 ** 2:
        return f"{n / 1024:.1f} KB"
    else:
        return f"{n / 1024 ** 2:.1f} MB"
