"""Run report persistence and end-of-run summary."""

import logging
import os
from typing import List, Optional

from .models import Outcome, ReportEntry, RunSummary, SyncCounts
from .workspace import RunContext

logger = logging.getLogger("docs_mirror")


class RunReport:
    """Append-only record of per-document outcomes, written through to disk."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.entries: List[ReportEntry] = []
        if path:
            # Truncate: a report belongs to exactly one run
            with open(path, "w", encoding="utf-8"):
                pass

    def append(self, outcome: Outcome, filename: str) -> ReportEntry:
        entry = ReportEntry(outcome, filename)
        self.entries.append(entry)
        if self.path:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(entry.to_line() + "\n")
        return entry

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @classmethod
    def load(cls, path: str) -> "RunReport":
        """Read a persisted report. A missing file gives an empty report."""
        report = cls()
        report.path = path
        if not os.path.exists(path):
            return report

        with open(path, encoding="utf-8") as f:
            for line in f:
                outcome, _, filename = line.rstrip("\n").partition(" ")
                if outcome not in Outcome.__members__ or not filename:
                    continue
                report.entries.append(ReportEntry(Outcome(outcome), filename))
        return report


def summarize(report: Optional[RunReport], counts: Optional[SyncCounts]) -> RunSummary:
    tally = {outcome: 0 for outcome in Outcome}
    for entry in report or ():
        tally[entry.outcome] += 1

    counts = counts or SyncCounts()
    return RunSummary(
        total=counts.total,
        succeeded=counts.downloaded,
        failed=counts.failed,
        new=tally[Outcome.NEW],
        updated=tally[Outcome.UPDATED],
        unchanged=tally[Outcome.UNCHANGED],
        failed_entries=tally[Outcome.FAILED],
    )


def show_summary(summary: RunSummary, context: RunContext):
    print()
    print("=== DOWNLOAD SUMMARY ===")
    logger.info(f"Total URLs processed: {summary.total}")
    logger.info(f"Successfully downloaded: {summary.succeeded}")
    if summary.failed > 0:
        logger.error(f"Failed downloads: {summary.failed}")

    print()
    print("=== CHANGES SUMMARY ===")
    print(f"  New files: {summary.new}")
    print(f"  Updated files: {summary.updated}")
    print(f"  Unchanged files: {summary.unchanged}")
    if summary.failed_entries > 0:
        print(f"  Failed downloads: {summary.failed_entries}")

    print()
    logger.info(f"Documentation saved to: {context.target_dir}")
    if context.log_path:
        print(f"Download log: {context.log_path}")
    print(f"Changes report: {context.report_path}")
