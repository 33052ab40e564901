"""Data models for a mirror run."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Outcome(str, Enum):
    NEW = "NEW"
    UPDATED = "UPDATED"
    UNCHANGED = "UNCHANGED"
    FAILED = "FAILED"


class FailureKind(str, Enum):
    TRANSPORT = "transport"
    EMPTY = "empty"
    OVERSIZE = "oversize"
    STORAGE = "storage"


@dataclass
class FetchResult:
    path: str
    filename: str
    url: str
    staged_path: Optional[str] = None
    size: int = 0
    failure: Optional[FailureKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class ReportEntry:
    outcome: Outcome
    filename: str

    def to_line(self) -> str:
        return f"{self.outcome.value} {self.filename}"


@dataclass
class SyncCounts:
    total: int = 0
    downloaded: int = 0
    failed: int = 0


@dataclass(frozen=True)
class RunSummary:
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    new: int = 0
    updated: int = 0
    unchanged: int = 0
    failed_entries: int = 0
