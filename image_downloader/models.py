"""
Image Downloader Models

Result types passed between the fetch, save and batch stages, plus the
validated command line options.

Every stage reports its outcome as a value instead of raising, so one bad
URL never aborts the batch and the orchestrator can count what happened.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


# ============================================
# Enums
# ============================================

class FetchStatus(str, Enum):
    """Outcome of a single GET"""
    SUCCESS = "success"
    EMPTY = "empty"     # non-200 or blacklisted response
    ERROR = "error"     # transport fault or invalid URL


class UnitStatus(str, Enum):
    """Outcome of one fetch+save unit"""
    SAVED = "saved"
    EMPTY = "empty"
    ERROR = "error"


class UnitStage(str, Enum):
    """Stage that decided a unit's outcome"""
    FETCH = "fetch"
    SAVE = "save"


# ============================================
# Stage results
# ============================================

@dataclass
class FetchResult:
    """Result of fetching one URL."""
    url: str
    status: FetchStatus
    data: Optional[bytes] = None
    response_url: Optional[str] = None
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == FetchStatus.SUCCESS


@dataclass
class SaveResult:
    """Result of decoding and writing one image."""
    success: bool
    path: Optional[Path] = None
    directory_created: bool = False
    error: Optional[str] = None


@dataclass
class UnitResult:
    """Result of one URL's fetch+save unit."""
    url: str
    url_file: Path
    status: UnitStatus
    stage: UnitStage
    path: Optional[Path] = None
    error: Optional[str] = None


@dataclass
class BatchSummary:
    """Counters collected over a batch run."""
    files_processed: int = 0
    files_failed: int = 0
    units: int = 0
    saved: int = 0
    empty: int = 0
    failed: int = 0
    saved_paths: List[Path] = field(default_factory=list)

    def record(self, result: UnitResult) -> None:
        self.units += 1
        if result.status == UnitStatus.SAVED:
            self.saved += 1
            if result.path is not None:
                self.saved_paths.append(result.path)
        elif result.status == UnitStatus.EMPTY:
            self.empty += 1
        else:
            self.failed += 1

    def record_exception(self) -> None:
        self.units += 1
        self.failed += 1


# ============================================
# Command line
# ============================================

class CommandLineOptions(BaseModel):
    """Validated command line arguments"""
    path: Optional[Path] = Field(None, description="Directory scanned for URL-list files")
    verbose: bool = Field(False, description="Log created directories and saved files")
    max_concurrent: Optional[int] = Field(None, ge=1, description="Concurrent downloads")
    output_root: Optional[Path] = Field(None, description="Output root, defaults to the app data dir")
