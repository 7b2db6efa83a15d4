from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from domain.enums import RunState


# ============================================================================
# ARCHIVE RECORDS
# ============================================================================


@dataclass(frozen=True)
class ArchiveEntry:
    """
    One record of the inner tar archive.
    Identity: key (path inside the tar, unique per archive).
    size is the declared header size; it is never checked against bytes read.
    """
    key: str
    size: int
    is_directory: bool = False


# ============================================================================
# STORE CONFIGURATION
# ============================================================================


@dataclass(frozen=True)
class GraphStoreConfig:
    """Endpoints and credentials of the remote graph store."""
    data_url: str
    update_url: str
    query_url: str
    username: str
    password: str = field(repr=False)
    timeout_sec: Optional[float] = None  # None -> no client-side timeout
    log_response_body: bool = True


# ============================================================================
# RUN ACCOUNTING
# ============================================================================


@dataclass
class RunCounters:
    """
    Accumulated by the run controller only.
    documents_processed counts every entry consumed from the stream,
    whether its send succeeded, failed, or it could not be decoded.
    """
    documents_processed: int = 0
    total_bytes: int = 0
    failed_sends: int = 0
    decode_failures: int = 0
    skipped_entries: int = 0  # unreadable records, never counted as processed
    elapsed_seconds: float = 0.0

    @property
    def successful_sends(self) -> int:
        return self.documents_processed - self.failed_sends - self.decode_failures


@dataclass
class RunResult:
    state: RunState
    counters: RunCounters
    message: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.state is RunState.DONE
