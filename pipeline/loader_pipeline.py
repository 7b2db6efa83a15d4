from __future__ import annotations

import logging
import time
from typing import Callable, IO, Optional

from domain.enums import RunState, WriteMode
from domain.errors import (
    ArchiveNotFoundError,
    ArchiveReadError,
    DocumentDecodeError,
    NoInnerArchiveError,
)
from domain.models import ArchiveEntry, RunCounters, RunResult
from repositories.archive_repo import STREAM_READ_ERRORS, EntryReader, RdfArchiveRepository
from repositories.graph_store_repo import GraphStoreRepository
from services.document_decoder import decode_document

logger = logging.getLogger(__name__)

Decoder = Callable[..., str]


class GraphLoaderPipeline:
    """
    Archive -> decode -> graph store, one entry at a time.

    Each document is decoded and sent exactly once; send failures and
    undecodable entries are logged, counted and skipped. Only a failure to
    read the archive itself ends the run early (FAILED). A missing archive
    or missing inner tar is "nothing to load" and ends as DONE.
    """

    def __init__(
        self,
        archive: RdfArchiveRepository,
        store: GraphStoreRepository,
        write_mode: WriteMode = WriteMode.REPLACE,
        max_documents: Optional[int] = None,
        preview_chars: int = 0,
        decoder: Decoder = decode_document,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_documents is not None and max_documents <= 0:
            raise ValueError("max_documents must be a positive integer or None")

        self.archive = archive
        self.store = store
        self.write_mode = write_mode
        self.max_documents = max_documents
        self.preview_chars = preview_chars
        self._decode = decoder
        self._clock = clock

        self.state = RunState.IDLE
        self.counters = RunCounters()
        self._reader: Optional[EntryReader] = None

    def _cap_reached(self) -> bool:
        return self.max_documents is not None and self.counters.documents_processed >= self.max_documents

    def _process_entry(self, entry: ArchiveEntry, open_content: Callable[[], IO[bytes]]) -> None:
        logger.info("Key: %s, Size: %d", entry.key, entry.size)
        self.counters.documents_processed += 1
        self.counters.total_bytes += entry.size

        try:
            with open_content() as stream:
                text = self._decode(stream, key=entry.key)
        except DocumentDecodeError as e:
            self.counters.decode_failures += 1
            logger.warning("Skipping %s: %s", entry.key, e.reason)
            return
        except STREAM_READ_ERRORS as e:
            raise ArchiveReadError(f"Failed reading {entry.key}: {e}") from e

        if self.preview_chars > 0:
            logger.info("First %d chars:\n%s", self.preview_chars, text[: self.preview_chars])

        if self.store.send(text, self.write_mode):
            logger.info("RDF data successfully sent: %s", entry.key)
        else:
            self.counters.failed_sends += 1
            logger.warning("Failed to send RDF data: %s", entry.key)

    def _finish(self, state: RunState, started: float, message: str | None = None,
                error: BaseException | None = None) -> RunResult:
        self.state = state
        self.counters.elapsed_seconds = self._clock() - started
        if self._reader is not None:
            self.counters.skipped_entries = self._reader.skipped
        c = self.counters
        logger.info(
            "%s: %d files, %d bytes, %d failed sends, %d decode failures, %.2fs elapsed.",
            "All RDF files processed" if state is RunState.DONE else "Run failed",
            c.documents_processed,
            c.total_bytes,
            c.failed_sends,
            c.decode_failures,
            c.elapsed_seconds,
        )
        return RunResult(state=state, counters=c, message=message, error=error)

    def run(self) -> RunResult:
        if self.state is not RunState.IDLE:
            raise RuntimeError("A pipeline instance runs once; create a new one to load again.")

        started = self._clock()
        self.state = RunState.OPENING
        logger.info("Opening %s", self.archive.archive_path)

        try:
            with self.archive.open() as reader:
                self._reader = reader
                self.state = RunState.SWEEPING
                logger.info("Sweeping entries (mode=%s, cap=%s)", self.write_mode.value, self.max_documents)

                for entry, open_content in reader.sweep():
                    self._process_entry(entry, open_content)
                    if self._cap_reached():
                        logger.info("Document cap of %d reached; stopping sweep", self.max_documents)
                        return self._finish(RunState.DONE, started, message="document cap reached")

        except (ArchiveNotFoundError, NoInnerArchiveError) as e:
            logger.warning("%s", e)
            return self._finish(RunState.DONE, started, message=str(e))
        except ArchiveReadError as e:
            logger.error("%s", e)
            return self._finish(RunState.FAILED, started, message=str(e), error=e)
        except Exception as e:
            logger.exception("Unexpected failure during sweep")
            return self._finish(RunState.FAILED, started, message=str(e), error=e)

        return self._finish(RunState.DONE, started)
