from __future__ import annotations

import logging
import os
import tarfile
import zipfile
import zlib
from contextlib import contextmanager
from typing import IO, Callable, Iterator, Optional, Tuple

from domain.errors import ArchiveNotFoundError, ArchiveReadError, NoInnerArchiveError
from domain.models import ArchiveEntry

logger = logging.getLogger(__name__)

# Low-level failures raised while pulling bytes out of the zip or tar streams
STREAM_READ_ERRORS = (tarfile.TarError, zipfile.BadZipFile, zlib.error, EOFError)

RDF_KEY_PATTERN = "cache/epub/{id}/pg{id}.rdf"

# (entry, open_content) -- open_content is only valid until the next entry is read
EntryHandle = Tuple[ArchiveEntry, Callable[[], IO[bytes]]]


def rdf_key_for(item_id: int | str) -> str:
    return RDF_KEY_PATTERN.format(id=item_id)


class EntryReader:
    """
    Forward-only walk over an open tar stream.

    The tar is opened in stream mode ("r|"), so entries can only be visited
    once and in stored order. To start over, reopen the archive.
    """

    def __init__(self, tar: tarfile.TarFile):
        self._tar = tar
        self._consumed = False
        self.skipped = 0

    def entries(self) -> Iterator[EntryHandle]:
        """
        Yield every readable record, directories included.
        Records with no name or no readable payload are skipped.
        """
        if self._consumed:
            raise RuntimeError("Entry stream already consumed; reopen the archive to walk it again.")
        self._consumed = True

        try:
            for member in self._tar:
                if not member.name:
                    logger.warning("Skipping unnamed tar record at offset %d", member.offset)
                    self.skipped += 1
                    continue
                if not (member.isdir() or member.isfile()):
                    logger.warning("Skipping unreadable tar record %s (type %r)", member.name, member.type)
                    self.skipped += 1
                    continue

                entry = ArchiveEntry(key=member.name, size=member.size, is_directory=member.isdir())
                yield entry, self._opener(member)
        except STREAM_READ_ERRORS as e:
            raise ArchiveReadError(f"Inner archive is corrupt: {e}") from e

    def sweep(self) -> Iterator[EntryHandle]:
        """Every non-directory entry, in archive order."""
        for entry, open_content in self.entries():
            if entry.is_directory:
                continue
            yield entry, open_content

    def lookup(self, key: str) -> Optional[EntryHandle]:
        """
        First non-directory entry whose key equals `key` exactly.
        Scanning stops at the match; None when the stream ends without one.
        """
        for entry, open_content in self.sweep():
            if entry.key == key:
                return entry, open_content
        return None

    def _opener(self, member: tarfile.TarInfo) -> Callable[[], IO[bytes]]:
        def open_content() -> IO[bytes]:
            stream = self._tar.extractfile(member)
            if stream is None:
                raise ArchiveReadError(f"No content stream for {member.name}")
            return stream

        return open_content


class RdfArchiveRepository:
    """
    Archive source: a zip container holding a single tar of RDF files.

    RESPONSIBILITIES:
    - Open the zip and pick the inner tar by file suffix (case-insensitive)
    - Stream the tar straight out of the zip, never extracting to disk
    - Keep the zip, the tar member stream and the tar reader open for
      exactly as long as the caller walks the entries

    Only the selected zip member is read; the rest of the container is
    touched only through its central directory.
    """

    def __init__(self, archive_path: str, inner_suffix: str = ".tar"):
        self.archive_path = archive_path
        self.inner_suffix = inner_suffix

    def _locate_inner(self, zf: zipfile.ZipFile) -> zipfile.ZipInfo:
        suffix = self.inner_suffix.lower()
        for info in zf.infolist():
            if info.is_dir():
                continue
            if info.filename and info.filename.lower().endswith(suffix):
                return info
        raise NoInnerArchiveError(f"No {self.inner_suffix} file found in the ZIP archive.")

    @contextmanager
    def open(self) -> Iterator[EntryReader]:
        """
        Usage:
            with repo.open() as reader:
                for entry, open_content in reader.sweep():
                    ...

        Raises ArchiveNotFoundError, NoInnerArchiveError or ArchiveReadError.
        Everything opened here is closed on exit, inner before outer.
        """
        if not os.path.isfile(self.archive_path):
            raise ArchiveNotFoundError(f"Archive not found: {self.archive_path}")

        try:
            zf = zipfile.ZipFile(self.archive_path, "r")
        except (zipfile.BadZipFile, OSError) as e:
            raise ArchiveReadError(f"Cannot open {self.archive_path}: {e}") from e

        with zf:
            info = self._locate_inner(zf)
            logger.info("Inner archive: %s (%d bytes compressed)", info.filename, info.compress_size)

            try:
                inner_stream = zf.open(info, "r")
            except (zipfile.BadZipFile, NotImplementedError, OSError) as e:
                raise ArchiveReadError(f"Cannot open {info.filename}: {e}") from e

            with inner_stream:
                try:
                    # First header must parse; a bad one at offset 0 raises ReadError here
                    tar = tarfile.open(fileobj=inner_stream, mode="r|")
                except (tarfile.TarError, zipfile.BadZipFile, OSError) as e:
                    raise ArchiveReadError(f"{info.filename} is not a readable tar: {e}") from e

                with tar:
                    yield EntryReader(tar)
