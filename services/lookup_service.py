from __future__ import annotations

import logging
from typing import Optional

from domain.errors import ArchiveReadError
from repositories.archive_repo import STREAM_READ_ERRORS, RdfArchiveRepository, rdf_key_for
from services.document_decoder import decode_document

logger = logging.getLogger(__name__)


class RdfLookupService:
    """
    Single-item reader: fetch the RDF document of one ebook by its id.

    The tar is scanned in order until `cache/epub/{id}/pg{id}.rdf` is
    found; nothing past the match is read. Absence is a normal outcome
    and comes back as None. Archive problems raise the archive errors.
    """

    def __init__(self, archive: RdfArchiveRepository):
        self.archive = archive

    def get_rdf_content(self, item_id: int) -> Optional[str]:
        key = rdf_key_for(item_id)
        logger.info("Looking up %s in %s", key, self.archive.archive_path)

        with self.archive.open() as reader:
            match = reader.lookup(key)
            if match is None:
                logger.info("%s not found", key)
                return None

            entry, open_content = match
            try:
                with open_content() as stream:
                    return decode_document(stream, key=entry.key)
            except STREAM_READ_ERRORS as e:
                raise ArchiveReadError(f"Failed reading {entry.key}: {e}") from e
