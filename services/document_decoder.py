from __future__ import annotations

import codecs
from typing import IO

from domain.errors import DocumentDecodeError

DEFAULT_CHUNK_SIZE = 8192


def decode_document(stream: IO[bytes], key: str = "<entry>", chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """
    Read an entry stream to the end and return it as text.

    Bytes are pulled in fixed-size chunks and fed through an incremental
    UTF-8 decoder, so a multi-byte character split across two chunks is
    decoded correctly. A leading BOM is dropped.

    Either the whole document comes back or DocumentDecodeError is raised;
    callers never see partial content. Errors from the underlying archive
    stream propagate unchanged.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    decoder = codecs.getincrementaldecoder("utf-8-sig")(errors="strict")
    parts = []
    try:
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            parts.append(decoder.decode(chunk))
        parts.append(decoder.decode(b"", final=True))
    except UnicodeDecodeError as e:
        raise DocumentDecodeError(key, str(e)) from e

    return "".join(parts)
