from __future__ import annotations

from enum import Enum


class WriteMode(str, Enum):
    """
    How a document is written into the named graph.

    REPLACE -> HTTP PUT, overwrites the graph content (idempotent)
    APPEND  -> HTTP POST, adds triples to the graph (re-runs duplicate data)
    """
    REPLACE = "replace"
    APPEND = "append"

    @property
    def http_method(self) -> str:
        return "PUT" if self is WriteMode.REPLACE else "POST"


class RunState(str, Enum):
    """
    Run controller lifecycle.

    IDLE -> OPENING -> SWEEPING -> DONE | FAILED
    OPENING may go straight to DONE when there is nothing to load.
    """
    IDLE = "idle"
    OPENING = "opening"
    SWEEPING = "sweeping"
    DONE = "done"
    FAILED = "failed"


class MediaType(str, Enum):
    RDF_XML = "application/rdf+xml"
    SPARQL_UPDATE = "application/sparql-update"
    SPARQL_QUERY = "application/sparql-query"
