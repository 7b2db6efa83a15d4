from services.document_decoder import decode_document, DEFAULT_CHUNK_SIZE
from services.lookup_service import RdfLookupService
from services.trigger_service import OneShotTrigger

__all__ = [
    "decode_document",
    "DEFAULT_CHUNK_SIZE",
    "RdfLookupService",
    "OneShotTrigger",
]
