from __future__ import annotations

import logging
from typing import Optional

import requests

from core.http_session import build_session
from domain.enums import MediaType, WriteMode
from domain.models import GraphStoreConfig

logger = logging.getLogger(__name__)


class GraphStoreRepository:
    """
    Fuseki client over the SPARQL 1.1 Graph Store HTTP Protocol.

    RESPONSIBILITIES:
    - Write RDF/XML documents into the configured named graph
      (PUT replaces the graph, POST appends to it)
    - Submit SPARQL Update / Query text to their own endpoints

    NOTE:
    No method raises on remote or transport failure. Every failure is logged
    and turned into a False / None return; the caller decides what it means.
    """

    def __init__(self, config: GraphStoreConfig, session: requests.Session | None = None):
        self._config = config
        self._session = session or build_session(config)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "GraphStoreRepository":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # =====================================================================
    # Helpers
    # =====================================================================

    def _post_or_put(
        self,
        method: str,
        url: str,
        body: str,
        media_type: MediaType,
    ) -> Optional[requests.Response]:
        try:
            return self._session.request(
                method,
                url,
                data=body.encode("utf-8"),
                headers={"Content-Type": media_type.value},
                timeout=self._config.timeout_sec,
            )
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            return None

    def _log_response(self, response: requests.Response) -> None:
        logger.info("Response: %s %s", response.status_code, response.reason or "")
        if self._config.log_response_body and response.text:
            logger.info("%s", response.text)

    @staticmethod
    def _is_success(response: requests.Response) -> bool:
        return 200 <= response.status_code < 300

    # =====================================================================
    # Graph store writes
    # =====================================================================

    def send(self, rdf_xml: str, mode: WriteMode = WriteMode.REPLACE) -> bool:
        """
        Write one RDF/XML document to the data endpoint.

        REPLACE re-sent with the same document leaves the graph unchanged;
        APPEND re-sent adds the triples again unless the store deduplicates.
        """
        response = self._post_or_put(mode.http_method, self._config.data_url, rdf_xml, MediaType.RDF_XML)
        if response is None:
            return False

        self._log_response(response)
        return self._is_success(response)

    # =====================================================================
    # SPARQL endpoints (alternate operations, not used by the sweep)
    # =====================================================================

    def update(self, sparql_update: str) -> bool:
        response = self._post_or_put("POST", self._config.update_url, sparql_update, MediaType.SPARQL_UPDATE)
        if response is None:
            return False

        self._log_response(response)
        return self._is_success(response)

    def query(self, sparql_query: str) -> Optional[str]:
        """Run a query and return the raw result body, or None on failure."""
        response = self._post_or_put("POST", self._config.query_url, sparql_query, MediaType.SPARQL_QUERY)
        if response is None:
            return None

        logger.info("Response: %s %s", response.status_code, response.reason or "")
        logger.info("%s", response.text)
        if not self._is_success(response):
            return None
        return response.text
