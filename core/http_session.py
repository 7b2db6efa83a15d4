from __future__ import annotations

import requests
from requests.auth import HTTPBasicAuth

from domain.models import GraphStoreConfig


def build_session(config: GraphStoreConfig) -> requests.Session:
    """
    Create one HTTP session (connection pool owner) for a run.

    Basic auth is attached once here; every request sent through the session
    carries `Authorization: Basic base64(user:pass)`.
    """
    session = requests.Session()
    session.auth = HTTPBasicAuth(config.username, config.password)
    return session
