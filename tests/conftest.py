"""
Shared test fixtures: on-disk rdf-files.tar.zip builders and a mock store.
"""

import io
import tarfile
import zipfile
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union
from unittest.mock import MagicMock

import pytest

from domain.models import GraphStoreConfig

# (key, content) for a file, (key, None) for a directory
TarMember = Tuple[str, Optional[bytes]]


def rdf_doc(item_id: int) -> bytes:
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#" '
        'xmlns:pgterms="http://www.gutenberg.org/2009/pgterms/">\n'
        f'  <pgterms:ebook rdf:about="ebooks/{item_id}"/>\n'
        "</rdf:RDF>\n"
    ).encode("utf-8")


def corpus(count: int, with_dirs: bool = True) -> list:
    members: list = []
    for i in range(1, count + 1):
        if with_dirs:
            members.append((f"cache/epub/{i}", None))
        members.append((f"cache/epub/{i}/pg{i}.rdf", rdf_doc(i)))
    return members


def build_tar_bytes(members: Iterable[Union[TarMember, tarfile.TarInfo]]) -> bytes:
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w", format=tarfile.GNU_FORMAT) as tar:
        for member in members:
            if isinstance(member, tarfile.TarInfo):
                tar.addfile(member)
                continue
            key, content = member
            info = tarfile.TarInfo(key)
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            else:
                info.size = len(content)
                tar.addfile(info, io.BytesIO(content))
    return buf.getvalue()


def build_zip(path: Path, files: Iterable[Tuple[str, Optional[bytes]]]) -> Path:
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in files:
            if data is None:
                zf.writestr(zipfile.ZipInfo(name.rstrip("/") + "/"), b"")
            else:
                zf.writestr(name, data)
    return path


@pytest.fixture
def make_archive(tmp_path):
    """
    make_archive(members, tar_name="rdf-files.tar", extra=()) -> path of a
    zip holding one tar built from `members` plus any `extra` zip entries.
    """
    def _make(members, tar_name: str = "rdf-files.tar", extra=(), name: str = "rdf-files.tar.zip") -> Path:
        files = list(extra) + [(tar_name, build_tar_bytes(members))]
        return build_zip(tmp_path / name, files)

    return _make


@pytest.fixture
def store_config():
    return GraphStoreConfig(
        data_url="http://fuseki.test:3030/ds/data?graph=http://example.org/g",
        update_url="http://fuseki.test:3030/ds/update",
        query_url="http://fuseki.test:3030/ds/query",
        username="loader",
        password="s3cret",
        timeout_sec=5.0,
    )


def make_response(status_code: int = 200, text: str = "", reason: str = "OK"):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.reason = reason
    return response


@pytest.fixture
def mock_session():
    session = MagicMock()
    session.request.return_value = make_response(200)
    return session


@pytest.fixture
def mock_store():
    store = MagicMock()
    store.send.return_value = True
    return store


def pytest_configure(config):
    config.addinivalue_line("markers", "cli: tests that drive the command line entry points")
