import pytest
from pydantic import ValidationError

from core.config import load_settings
from domain.enums import WriteMode

ENV_KEYS = [
    "FUSEKI_DATA_URL", "FUSEKI_UPDATE_URL", "FUSEKI_QUERY_URL", "FUSEKI_USERNAME", "FUSEKI_PASSWORD",
    "RDF_ARCHIVE_PATH", "INNER_ARCHIVE_SUFFIX", "WRITE_MODE", "MAX_DOCUMENTS", "TRIGGER_MARKER_PATH",
    "USE_TRIGGER", "REQUEST_TIMEOUT_SEC", "LOG_RESPONSE_BODY", "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    settings = load_settings(_env_file=None)

    assert settings.FUSEKI_DATA_URL == (
        "http://fuseki:3030/dataset/data?graph=http://projectgutenberg.org/graph/ebooks"
    )
    assert settings.RDF_ARCHIVE_PATH == "/app/Resources/rdf-files.tar.zip"
    assert settings.WRITE_MODE is WriteMode.REPLACE
    assert settings.MAX_DOCUMENTS is None
    assert settings.USE_TRIGGER is True
    assert settings.REQUEST_TIMEOUT_SEC is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FUSEKI_DATA_URL", "http://store:3030/ds/data")
    monkeypatch.setenv("FUSEKI_USERNAME", "bob")
    monkeypatch.setenv("FUSEKI_PASSWORD", "hunter2")
    monkeypatch.setenv("WRITE_MODE", "append")
    monkeypatch.setenv("MAX_DOCUMENTS", "10")
    monkeypatch.setenv("USE_TRIGGER", "false")
    monkeypatch.setenv("REQUEST_TIMEOUT_SEC", "30")

    settings = load_settings(_env_file=None)

    assert settings.WRITE_MODE is WriteMode.APPEND
    assert settings.MAX_DOCUMENTS == 10
    assert settings.USE_TRIGGER is False

    config = settings.graph_store_config()
    assert config.data_url == "http://store:3030/ds/data"
    assert (config.username, config.password) == ("bob", "hunter2")
    assert config.timeout_sec == 30.0


def test_env_file_is_read(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("FUSEKI_QUERY_URL=http://elsewhere/query\nLOG_RESPONSE_BODY=false\n")

    settings = load_settings(_env_file=str(env_file))

    assert settings.FUSEKI_QUERY_URL == "http://elsewhere/query"
    assert settings.graph_store_config().log_response_body is False


def test_password_not_in_repr(monkeypatch):
    monkeypatch.setenv("FUSEKI_PASSWORD", "topsecret")
    config = load_settings(_env_file=None).graph_store_config()
    assert "topsecret" not in repr(config)


@pytest.mark.parametrize("key,value", [("MAX_DOCUMENTS", "0"), ("WRITE_MODE", "upsert")])
def test_invalid_values_rejected(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ValidationError):
        load_settings(_env_file=None)
