from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.enums import WriteMode
from domain.models import GraphStoreConfig


class Settings(BaseSettings):
    # Fuseki endpoints
    FUSEKI_DATA_URL: str = Field(
        default="http://fuseki:3030/dataset/data?graph=http://projectgutenberg.org/graph/ebooks"
    )
    FUSEKI_UPDATE_URL: str = Field(default="http://fuseki:3030/dataset/update")
    FUSEKI_QUERY_URL: str = Field(default="http://fuseki:3030/dataset/query")
    FUSEKI_USERNAME: str = Field(default="admin")
    FUSEKI_PASSWORD: str = Field(default="admin")

    # Corpus
    RDF_ARCHIVE_PATH: str = Field(default="/app/Resources/rdf-files.tar.zip")
    INNER_ARCHIVE_SUFFIX: str = Field(default=".tar")

    # Run behaviour
    WRITE_MODE: WriteMode = Field(default=WriteMode.REPLACE)
    MAX_DOCUMENTS: Optional[int] = Field(default=None, gt=0)
    TRIGGER_MARKER_PATH: str = Field(default="/app/state/graph-loader.initialized")
    USE_TRIGGER: bool = Field(default=True)

    # HTTP / logging
    REQUEST_TIMEOUT_SEC: Optional[float] = Field(default=None, gt=0)
    LOG_RESPONSE_BODY: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    def graph_store_config(self) -> GraphStoreConfig:
        return GraphStoreConfig(
            data_url=self.FUSEKI_DATA_URL,
            update_url=self.FUSEKI_UPDATE_URL,
            query_url=self.FUSEKI_QUERY_URL,
            username=self.FUSEKI_USERNAME,
            password=self.FUSEKI_PASSWORD,
            timeout_sec=self.REQUEST_TIMEOUT_SEC,
            log_response_body=self.LOG_RESPONSE_BODY,
        )


def load_settings(**overrides) -> Settings:
    """Read settings from the environment (and .env); called once by each entry point."""
    return Settings(**overrides)
