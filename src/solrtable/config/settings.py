"""solrtable settings: Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (when loaded with ``Settings.from_yaml``)
  2. Environment variables (SOLRTABLE_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from solrtable.exceptions import ConfigurationError
from solrtable.models.schema import EntitySchema


class SolrSettings(BaseModel):
    """Connection parameters for the Solr core."""

    host: str = Field(default="localhost", description="Solr host")
    port: int = Field(default=8983, description="Solr port")
    path: str = Field(default="/solr", description="Solr base path")
    core: str = Field(default="collection1", description="Core/collection name")
    timeout: float = Field(default=15.0, gt=0, description="Fixed HTTP timeout in seconds")
    username: str | None = Field(default=None, description="Basic-auth username")
    password: str | None = Field(default=None, description="Basic-auth password")
    scheme: str = Field(default="http", description="URL scheme: http or https")

    @field_validator("path")
    @classmethod
    def _normalize_path(cls, v: str) -> str:
        v = v.strip().strip("/")
        return f"/{v}" if v else ""

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}{self.path}"


class ObservabilitySettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root settings.

    Configuration is loaded from environment variables with the SOLRTABLE_ prefix.
    Nested settings use double underscores: SOLRTABLE_SOLR__PORT=8984

    Example:
        SOLRTABLE_SOLR__HOST=solr.internal
        SOLRTABLE_SOLR__CORE=articles
        SOLRTABLE_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "SOLRTABLE_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    solr: SolrSettings = Field(default_factory=SolrSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)
    entities: dict[str, EntitySchema] = Field(default_factory=dict, description="Entity schemas by name")

    @field_validator("entities", mode="before")
    @classmethod
    def _name_entities(cls, v: object) -> object:
        """Default each entity's ``name`` to its key in the mapping."""
        if isinstance(v, dict):
            return {
                key: ({"name": key} | spec) if isinstance(spec, dict) else spec
                for key, spec in v.items()
            }
        return v

    def entity(self, name: str) -> EntitySchema:
        """Look up a configured entity schema by name."""
        try:
            return self.entities[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown entity '{name}'. Configured entities: {list(self.entities)}"
            ) from None

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Keys present in the YAML file win over environment variables; keys
        it leaves out still fall back to the environment, then to defaults.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
