"""Configuration: connection, logging and entity schema settings."""

from solrtable.config.settings import ObservabilitySettings, Settings, SolrSettings

__all__ = ["ObservabilitySettings", "Settings", "SolrSettings"]
