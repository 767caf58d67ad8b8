"""solrtable exceptions."""


class SolrTableError(Exception):
    """Base exception for solrtable errors."""


class TransportError(SolrTableError):
    """Raised when Solr is unreachable, rejects a request, or replies with garbage."""


class StatusError(SolrTableError):
    """Raised when Solr answers a write with a non-zero status."""

    def __init__(self, status: int, message: str | None = None) -> None:
        self.status = status
        super().__init__(message or f"Solr returned status {status}")


class ValidationError(SolrTableError):
    """Raised when a query descriptor or record is malformed."""


class ConfigurationError(SolrTableError):
    """Raised when configuration is invalid or an entity is unknown."""
