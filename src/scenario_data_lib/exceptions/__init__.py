from .errors import (
    ConfigurationError,
    DataProviderError,
    DataSourceError,
    ForbiddenQueryError,
    ProviderNotFoundError,
    ReadOnlyProviderError,
    TechnicalError,
)

__all__ = [
    "ConfigurationError",
    "DataProviderError",
    "DataSourceError",
    "ForbiddenQueryError",
    "ProviderNotFoundError",
    "ReadOnlyProviderError",
    "TechnicalError",
]
