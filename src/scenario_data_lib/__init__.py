from .api import iter_lines, open_scenario, read_all_lines
from .core.base import BaseDataProvider
from .core.config import config_registry
from .core.messages import set_locale
from .core.registry import initialize_registry, list_available_providers
from .core.types import ProviderType
from .exceptions.errors import (
    ConfigurationError,
    DataProviderError,
    DataSourceError,
    ForbiddenQueryError,
    ProviderNotFoundError,
    ReadOnlyProviderError,
    TechnicalError,
)
from .provider_class.csv_provider import CsvDataProvider
from .provider_class.db_provider import DBDataProvider
from .provider_class.excel_provider import ExcelDataProvider

# --- Public API ---
__all__ = [
    "BaseDataProvider",
    "ConfigurationError",
    "CsvDataProvider",
    "DBDataProvider",
    "DataProviderError",
    "DataSourceError",
    "ExcelDataProvider",
    "ForbiddenQueryError",
    "ProviderNotFoundError",
    "ProviderType",
    "ReadOnlyProviderError",
    "TechnicalError",
    "iter_lines",
    "list_available_providers",
    "open_scenario",
    "read_all_lines",
]

initialize_registry()
# メッセージカタログのロケールは起動時に一度だけ決める
set_locale(config_registry.get("messages", "locale", "ja"))
