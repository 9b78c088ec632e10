"""設定からデータプロバイダーを組み立てるファクトリ。

設定値はすべて pydantic モデルで検証してから、各プロバイダーのコンストラクタへ
明示的に渡します。
"""

import os
from typing import TypeVar

import dotenv
from pydantic import BaseModel, SecretStr, ValidationError

from ..exceptions.errors import ConfigurationError
from .base import BaseDataProvider
from .config import ProviderConfigRegistry, config_registry
from .constants import DB_PASSWORD_ENV_VAR
from .registry import get_provider_class
from .types import CsvSettings, DatabaseSettings, DataProviderSettings, ProviderType
from .utils import logger

M = TypeVar("M", bound=BaseModel)


def _validate(model: type[M], section: str, data: dict) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"設定セクション [{section}] が不正です: {e}")
        raise ConfigurationError(f"[{section}] の設定が不正です: {e}") from e


def load_provider_settings(registry: ProviderConfigRegistry | None = None) -> DataProviderSettings:
    """``[data_provider]`` セクションを検証して返す。"""
    registry = registry or config_registry
    return _validate(DataProviderSettings, "data_provider", registry.get_section("data_provider"))


def load_csv_settings(registry: ProviderConfigRegistry | None = None) -> CsvSettings:
    registry = registry or config_registry
    return _validate(CsvSettings, "csv", registry.get_section("csv"))


def _get_db_password() -> SecretStr:
    """環境変数 (.env を含む) から DB パスワードを取得する。"""
    dotenv.load_dotenv()
    return SecretStr(os.getenv(DB_PASSWORD_ENV_VAR, ""))


def load_database_settings(registry: ProviderConfigRegistry | None = None) -> DatabaseSettings:
    """``[database]`` セクションを検証して返す。

    パスワードが空の場合は環境変数 ``SCENARIO_DATA_DB_PASSWORD`` を使用します。
    """
    registry = registry or config_registry
    settings = _validate(DatabaseSettings, "database", registry.get_section("database"))
    if not settings.password.get_secret_value():
        settings.password = _get_db_password()
    return settings


def create_data_provider(
    provider_type: ProviderType | str | None = None,
    registry: ProviderConfigRegistry | None = None,
) -> BaseDataProvider:
    """設定に従ってデータプロバイダーを生成します。

    Args:
        provider_type: 使用する種別。None の場合は ``[data_provider] type`` を使用。
        registry: 設定レジストリ。None の場合は共有インスタンス。

    Returns:
        未準備 (``prepare`` 前) のプロバイダーインスタンス。

    Raises:
        ProviderNotFoundError: 未知の種別の場合。
        ConfigurationError: 設定値が不正な場合。
        DataSourceError: 未知のデータベース種別の場合。
    """
    registry = registry or config_registry
    settings = load_provider_settings(registry)
    provider_cls = get_provider_class(provider_type or settings.type)
    selected = provider_cls.provider_type
    logger.debug(f"データプロバイダー '{selected}' ({provider_cls.__name__}) を生成します。")

    match selected:
        case ProviderType.CSV:
            csv_settings = load_csv_settings(registry)
            return provider_cls(settings.data_in_dir, settings.encoding, separator=csv_settings.separator)
        case ProviderType.EXCEL:
            return provider_cls(settings.data_in_dir, settings.encoding)
        case ProviderType.DB:
            db = load_database_settings(registry)
            return provider_cls(
                db.dialect,
                db.user,
                db.password,
                db.host,
                db.port,
                db.name,
                data_in_dir=settings.data_in_dir,
                encoding=settings.encoding,
            )
