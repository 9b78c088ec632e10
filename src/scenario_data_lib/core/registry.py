"""データプロバイダー種別とプロバイダークラスの対応表。

対応表は閉じた集合 (`ProviderType`) で、設定で明示された種別から
クラスを引くだけです。モジュール走査や実行時の型調査は行いません。
"""

from ..exceptions.errors import ProviderNotFoundError
from ..provider_class.csv_provider import CsvDataProvider
from ..provider_class.db_provider import DBDataProvider
from ..provider_class.excel_provider import ExcelDataProvider
from .base import BaseDataProvider
from .types import ProviderType
from .utils import logger

ProviderClass = type[BaseDataProvider]

_PROVIDER_CLASS_REGISTRY: dict[ProviderType, ProviderClass] = {}


def register_providers() -> dict[ProviderType, ProviderClass]:
    """組み込みのプロバイダークラスをすべて登録します。

    Returns:
        dict[ProviderType, ProviderClass]: 登録済みのレジストリ。
    """
    for provider_cls in (CsvDataProvider, ExcelDataProvider, DBDataProvider):
        if provider_cls.provider_type in _PROVIDER_CLASS_REGISTRY:
            logger.debug(f"プロバイダー '{provider_cls.provider_type}' は登録済みです。上書きします。")
        _PROVIDER_CLASS_REGISTRY[provider_cls.provider_type] = provider_cls
    logger.debug(f"データプロバイダーの登録が完了しました: {list_available_providers()}")
    return _PROVIDER_CLASS_REGISTRY


def get_cls_obj_registry() -> dict[ProviderType, ProviderClass]:
    """プロバイダークラスのレジストリを取得 (未登録なら登録する)"""
    if not _PROVIDER_CLASS_REGISTRY:
        register_providers()
    return _PROVIDER_CLASS_REGISTRY


def get_provider_class(provider_type: ProviderType | str) -> ProviderClass:
    """種別名からプロバイダークラスを取得する。

    Args:
        provider_type: ``CSV`` / ``EXCEL`` / ``DB`` (大文字小文字は区別しない)。

    Raises:
        ProviderNotFoundError: 未知の種別の場合。
    """
    try:
        key = ProviderType(str(provider_type).upper())
    except ValueError as e:
        logger.error(f"要求されたプロバイダー種別 '{provider_type}' はレジストリに存在しません。")
        raise ProviderNotFoundError(str(provider_type)) from e
    registry = get_cls_obj_registry()
    if key not in registry:
        raise ProviderNotFoundError(key.value)
    return registry[key]


def list_available_providers() -> list[str]:
    """利用可能なプロバイダー種別名のリストを返します。"""
    return [provider_type.value for provider_type in _PROVIDER_CLASS_REGISTRY]


def initialize_registry() -> None:
    """logger とレジストリの初期化を明示的に行う。"""
    from .utils import init_logger

    init_logger()
    register_providers()
