"""ロケールごとのメッセージカタログ。

``resources/messages/<locale>.toml`` をプロセス内で一度だけ読み込み、
読み取り専用のマッピングとして共有します。読み込み後に変更されることはないため、
複数のプロバイダーインスタンスから同期なしで参照できます。
"""

import importlib.resources
from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType

import toml

from .constants import DEFAULT_LOCALE, FALLBACK_LOCALE, MESSAGES_RESOURCES_PATH
from .utils import logger

DB_DATA_PROVIDER_USED = "DB_DATA_PROVIDER_USED"
FILE_DATA_PROVIDER_USED = "FILE_DATA_PROVIDER_USED"
TECHNICAL_ERROR_MESSAGE_DATA_IOEXCEPTION = "TECHNICAL_ERROR_MESSAGE_DATA_IOEXCEPTION"
TECHNICAL_ERROR_MESSAGE_UNKNOWN_DATABASE_TYPE = "TECHNICAL_ERROR_MESSAGE_UNKNOWN_DATABASE_TYPE"
TECHNICAL_ERROR_MESSAGE_DATABASE_EXCEPTION = "TECHNICAL_ERROR_MESSAGE_DATABASE_EXCEPTION"
TECHNICAL_ERROR_MESSAGE_EMPTY_COLUMNS = "TECHNICAL_ERROR_MESSAGE_EMPTY_COLUMNS"
TECHNICAL_ERROR_MESSAGE_DUPLICATE_COLUMNS = "TECHNICAL_ERROR_MESSAGE_DUPLICATE_COLUMNS"
TECHNICAL_ERROR_MESSAGE_SCENARIO_NOT_PREPARED = "TECHNICAL_ERROR_MESSAGE_SCENARIO_NOT_PREPARED"
TECHNICAL_ERROR_MESSAGE_SCENARIO_ALREADY_PREPARED = "TECHNICAL_ERROR_MESSAGE_SCENARIO_ALREADY_PREPARED"
TECHNICAL_ERROR_MESSAGE_READ_ONLY_PROVIDER = "TECHNICAL_ERROR_MESSAGE_READ_ONLY_PROVIDER"
TECHNICAL_ERROR_MESSAGE_RESULT_LINE = "TECHNICAL_ERROR_MESSAGE_RESULT_LINE"
DATABASE_ERROR_FORBIDDEN_WORDS_IN_QUERY = "DATABASE_ERROR_FORBIDDEN_WORDS_IN_QUERY"

_current_locale = DEFAULT_LOCALE


@lru_cache
def load_messages(locale: str) -> Mapping[str, str]:
    """指定ロケールのメッセージテーブルを読み込む。

    ファイルが存在しない場合は英語 (``en``) にフォールバックします。

    Args:
        locale: ロケール名 (``ja``, ``en`` など)。

    Returns:
        キーからメッセージテンプレートへの読み取り専用マッピング。
    """
    resource = MESSAGES_RESOURCES_PATH.joinpath(f"{locale}.toml")
    if not resource.is_file():
        if locale == FALLBACK_LOCALE:
            logger.error(f"既定のメッセージカタログが見つかりません: {resource}")
            return MappingProxyType({})
        logger.warning(f"ロケール '{locale}' のメッセージカタログが見つかりません。'{FALLBACK_LOCALE}' を使用します。")
        return load_messages(FALLBACK_LOCALE)

    with importlib.resources.as_file(resource) as path:
        with open(path, encoding="utf-8") as f:
            data = toml.load(f)
    table = data.get("messages", {})
    logger.debug(f"メッセージカタログを読み込みました: {locale} ({len(table)} 件)")
    return MappingProxyType({str(k): str(v) for k, v in table.items()})


def set_locale(locale: str) -> None:
    """起動時に一度だけ呼ばれる想定のロケール設定。"""
    global _current_locale
    _current_locale = locale or DEFAULT_LOCALE
    logger.debug(f"メッセージロケールを '{_current_locale}' に設定しました。")


def get_locale() -> str:
    return _current_locale


def get_message(key: str) -> str:
    """現在のロケールでメッセージを取得する。未定義のキーはキー自体を返す。"""
    return load_messages(_current_locale).get(key, key)


def format_message(key: str, *args: object) -> str:
    """メッセージテンプレートに ``{0}``, ``{1}`` ... の位置引数を埋め込む。"""
    template = get_message(key)
    try:
        return template.format(*args)
    except (IndexError, KeyError, ValueError):
        logger.warning(f"メッセージ '{key}' の書式化に失敗しました。引数: {args}")
        return template
