"""ライブラリの外部 API 関数。

テスト実行側 (ステップ定義やシナリオランナー) からの利用を想定しています。
プロバイダーは1シナリオにつき1インスタンスを新しく生成します。
"""

from collections.abc import Iterator

from .core.base import BaseDataProvider
from .core.provider_factory import create_data_provider
from .core.types import ProviderType
from .core.utils import logger


def open_scenario(scenario_name: str, provider_type: ProviderType | str | None = None) -> BaseDataProvider:
    """シナリオ用のプロバイダーを生成し、``prepare`` 済みの状態で返します。

    Args:
        scenario_name: シナリオ名 (データファイル名の拡張子を除いた部分)。
        provider_type: 使用するプロバイダー種別。None の場合は設定ファイルの値。

    Returns:
        BaseDataProvider: 準備済みのプロバイダー。

    Raises:
        TechnicalError: データファイルやクエリに不備がある場合。
        ProviderNotFoundError: 未知のプロバイダー種別の場合。
    """
    provider = create_data_provider(provider_type)
    provider.prepare(scenario_name)
    logger.info(f"シナリオ '{scenario_name}' を {provider.__class__.__name__} で開きました。")
    return provider


def iter_lines(provider: BaseDataProvider, include_last_column: bool = True) -> Iterator[list[str]]:
    """1行目から「データなし」(None) が返るまで順に行を返す。"""
    line = 1
    while (row := provider.read_line(line, include_last_column)) is not None:
        yield row
        line += 1


def read_all_lines(
    scenario_name: str,
    provider_type: ProviderType | str | None = None,
    include_last_column: bool = True,
) -> list[list[str]]:
    """シナリオの全データ行をリストで返す。"""
    provider = open_scenario(scenario_name, provider_type)
    rows = list(iter_lines(provider, include_last_column))
    logger.debug(f"シナリオ '{scenario_name}' から {len(rows)} 行を読み込みました。")
    return rows
