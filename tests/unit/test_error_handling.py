from pathlib import Path

import pytest

from scenario_data_lib.exceptions import (
    ConfigurationError,
    DataProviderError,
    DataSourceError,
    ForbiddenQueryError,
    ProviderNotFoundError,
    ReadOnlyProviderError,
    TechnicalError,
)
from scenario_data_lib.provider_class.csv_provider import CsvDataProvider
from scenario_data_lib.provider_class.db_provider import DBDataProvider


class TestErrorHandling:
    """エラーハンドリングのテスト"""

    @pytest.mark.parametrize(
        "exception_class",
        [TechnicalError, DataSourceError, ReadOnlyProviderError, ConfigurationError],
    )
    def test_exceptions_share_base_class(self, exception_class: type[Exception]) -> None:
        """すべての例外が DataProviderError として捕捉できること"""
        with pytest.raises(DataProviderError):
            raise exception_class("テスト例外メッセージ")

    @pytest.mark.parametrize("exception_class", [DataSourceError, ReadOnlyProviderError])
    def test_fatal_errors_are_technical_errors(self, exception_class: type[TechnicalError]) -> None:
        error = exception_class("詳細")
        assert isinstance(error, TechnicalError)
        assert error.message == "詳細"
        assert "詳細" in str(error)

    def test_forbidden_query_error_attributes(self) -> None:
        error = ForbiddenQueryError("禁止語", query="DROP TABLE orders", keyword="DROP")
        assert isinstance(error, TechnicalError)
        assert error.query == "DROP TABLE orders"
        assert error.keyword == "DROP"
        assert str(error) == "禁止クエリエラー: 禁止語"

    def test_provider_not_found_is_not_technical_error(self) -> None:
        error = ProviderNotFoundError("JSON")
        assert not isinstance(error, TechnicalError)
        assert str(error) == "プロバイダー未検出エラー: JSON"

    def test_technical_error_str(self) -> None:
        assert str(TechnicalError("ファイルがありません")) == "技術エラー: ファイルがありません"
        assert str(ConfigurationError("不正な値")) == "設定エラー: 不正な値"

    def test_error_message_uses_message_catalog(self, data_in_dir: Path) -> None:
        """例外メッセージはメッセージカタログの現在ロケールで解決される"""
        provider = CsvDataProvider(data_in_dir)
        with pytest.raises(TechnicalError) as exc_info:
            provider.read_line(1)
        assert exc_info.value.message == "No scenario has been prepared. Call prepare() first."

    def test_read_only_error_message(self, data_in_dir: Path) -> None:
        provider = DBDataProvider("POSTGRE", "u", "p", "h", 5432, "d", data_in_dir=data_in_dir)
        with pytest.raises(ReadOnlyProviderError) as exc_info:
            provider.write_result(1, "OK")
        assert "read-only" in exc_info.value.message
