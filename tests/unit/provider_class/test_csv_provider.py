from pathlib import Path

import pytest

from scenario_data_lib.exceptions import DataSourceError, TechnicalError
from scenario_data_lib.provider_class.csv_provider import CsvDataProvider
from tests.scenario_samples import ORDERS_COLUMNS


@pytest.fixture
def orders_provider(data_in_dir: Path, orders_csv: Path) -> CsvDataProvider:
    provider = CsvDataProvider(data_in_dir)
    provider.prepare("orders")
    return provider


class TestCsvDataProvider:
    """CsvDataProvider の読み取り契約のテスト"""

    def test_prepare_derives_columns_from_header(self, orders_provider: CsvDataProvider):
        assert orders_provider.scenario_name == "orders"
        assert orders_provider.get_columns() == ORDERS_COLUMNS

    def test_get_nb_lines_counts_data_rows(self, orders_provider: CsvDataProvider):
        assert orders_provider.get_nb_lines() == 3

    def test_read_line_returns_row_values(self, orders_provider: CsvDataProvider):
        assert orders_provider.read_line(2, True) == ["102", "49.99", "shipped"]
        assert orders_provider.read_line(3) == ["103", "7.25", "delivered"]

    def test_read_line_past_end_returns_none(self, orders_provider: CsvDataProvider):
        assert orders_provider.read_line(4, True) is None
        assert orders_provider.read_line(-1, True) is None

    def test_read_line_zero_returns_header(self, orders_provider: CsvDataProvider):
        assert orders_provider.read_line(0, True) == ["id", "amount", "status"]
        assert orders_provider.read_line(0, False) == ["id", "amount"]

    def test_read_line_without_last_column(self, orders_provider: CsvDataProvider):
        assert orders_provider.read_line(2, False) == ["102", "49.99"]

    def test_read_value(self, orders_provider: CsvDataProvider):
        assert orders_provider.read_value("status", 2) == "shipped"
        assert orders_provider.read_value("id", 1) == "101"

    @pytest.mark.parametrize("column", ORDERS_COLUMNS)
    def test_read_value_line_zero_echoes_column(self, orders_provider: CsvDataProvider, column: str):
        assert orders_provider.read_value(column, 0) == column

    def test_read_value_misses_return_empty_string(self, orders_provider: CsvDataProvider):
        assert orders_provider.read_value("status", 10) == ""
        assert orders_provider.read_value("unknown", 1) == ""

    def test_empty_fields_are_empty_strings(self, data_in_dir: Path, create_csv_file):
        create_csv_file("sparse", ["a", "b", "c"], [["1", "", "3"]])
        provider = CsvDataProvider(data_in_dir)
        provider.prepare("sparse")
        assert provider.read_line(1) == ["1", "", "3"]
        assert provider.read_value("b", 1) == ""

    def test_values_are_not_type_inferred(self, data_in_dir: Path, create_csv_file):
        create_csv_file("codes", ["code", "amount"], [["007", "1.50"]])
        provider = CsvDataProvider(data_in_dir)
        provider.prepare("codes")
        assert provider.read_line(1) == ["007", "1.50"]

    def test_custom_separator_and_encoding(self, data_in_dir: Path, create_csv_file):
        create_csv_file("clients", ["nom", "ville"], [["Éloïse", "Orléans"]], separator=",", encoding="latin-1")
        provider = CsvDataProvider(data_in_dir, encoding="latin-1", separator=",")
        provider.prepare("clients")
        assert provider.read_line(1) == ["Éloïse", "Orléans"]

    def test_header_only_file_has_no_lines(self, data_in_dir: Path, create_csv_file):
        create_csv_file("empty_orders", ORDERS_COLUMNS, [])
        provider = CsvDataProvider(data_in_dir)
        provider.prepare("empty_orders")
        assert provider.get_nb_lines() == 0
        assert provider.read_line(1) is None

    def test_missing_file_is_fatal(self, data_in_dir: Path):
        provider = CsvDataProvider(data_in_dir)
        with pytest.raises(TechnicalError):
            provider.prepare("missing")
        assert provider.scenario_name is None

    def test_empty_file_has_no_columns(self, data_in_dir: Path):
        (data_in_dir / "blank.csv").write_text("", encoding="utf-8")
        provider = CsvDataProvider(data_in_dir)
        with pytest.raises(DataSourceError):
            provider.prepare("blank")

    def test_file_removed_after_prepare_is_fatal(self, orders_provider: CsvDataProvider, orders_csv: Path):
        orders_csv.unlink()
        with pytest.raises(TechnicalError):
            orders_provider.read_line(1)

    def test_reads_before_prepare_are_rejected(self, data_in_dir: Path):
        provider = CsvDataProvider(data_in_dir)
        with pytest.raises(TechnicalError):
            provider.get_nb_lines()

    def test_prepare_with_another_scenario_is_rejected(self, orders_provider: CsvDataProvider, create_csv_file):
        create_csv_file("customers", ["name"], [["Alice"]])
        with pytest.raises(TechnicalError):
            orders_provider.prepare("customers")
        # 同じシナリオでの再準備は許可される
        orders_provider.prepare("orders")
        assert orders_provider.get_columns() == ORDERS_COLUMNS


class TestCsvWriteResult:
    """結果カラムへの書き戻しのテスト"""

    def test_write_result_updates_last_column(self, data_in_dir: Path, create_csv_file):
        create_csv_file("login", ["user", "password", "result"], [["alice", "pw1", ""], ["bob", "pw2", ""]])
        provider = CsvDataProvider(data_in_dir)
        provider.prepare("login")

        provider.write_result(2, "OK")

        assert provider.read_value("result", 2) == "OK"
        assert provider.read_value("result", 1) == ""
        assert provider.read_line(2, False) == ["bob", "pw2"]
        reloaded = CsvDataProvider(data_in_dir)
        reloaded.prepare("login")
        assert reloaded.read_line(2) == ["bob", "pw2", "OK"]

    @pytest.mark.parametrize("line", [0, 4])
    def test_write_result_rejects_unknown_line(self, orders_provider: CsvDataProvider, line: int):
        with pytest.raises(TechnicalError):
            orders_provider.write_result(line, "OK")


def test_duplicate_column_names_are_rejected(data_in_dir: Path, create_csv_file):
    create_csv_file("twins", ["id", "id", "result"], [["1", "2", ""]])
    provider = CsvDataProvider(data_in_dir)
    with pytest.raises(TechnicalError):
        provider.prepare("twins")
