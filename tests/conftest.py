"""テスト全体で共有されるfixtures。

シナリオデータファイル (CSV / Excel / SQL) の作成ヘルパーと、
SQLite を使ったデータベースプロバイダーのテスト用サブクラスを定義します。
"""
from collections.abc import Callable
from pathlib import Path

import pytest
from openpyxl import Workbook
from sqlalchemy import create_engine, text
from sqlalchemy.pool import NullPool

from scenario_data_lib.core import messages
from tests.scenario_samples import ORDERS_COLUMNS, ORDERS_QUERY, ORDERS_ROWS, SqliteDBDataProvider


@pytest.fixture(autouse=True)
def english_messages():
    """メッセージ本文を検証するテストのためにロケールを英語に固定する。"""
    previous = messages.get_locale()
    messages.set_locale("en")
    yield
    messages.set_locale(previous)


@pytest.fixture
def data_in_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data" / "in"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def create_csv_file(data_in_dir: Path) -> Callable[..., Path]:
    """``<data_in_dir>/<scenario>.csv`` を作成する関数を返す"""

    def _create(
        scenario: str,
        header: list[str],
        rows: list[list[object]],
        separator: str = ";",
        encoding: str = "utf-8",
    ) -> Path:
        path = data_in_dir / f"{scenario}.csv"
        lines = [separator.join(header)] + [separator.join(str(v) for v in row) for row in rows]
        path.write_text("\n".join(lines) + "\n", encoding=encoding)
        return path

    return _create


@pytest.fixture
def create_xlsx_file(data_in_dir: Path) -> Callable[..., Path]:
    """``<data_in_dir>/<scenario>.xlsx`` を作成する関数を返す"""

    def _create(scenario: str, header: list[str], rows: list[list[object]]) -> Path:
        path = data_in_dir / f"{scenario}.xlsx"
        workbook = Workbook()
        sheet = workbook.active
        sheet.append(header)
        for row in rows:
            sheet.append(row)
        workbook.save(path)
        return path

    return _create


@pytest.fixture
def create_sql_file(data_in_dir: Path) -> Callable[[str, str], Path]:
    def _create(scenario: str, query: str) -> Path:
        path = data_in_dir / f"{scenario}.sql"
        path.write_text(query, encoding="utf-8")
        return path

    return _create


@pytest.fixture
def sqlite_database(tmp_path: Path) -> Path:
    """orders テーブルを持つ SQLite データベースファイル"""
    path = tmp_path / "scenario.db"
    engine = create_engine(f"sqlite:///{path}", poolclass=NullPool)
    with engine.begin() as connection:
        connection.execute(text("CREATE TABLE orders (id INTEGER, amount REAL, status TEXT, note TEXT)"))
        for order_id, amount, status in ORDERS_ROWS:
            connection.execute(
                text("INSERT INTO orders VALUES (:id, :amount, :status, NULL)"),
                {"id": order_id, "amount": amount, "status": status},
            )
    engine.dispose()
    return path


@pytest.fixture
def orders_csv(create_csv_file) -> Path:
    return create_csv_file("orders", ORDERS_COLUMNS, ORDERS_ROWS)


@pytest.fixture
def orders_xlsx(create_xlsx_file) -> Path:
    return create_xlsx_file("orders", ORDERS_COLUMNS, ORDERS_ROWS)


@pytest.fixture
def orders_sql(create_sql_file) -> Path:
    return create_sql_file("orders", ORDERS_QUERY)


@pytest.fixture
def db_provider(sqlite_database: Path, data_in_dir: Path) -> SqliteDBDataProvider:
    """未準備の SQLite 版 DBDataProvider"""
    provider = SqliteDBDataProvider(sqlite_database, data_in_dir)
    yield provider
    provider.dispose()
