"""リレーショナルデータベースをバックエンドとするデータプロバイダー。

シナリオごとのクエリ ``<data_in_dir>/<scenario>.sql`` を実行し、その結果セットを
シナリオデータとして扱います。

- 読み取り操作のたびに接続を開いて閉じます (プーリングなし, `NullPool`)。
- クエリは実行のたびにファイルから読み直し、読み取り専用ガードを通します。
- ガードは大文字化したクエリに対する単純な部分文字列検査です。``UPDATED_AT`` の
  ようなカラム名も拒否されますし、難読化されたクエリは検出できません。
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pydantic import SecretStr
from sqlalchemy import CursorResult, Engine, Row, create_engine
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from ..core import messages
from ..core.base import BaseDataProvider
from ..core.constants import DEFAULT_ENCODING, DEFAULT_PATHS, FORBIDDEN_SQL_KEYWORDS, SQL_EXTENSION
from ..core.types import DatabaseDialect, ProviderType
from ..core.utils import cell_to_str, logger, resolve_data_file
from ..exceptions.errors import DataSourceError, ForbiddenQueryError, TechnicalError

# データベース種別ごとの SQLAlchemy ドライバー名
_DRIVER_NAMES: dict[DatabaseDialect, str] = {
    DatabaseDialect.MYSQL: "mysql+pymysql",
    DatabaseDialect.ORACLE: "oracle+oracledb",
    DatabaseDialect.POSTGRE: "postgresql+psycopg2",
}


def sql_sanitized_for_read_only(sql_input: str) -> None:
    """クエリに更新系キーワードが含まれていないか検査する。

    Args:
        sql_input: 検査するクエリ文字列。

    Raises:
        ForbiddenQueryError: ``DROP``, ``DELETE``, ``TRUNCATE``, ``UPDATE`` のいずれかを
            (大文字小文字を区別せず) 含む場合。
    """
    upper_sql = sql_input.upper()
    for keyword in FORBIDDEN_SQL_KEYWORDS:
        if keyword in upper_sql:
            raise ForbiddenQueryError(
                messages.format_message(messages.DATABASE_ERROR_FORBIDDEN_WORDS_IN_QUERY, keyword, sql_input),
                query=sql_input,
                keyword=keyword,
            )


def _advance_to(result: CursorResult, line: int) -> Row | None:
    """カーソルを ``line`` 行目 (1始まり) まで進める。途中で尽きたら None。"""
    for index, row in enumerate(result, start=1):
        if index == line:
            return row
    return None


def _find_column_index(keys: list[str], column: str) -> int | None:
    if column in keys:
        return keys.index(column)
    # Oracle などはラベルを大文字で返す
    folded = column.casefold()
    for index, key in enumerate(keys):
        if key.casefold() == folded:
            return index
    return None


class DBDataProvider(BaseDataProvider):
    """SQL クエリの結果セットを読むプロバイダー。

    Attributes:
        dialect (DatabaseDialect): データベース種別。
        connection_url (URL): SQLAlchemy の接続 URL (パスワードは表示時に伏せられる)。
    """

    provider_type = ProviderType.DB

    def __init__(
        self,
        dialect: str,
        user: str,
        password: str | SecretStr,
        host: str,
        port: int | str,
        database: str,
        *,
        data_in_dir: str | Path = DEFAULT_PATHS["data_in_dir"],
        encoding: str = DEFAULT_ENCODING,
    ):
        """DBDataProvider を初期化します。

        接続 URL を組み立てるだけで、接続は読み取り操作のたびに行います。

        Raises:
            DataSourceError: 未知のデータベース種別、または不正なポート番号の場合。
        """
        super().__init__(data_in_dir, encoding)
        try:
            self.dialect = DatabaseDialect(str(dialect).upper())
        except ValueError as e:
            logger.error(f"未知のデータベース種別が指定されました: {dialect}")
            raise DataSourceError(
                messages.format_message(messages.TECHNICAL_ERROR_MESSAGE_UNKNOWN_DATABASE_TYPE, dialect)
            ) from e
        try:
            port_number = int(port)
        except (TypeError, ValueError) as e:
            raise DataSourceError(
                messages.format_message(messages.TECHNICAL_ERROR_MESSAGE_DATABASE_EXCEPTION, f"port={port!r}")
            ) from e

        secret = password.get_secret_value() if isinstance(password, SecretStr) else password
        self.connection_url = URL.create(
            drivername=_DRIVER_NAMES[self.dialect],
            username=user,
            password=secret or None,
            host=host,
            port=port_number,
            database=database,
        )
        self._engine: Engine | None = None
        logger.info(messages.format_message(messages.DB_DATA_PROVIDER_USED, self.dialect.value))
        logger.debug(f"接続先: {self.connection_url}")

    def _create_engine(self) -> Engine:
        return create_engine(self.connection_url, poolclass=NullPool)

    def _get_engine(self) -> Engine:
        if self._engine is None:
            try:
                self._engine = self._create_engine()
            except (SQLAlchemyError, ImportError) as e:
                logger.error(f"データベースエンジンを作成できません ({self.dialect.value}): {e}")
                raise TechnicalError(
                    messages.format_message(messages.TECHNICAL_ERROR_MESSAGE_DATABASE_EXCEPTION, e)
                ) from e
        return self._engine

    def dispose(self) -> None:
        """作成済みのエンジンを破棄する。"""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def query_file(self, scenario_name: str | None = None) -> Path:
        return resolve_data_file(self.data_in_dir, scenario_name or self._require_scenario(), SQL_EXTENSION)

    def _load_query(self, scenario_name: str) -> str:
        """クエリファイルを読み込み、読み取り専用ガードを通したクエリを返す。

        Raises:
            TechnicalError: クエリファイルを読めない場合。
            ForbiddenQueryError: クエリが禁止キーワードを含む場合。
        """
        path = self.query_file(scenario_name)
        try:
            sql_request = path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"クエリファイル {path} を読み込めません: {e}")
            raise TechnicalError(
                messages.format_message(messages.TECHNICAL_ERROR_MESSAGE_DATA_IOEXCEPTION, path, e)
            ) from e
        sql_sanitized_for_read_only(sql_request)
        return sql_request

    @contextmanager
    def _execute(self, sql_request: str) -> Iterator[CursorResult]:
        """接続・カーソル・結果セットを1回の操作の範囲で確保し、必ず解放する。"""
        engine = self._get_engine()
        with engine.connect() as connection:
            # クエリ内の % をドライバーの書式指定として解釈させない
            result = connection.exec_driver_sql(sql_request, execution_options={"no_parameters": True})
            try:
                yield result
            finally:
                result.close()

    def _load_columns(self, scenario_name: str) -> list[str]:
        sql_request = self._load_query(scenario_name)
        try:
            with self._execute(sql_request) as result:
                if not result.returns_rows:
                    return []
                return list(result.keys())
        except SQLAlchemyError as e:
            logger.error(f"シナリオ '{scenario_name}' のカラムを取得できません: {e}")
            raise TechnicalError(
                messages.format_message(messages.TECHNICAL_ERROR_MESSAGE_DATABASE_EXCEPTION, e)
            ) from e

    def get_nb_lines(self) -> int:
        sql_request = self._load_query(self._require_scenario())
        try:
            with self._execute(sql_request) as result:
                return sum(1 for _ in result)
        except SQLAlchemyError as e:
            logger.error(f"get_nb_lines(): {e}")
            return 0

    def read_line(self, line: int, include_last_column: bool = True) -> list[str] | None:
        sql_request = self._load_query(self._require_scenario())
        if line == 0:
            return self._header(include_last_column)
        if line < 0:
            return None
        try:
            with self._execute(sql_request) as result:
                row = _advance_to(result, line)
                if row is None:
                    logger.debug(f"read_line({line}, {include_last_column}): データの終端に達しました。")
                    return None
                size = self._column_count(include_last_column)
                return [cell_to_str(value) for value in tuple(row)[:size]]
        except SQLAlchemyError as e:
            logger.debug(f"read_line({line}, {include_last_column}) はデータの終端として扱います: {e}")
            return None

    def read_value(self, column: str, line: int) -> str:
        sql_request = self._load_query(self._require_scenario())
        if line < 1:
            return column
        try:
            with self._execute(sql_request) as result:
                index = _find_column_index(list(result.keys()), column)
                if index is None:
                    logger.error(f"read_value({column}, {line}): カラムが結果セットにありません。")
                    return ""
                row = _advance_to(result, line)
                if row is None:
                    return ""
                return cell_to_str(row[index])
        except SQLAlchemyError as e:
            logger.error(f"read_value({column}, {line}): {e}")
            return ""
