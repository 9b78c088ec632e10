"""シナリオデータプロバイダーの基底クラス。

このモジュールは、すべてのバックエンド (CSV, Excel, データベース) が実装する
共通の読み取り契約 `BaseDataProvider` と、ファイル系バックエンド共通の
`FileBaseDataProvider` を提供します。

読み取り契約:
    - ``prepare(scenario_name)`` でシナリオを一度だけ設定し、カラム一覧を確定する。
    - 行番号は呼び出し側から見て 1 始まり。0 行目はヘッダー (カラム名) を表す。
    - 「データが無い」は例外ではなく ``0`` / ``""`` / ``None`` で返す。
    - 設定やデータファイルの不備は `TechnicalError` として送出する。
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

from ..exceptions.errors import DataSourceError, ReadOnlyProviderError, TechnicalError
from . import messages
from .constants import DEFAULT_ENCODING
from .types import ProviderType
from .utils import logger, resolve_data_file


class BaseDataProvider(ABC):
    """シナリオデータプロバイダーの抽象基底クラス。

    1インスタンスは1シナリオ専用です。スレッド間で共有しないでください。

    Attributes:
        provider_type (ProviderType): レジストリでの種別名。
        data_in_dir (Path): シナリオデータファイルを置くディレクトリ。
        encoding (str): シナリオデータファイルの文字コード。
        scenario_name (str | None): ``prepare`` で設定されたシナリオ名。
        columns (list[str]): カラム一覧 (``prepare`` で確定)。
    """

    provider_type: ClassVar[ProviderType]

    def __init__(self, data_in_dir: str | Path, encoding: str = DEFAULT_ENCODING):
        self.data_in_dir = Path(data_in_dir)
        self.encoding = encoding
        self.scenario_name: str | None = None
        self.columns: list[str] = []

    def prepare(self, scenario_name: str) -> None:
        """シナリオ名を設定し、カラム一覧を導出します。

        Args:
            scenario_name: 読み込むシナリオ名。

        Raises:
            TechnicalError: 別のシナリオで準備済みの場合、またはデータソースが読めない場合。
            DataSourceError: データソースにカラムが1つも無い場合、またはカラム名が重複している場合。
        """
        if self.scenario_name is not None and self.scenario_name != scenario_name:
            raise TechnicalError(
                messages.format_message(
                    messages.TECHNICAL_ERROR_MESSAGE_SCENARIO_ALREADY_PREPARED, self.scenario_name, scenario_name
                )
            )

        columns = self._load_columns(scenario_name)
        if not columns:
            raise DataSourceError(
                messages.format_message(messages.TECHNICAL_ERROR_MESSAGE_EMPTY_COLUMNS, scenario_name)
            )
        duplicates = sorted({name for name in columns if columns.count(name) > 1})
        if duplicates:
            raise DataSourceError(
                messages.format_message(messages.TECHNICAL_ERROR_MESSAGE_DUPLICATE_COLUMNS, scenario_name, duplicates)
            )
        self.scenario_name = scenario_name
        self.columns = list(columns)
        logger.debug(f"シナリオ '{scenario_name}' を準備しました。カラム: {self.columns}")

    def get_columns(self) -> list[str]:
        """カラム一覧のコピーを返します。"""
        self._require_scenario()
        return list(self.columns)

    def _require_scenario(self) -> str:
        if self.scenario_name is None:
            raise TechnicalError(messages.get_message(messages.TECHNICAL_ERROR_MESSAGE_SCENARIO_NOT_PREPARED))
        return self.scenario_name

    def _column_count(self, include_last_column: bool) -> int:
        return len(self.columns) if include_last_column else len(self.columns) - 1

    def _header(self, include_last_column: bool) -> list[str]:
        """0 行目 (ヘッダー) の内容。"""
        return self.columns[: self._column_count(include_last_column)]

    @abstractmethod
    def _load_columns(self, scenario_name: str) -> list[str]:
        """データソースが宣言するカラム名を順序どおりに返す。"""
        raise NotImplementedError

    @abstractmethod
    def get_nb_lines(self) -> int:
        """データ行数 (ヘッダーを除く) を返す。判定できない場合は 0。"""
        raise NotImplementedError

    @abstractmethod
    def read_line(self, line: int, include_last_column: bool = True) -> list[str] | None:
        """指定行の値をカラム順で返す。データが尽きた場合は None。"""
        raise NotImplementedError

    @abstractmethod
    def read_value(self, column: str, line: int) -> str:
        """指定行・指定カラムの値を返す。見つからない場合は空文字列。"""
        raise NotImplementedError

    def write_result(self, line: int, value: str) -> None:
        """結果カラム (最後のカラム) に値を書き込む。既定では読み取り専用。"""
        raise ReadOnlyProviderError(
            messages.format_message(messages.TECHNICAL_ERROR_MESSAGE_READ_ONLY_PROVIDER, self.__class__.__name__)
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(scenario={self.scenario_name!r}, data_in_dir={str(self.data_in_dir)!r})"


class FileBaseDataProvider(BaseDataProvider):
    """ファイル (CSV, Excel) をバックエンドとするプロバイダーの共通実装。

    1行目をカラム名として扱い、読み取り操作のたびにファイルを開いて閉じます。
    サブクラスは `_read_table` と `_write_cell` を実装します。
    """

    extension: ClassVar[str]

    def __init__(self, data_in_dir: str | Path, encoding: str = DEFAULT_ENCODING):
        super().__init__(data_in_dir, encoding)
        logger.info(
            messages.format_message(messages.FILE_DATA_PROVIDER_USED, self.provider_type.value, self.data_in_dir)
        )

    def data_file(self, scenario_name: str | None = None) -> Path:
        """シナリオデータファイルのパス。"""
        return resolve_data_file(self.data_in_dir, scenario_name or self._require_scenario(), self.extension)

    def _io_error(self, path: Path, error: Exception) -> TechnicalError:
        logger.error(f"シナリオデータファイル {path} の読み込みに失敗しました: {error}")
        return TechnicalError(messages.format_message(messages.TECHNICAL_ERROR_MESSAGE_DATA_IOEXCEPTION, path, error))

    @abstractmethod
    def _read_table(self, path: Path) -> list[list[str]]:
        """ファイル全体をヘッダー行を含む文字列の2次元リストとして読む。

        Raises:
            TechnicalError: ファイルが存在しない、または読めない場合。
        """
        raise NotImplementedError

    @abstractmethod
    def _write_cell(self, path: Path, line: int, column_index: int, value: str) -> None:
        """データ行 ``line`` (1始まり) のカラム ``column_index`` (0始まり) に書き込む。"""
        raise NotImplementedError

    def _load_columns(self, scenario_name: str) -> list[str]:
        table = self._read_table(self.data_file(scenario_name))
        return table[0] if table else []

    def _data_rows(self) -> list[list[str]]:
        table = self._read_table(self.data_file())
        return table[1:]

    def get_nb_lines(self) -> int:
        self._require_scenario()
        return len(self._data_rows())

    def read_line(self, line: int, include_last_column: bool = True) -> list[str] | None:
        self._require_scenario()
        if line == 0:
            return self._header(include_last_column)
        rows = self._data_rows()
        if line < 0 or line > len(rows):
            logger.debug(f"{self.scenario_name}: {line} 行目はありません (データ行数 {len(rows)})。")
            return None
        row = rows[line - 1]
        size = self._column_count(include_last_column)
        # 末尾の空セルが省略された行はカラム数まで空文字列で埋める
        padded = row + [""] * (len(self.columns) - len(row))
        return padded[:size]

    def read_value(self, column: str, line: int) -> str:
        self._require_scenario()
        if line < 1:
            return column
        if column not in self.columns:
            logger.error(f"read_value({column}, {line}): カラム '{column}' は {self.scenario_name} に存在しません。")
            return ""
        rows = self._data_rows()
        if line > len(rows):
            return ""
        row = rows[line - 1]
        index = self.columns.index(column)
        return row[index] if index < len(row) else ""

    def write_result(self, line: int, value: str) -> None:
        """データ行 ``line`` の結果カラム (最後のカラム) に値を書き込み、ファイルを保存する。

        Raises:
            TechnicalError: 行が存在しない場合、またはファイルに書き込めない場合。
        """
        scenario_name = self._require_scenario()
        if line < 1 or line > self.get_nb_lines():
            raise TechnicalError(
                messages.format_message(messages.TECHNICAL_ERROR_MESSAGE_RESULT_LINE, line, scenario_name)
            )
        path = self.data_file()
        try:
            self._write_cell(path, line, len(self.columns) - 1, value)
        except OSError as e:
            raise self._io_error(path, e) from e
        logger.debug(f"{scenario_name}: {line} 行目に結果 '{value}' を書き込みました。")
