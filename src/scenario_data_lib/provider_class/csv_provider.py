"""CSV ファイルをバックエンドとするデータプロバイダー。"""

from pathlib import Path

import polars as pl

from ..core.base import FileBaseDataProvider
from ..core.constants import CSV_EXTENSION, DEFAULT_CSV_SEPARATOR, DEFAULT_ENCODING
from ..core.types import ProviderType
from ..core.utils import cell_to_str


class CsvDataProvider(FileBaseDataProvider):
    """``<data_in_dir>/<scenario>.csv`` を読むプロバイダー。

    すべてのカラムを文字列として読み込みます (型推論はしません)。
    """

    provider_type = ProviderType.CSV
    extension = CSV_EXTENSION

    def __init__(
        self,
        data_in_dir: str | Path,
        encoding: str = DEFAULT_ENCODING,
        separator: str = DEFAULT_CSV_SEPARATOR,
    ):
        self.separator = separator
        super().__init__(data_in_dir, encoding)

    def _polars_encoding(self) -> str:
        # polars は utf8 を直接扱い、それ以外は Python 側でデコードする
        if self.encoding.lower().replace("-", "") == "utf8":
            return "utf8"
        return self.encoding

    def _read_frame(self, path: Path) -> pl.DataFrame | None:
        try:
            return pl.read_csv(
                path,
                separator=self.separator,
                encoding=self._polars_encoding(),
                has_header=True,
                infer_schema_length=0,
            )
        except pl.exceptions.NoDataError:
            return None
        except (OSError, UnicodeDecodeError, pl.exceptions.PolarsError) as e:
            raise self._io_error(path, e) from e

    def _read_table(self, path: Path) -> list[list[str]]:
        df = self._read_frame(path)
        if df is None or not df.columns:
            return []
        return [list(df.columns)] + [[cell_to_str(v) for v in row] for row in df.rows()]

    def _write_cell(self, path: Path, line: int, column_index: int, value: str) -> None:
        df = self._read_frame(path)
        if df is None:
            return
        name = df.columns[column_index]
        df = df.with_columns(
            pl.when(pl.int_range(pl.len()) == line - 1).then(pl.lit(value)).otherwise(pl.col(name)).alias(name)
        )
        path.write_text(df.write_csv(separator=self.separator), encoding=self.encoding)
