"""Excel (.xlsx) ファイルをバックエンドとするデータプロバイダー。"""

import zipfile
from pathlib import Path

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..core.base import FileBaseDataProvider
from ..core.constants import EXCEL_EXTENSION
from ..core.types import ProviderType
from ..core.utils import cell_to_str

_WORKBOOK_ERRORS = (OSError, InvalidFileException, zipfile.BadZipFile, KeyError)


def _trim_table(table: list[list[str]]) -> list[list[str]]:
    """ヘッダー末尾の空セルと、シート末尾の空行を取り除く。"""
    if not table:
        return []
    header = list(table[0])
    while header and header[-1] == "":
        header.pop()
    rows = table[1:]
    while rows and all(value == "" for value in rows[-1]):
        rows.pop()
    return [header] + rows if header else []


class ExcelDataProvider(FileBaseDataProvider):
    """``<data_in_dir>/<scenario>.xlsx`` の最初のシートを読むプロバイダー。"""

    provider_type = ProviderType.EXCEL
    extension = EXCEL_EXTENSION

    def _read_table(self, path: Path) -> list[list[str]]:
        try:
            workbook = load_workbook(path, read_only=True, data_only=True)
        except _WORKBOOK_ERRORS as e:
            raise self._io_error(path, e) from e
        try:
            sheet = workbook.worksheets[0]
            table = [[cell_to_str(v) for v in row] for row in sheet.iter_rows(values_only=True)]
        except _WORKBOOK_ERRORS as e:
            raise self._io_error(path, e) from e
        finally:
            # read_only モードのワークブックはファイルハンドルを保持するため必ず閉じる
            workbook.close()
        return _trim_table(table)

    def _write_cell(self, path: Path, line: int, column_index: int, value: str) -> None:
        try:
            workbook = load_workbook(path)
        except _WORKBOOK_ERRORS as e:
            raise self._io_error(path, e) from e
        try:
            sheet = workbook.worksheets[0]
            # 1行目はヘッダー
            sheet.cell(row=line + 1, column=column_index + 1, value=value)
            workbook.save(path)
        finally:
            workbook.close()
