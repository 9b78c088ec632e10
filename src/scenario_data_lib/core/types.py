"""設定ファイルの各セクションを検証する pydantic モデル。"""

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field, SecretStr, field_validator

from .constants import DEFAULT_CSV_SEPARATOR, DEFAULT_ENCODING, DEFAULT_PATHS


class ProviderType(StrEnum):
    """データプロバイダーの種別 (閉じた集合)。"""

    CSV = "CSV"
    EXCEL = "EXCEL"
    DB = "DB"


class DatabaseDialect(StrEnum):
    """サポートするデータベース種別。"""

    MYSQL = "MYSQL"
    ORACLE = "ORACLE"
    POSTGRE = "POSTGRE"


class DataProviderSettings(BaseModel):
    """``[data_provider]`` セクション"""

    type: ProviderType = Field(default=ProviderType.CSV, description="使用するバックエンド")
    data_in_dir: Path = Field(default=DEFAULT_PATHS["data_in_dir"], description="シナリオデータファイルのディレクトリ")
    encoding: str = Field(default=DEFAULT_ENCODING, description="シナリオデータファイルの文字コード")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class CsvSettings(BaseModel):
    """``[csv]`` セクション"""

    separator: str = Field(default=DEFAULT_CSV_SEPARATOR, min_length=1, max_length=1)


class DatabaseSettings(BaseModel):
    """``[database]`` セクション

    dialect は文字列のまま保持し、未知の値の判定は DBDataProvider の構築時に行う。
    """

    dialect: str = Field(description="MYSQL | ORACLE | POSTGRE")
    user: str
    password: SecretStr = Field(default=SecretStr(""))
    host: str = "localhost"
    port: int | str
    name: str = Field(description="データベース名 (Oracle の場合は SID)")
