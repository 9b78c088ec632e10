import importlib.resources
from pathlib import Path

# パッケージ名
PACKAGE_NAME = "scenario_data_lib"

# --- パッケージ内部リソースパス (読み取り専用) ---
_PACKAGE_RESOURCES_PATH = importlib.resources.files(PACKAGE_NAME).joinpath("resources")
_PACKAGE_SYSTEM_RESOURCES_PATH = _PACKAGE_RESOURCES_PATH.joinpath("system")
TEMPLATE_SYSTEM_CONFIG_PATH = _PACKAGE_SYSTEM_RESOURCES_PATH.joinpath("data_provider_config.toml")
MESSAGES_RESOURCES_PATH = _PACKAGE_RESOURCES_PATH.joinpath("messages")

# --- プロジェクトルート基準のパス設定 (書き込み可能) ---
PROJECT_ROOT = Path.cwd()
CONFIG_DIR = PROJECT_ROOT / "config"
LOG_DIR = PROJECT_ROOT / "logs"
DATA_IN_DIR = PROJECT_ROOT / "resources" / "data" / "in"

# システム設定ファイルのパス (プロジェクトルート/config/data_provider_config.toml)
SYSTEM_CONFIG_PATH = CONFIG_DIR / "data_provider_config.toml"
# ユーザー設定ファイルのパス (プロジェクトルート/config/user_config.toml)
USER_CONFIG_PATH = CONFIG_DIR / "user_config.toml"

DEFAULT_PATHS = {
    "config_toml": SYSTEM_CONFIG_PATH,
    "user_config_toml": USER_CONFIG_PATH,
    "log_file": LOG_DIR / "scenario-data-lib.log",
    "data_in_dir": DATA_IN_DIR,
}

# シナリオデータファイルの文字コード
DEFAULT_ENCODING = "utf-8"
DEFAULT_CSV_SEPARATOR = ";"
DEFAULT_LOCALE = "ja"
FALLBACK_LOCALE = "en"

# バックエンドごとのシナリオデータファイル拡張子
CSV_EXTENSION = ".csv"
EXCEL_EXTENSION = ".xlsx"
SQL_EXTENSION = ".sql"

# 読み取り専用クエリに含まれてはならないキーワード (大文字で比較)
FORBIDDEN_SQL_KEYWORDS = ("DROP", "DELETE", "TRUNCATE", "UPDATE")

# DBパスワードを設定ファイル以外から与えるための環境変数
DB_PASSWORD_ENV_VAR = "SCENARIO_DATA_DB_PASSWORD"
