import sys
from pathlib import Path
from typing import Any

from loguru import logger

# config モジュールで定数を定義すると循環インポートになるのを回避
from .constants import DEFAULT_PATHS

# ログフォーマット
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function} - {message}"

# logger初期化用関数
_logger_initialized = False


def init_logger() -> None:
    global _logger_initialized
    if _logger_initialized:
        return
    _logger_initialized = True
    # loguru のデフォルトハンドラを削除 (明示的に設定するため)
    logger.remove()
    logger.add(
        sys.stderr,
        level="INFO",
        format=LOG_FORMAT,
        colorize=True,
        backtrace=True,
        diagnose=False,  # 例外時にDBパスワードなどの変数値を出さない
    )
    try:
        log_file_path = Path(DEFAULT_PATHS["log_file"])
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file_path,
            level="DEBUG",
            format=LOG_FORMAT,
            rotation="25 MB",
            retention=5,
            encoding="utf-8",
            backtrace=True,
            diagnose=False,
        )
        logger.info(f"Logging to file: {log_file_path}")
    except OSError as e:
        logger.error(f"Failed to configure file logging to '{DEFAULT_PATHS['log_file']}': {e}")
        logger.error("File logging disabled.")


def resolve_data_file(data_in_dir: str | Path, scenario_name: str, extension: str) -> Path:
    """シナリオ名からデータファイルのパスを組み立てます。

    規約: ``<data_in_dir>/<scenario_name><extension>``
    """
    return Path(data_in_dir) / f"{scenario_name}{extension}"


def cell_to_str(value: Any) -> str:
    """セル値を文字列に変換する。

    None (空セル / SQL NULL) は空文字列に、整数値の float は ``.0`` を付けずに変換します。
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
