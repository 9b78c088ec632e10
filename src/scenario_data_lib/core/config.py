import copy
import importlib.resources
import shutil
from functools import lru_cache
from pathlib import Path
from typing import Any

import toml

from .constants import DEFAULT_PATHS, TEMPLATE_SYSTEM_CONFIG_PATH
from .utils import logger


@lru_cache
def _load_config_from_file(config_path: Path) -> dict[str, dict[str, Any]]:
    """設定ファイルをTOML形式で読み込む内部ヘルパー関数。"""
    try:
        logger.debug(f"構成ファイルを読み込みます: {config_path}")
        with open(config_path, encoding="utf-8") as f:
            config_data = toml.load(f)
        if not isinstance(config_data, dict):
            logger.error(f"設定ファイル {config_path} の形式が不正です。辞書形式である必要があります。")
            raise TypeError("構成データは辞書である必要があります")
        return dict(config_data)
    except FileNotFoundError:
        logger.error(f"設定ファイル {config_path} が見つかりません。デフォルト設定で続行します。")
        return {}


class ProviderConfigRegistry:
    """データプロバイダーの設定 (システム設定 + ユーザー設定) を管理します。

    設定はセクション単位 (``[data_provider]``, ``[csv]``, ``[database]``, ``[messages]``)
    で保持され、ユーザー設定の値がシステム設定の値を上書きします。
    """

    def __init__(self) -> None:
        self._system_config_data: dict[str, dict[str, Any]] = {}
        self._user_config_data: dict[str, dict[str, Any]] = {}
        self._merged_config_data: dict[str, dict[str, Any]] = {}
        self._system_config_path: Path | None = None
        self._user_config_path: Path | None = None

    def _determine_config_paths(
        self,
        config_path: str | Path | None = None,
        user_config_path: str | Path | None = None,
    ) -> None:
        self._system_config_path = Path(config_path if config_path else DEFAULT_PATHS["config_toml"])
        self._user_config_path = Path(
            user_config_path if user_config_path else DEFAULT_PATHS["user_config_toml"]
        )
        logger.debug(f"システム設定パス: {self._system_config_path}, ユーザー設定パス: {self._user_config_path}")

    def _ensure_system_config_exists(self) -> None:
        """システム設定ファイルが存在しない場合、パッケージ内のテンプレートからコピーする。"""
        if self._system_config_path is None or self._system_config_path.exists():
            return
        logger.info(f"システム設定ファイルが見つかりません: {self._system_config_path}。テンプレートからコピーします。")
        try:
            with importlib.resources.as_file(TEMPLATE_SYSTEM_CONFIG_PATH) as template_path:
                if not template_path.is_file():
                    logger.error(f"テンプレートパスが無効です: {template_path}")
                    return
                self._system_config_path.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(template_path, self._system_config_path)
                logger.info(f"テンプレートから設定ファイルをコピーしました: {self._system_config_path}")
        except OSError as e:
            logger.error(f"設定ファイルの自動コピー中にエラー: {e}")

    def _load_and_set_system_config(self) -> None:
        if self._system_config_path and self._system_config_path.is_file():
            self._system_config_data = copy.deepcopy(_load_config_from_file(self._system_config_path))
            logger.info(f"システム設定を {self._system_config_path} から読み込みました。")
        else:
            logger.error(f"システム設定ファイル {self._system_config_path} が見つかりません。読み込みをスキップします。")
            self._system_config_data = {}

    def _load_and_set_user_config(self) -> None:
        self._user_config_data = {}
        if self._user_config_path is None or not self._user_config_path.exists():
            logger.debug(f"ユーザー設定ファイル {self._user_config_path} は存在しません。")
            return
        if not self._user_config_path.is_file():
            logger.warning(f"ユーザー設定パス {self._user_config_path} はファイルではありません。読み込みをスキップします。")
            return
        try:
            self._user_config_data = copy.deepcopy(_load_config_from_file(self._user_config_path))
            logger.info(f"ユーザー設定を {self._user_config_path} から読み込みました。")
        except (OSError, TypeError, toml.TomlDecodeError) as e:
            logger.warning(f"ユーザー設定ファイル {self._user_config_path} の読み込み中にエラー: {e}")

    def load(
        self,
        config_path: str | Path | None = None,
        user_config_path: str | Path | None = None,
    ) -> None:
        """システム設定ファイルとユーザー設定ファイルを読み込み、内部データを更新します。"""
        self._determine_config_paths(config_path, user_config_path)
        self._ensure_system_config_exists()
        self._load_and_set_system_config()
        self._load_and_set_user_config()
        self._merge_configs()

    def _merge_configs(self) -> None:
        """システム設定とユーザー設定をセクション単位でマージする。"""
        self._merged_config_data = copy.deepcopy(self._system_config_data)
        for section, user_section in self._user_config_data.items():
            if section in self._merged_config_data and isinstance(user_section, dict):
                self._merged_config_data[section].update(copy.deepcopy(user_section))
            else:
                self._merged_config_data[section] = copy.deepcopy(user_section)

    def get(self, section: str, key: str, default: Any = None) -> Any | None:
        """マージ済み設定からセクションとキーに対応する値を取得します。"""
        section_data = self._merged_config_data.get(section)
        if not isinstance(section_data, dict):
            return default
        return section_data.get(key, default)

    def get_section(self, section: str) -> dict[str, Any]:
        """セクション全体のコピーを返す。存在しない場合は空の辞書。"""
        section_data = self._merged_config_data.get(section)
        return dict(section_data) if isinstance(section_data, dict) else {}

    def set(self, section: str, key: str, value: Any) -> None:
        """ユーザー設定として値を更新します。"""
        logger.debug(f"ユーザー設定を更新: [{section}] {key}")
        self._user_config_data.setdefault(section, {})[key] = value
        self._merge_configs()

    def save_user_config(self, user_config_path: str | Path | None = None) -> None:
        """現在のユーザー設定を TOML ファイルに保存します。"""
        save_path = Path(user_config_path) if user_config_path else self._user_config_path
        if save_path is None:
            logger.error("ユーザー設定の保存パスが指定されていません。保存をスキップします。")
            return
        if not self._user_config_data:
            logger.debug("保存すべきユーザー設定がありません。保存をスキップします。")
            return
        save_path.parent.mkdir(parents=True, exist_ok=True)
        with open(save_path, "w", encoding="utf-8") as f:
            toml.dump(self._user_config_data, f)
        logger.info(f"ユーザー設定を {save_path} に保存しました。")

    def get_all_config(self) -> dict[str, Any]:
        """マージされた設定データ全体のコピーを返します。"""
        return copy.deepcopy(self._merged_config_data)


# --- 共有インスタンスの作成と初期ロード --- #
config_registry = ProviderConfigRegistry()
try:
    config_registry.load()
except (OSError, TypeError, toml.TomlDecodeError):
    logger.exception("共有設定レジストリの初期ロード中にエラーが発生しました。")
