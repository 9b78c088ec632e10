"""ライブラリ固有のカスタム例外クラス。

致命的なエラー (設定や入力データの不備) だけを例外として扱います。
「データが無い」という結果は例外ではなく ``0`` / ``""`` / ``None`` で返されます。
"""


class DataProviderError(Exception):
    """scenario-data-lib の基底例外クラス。"""

    pass


class TechnicalError(DataProviderError):
    """シナリオの実行を中断すべき技術的エラー。

    データファイルが読めない、クエリが禁止語を含むなど、
    テスト環境や設定が壊れていることを示します。再試行はしません。

    Attributes:
        message: エラーの詳細メッセージ (メッセージカタログで解決済み)。
    """

    def __init__(self, message: str):
        """TechnicalError を初期化します。

        Args:
            message: エラーの詳細メッセージ。
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"技術エラー: {self.message}"


class DataSourceError(TechnicalError):
    """データソース自体が利用できない場合の例外。

    未知のデータベース種別、カラムが1つも無いデータソースなどで発生します。
    """

    def __str__(self) -> str:
        return f"データソースエラー: {self.message}"


class ForbiddenQueryError(TechnicalError):
    """読み取り専用ガードがクエリを拒否した場合の例外。

    Attributes:
        query: 拒否されたクエリ文字列。
        keyword: 検出された禁止キーワード。
    """

    def __init__(self, message: str, query: str, keyword: str):
        self.query = query
        self.keyword = keyword
        super().__init__(message)

    def __str__(self) -> str:
        return f"禁止クエリエラー: {self.message}"


class ReadOnlyProviderError(TechnicalError):
    """読み取り専用のデータプロバイダーに書き込もうとした場合の例外。"""

    def __str__(self) -> str:
        return f"読み取り専用エラー: {self.message}"


class ProviderNotFoundError(DataProviderError):
    """要求されたデータプロバイダー種別がレジストリに見つからない場合の例外。

    Attributes:
        provider_type: 見つからなかったプロバイダー種別。
    """

    def __init__(self, provider_type: str):
        self.provider_type = provider_type
        message = f"データプロバイダー '{provider_type}' が見つかりません。"
        super().__init__(message)

    def __str__(self) -> str:
        return f"プロバイダー未検出エラー: {self.provider_type}"


class ConfigurationError(DataProviderError):
    """設定に関連するエラーが発生した場合の例外。

    設定ファイルの構文エラー、必須キーの欠損、不正な値などが原因で発生します。

    Attributes:
        message: エラーの詳細メッセージ。
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"設定エラー: {self.message}"
