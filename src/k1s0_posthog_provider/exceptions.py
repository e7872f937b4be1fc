"""posthog provider の例外型定義"""

from __future__ import annotations


class PostHogProviderError(Exception):
    """posthog provider のエラー基底クラス。

    フラグ評価中のエラーは例外にせず評価結果に変換する。
    この例外は設定読み込みとクライアント生成でのみ送出される。
    """

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class PostHogProviderErrorCodes:
    """PostHogProviderError のエラーコード定数。"""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
    CLIENT_INIT: str = "CLIENT_INIT_ERROR"
