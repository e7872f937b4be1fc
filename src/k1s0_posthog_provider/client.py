"""PostHog クライアントプロトコルと生成"""

from __future__ import annotations

from typing import Any, Protocol

from posthog import Posthog

from .config import PostHogSection
from .exceptions import PostHogProviderError, PostHogProviderErrorCodes


class PostHogClientProtocol(Protocol):
    """provider が利用する PostHog クライアントの操作。

    戻り値はフラグ設定により bool・バリアント文字列のいずれかになる。
    通信・API エラー時は例外を送出せず None を返す。
    並行呼び出しに対して安全であることを前提とする。
    """

    def get_feature_flag(self, key: str, distinct_id: str) -> Any: ...


def new_posthog_client(config: PostHogSection) -> Posthog:
    """設定から PostHog クライアントを生成する。

    生成したクライアントの shutdown は呼び出し元が行う。

    Raises:
        PostHogProviderError: クライアント生成に失敗した場合
    """
    try:
        return Posthog(
            config.project_api_key,
            host=config.host,
            personal_api_key=config.personal_api_key,
            feature_flags_request_timeout_seconds=config.feature_flags_request_timeout_seconds,
            disabled=config.disabled,
            debug=config.debug,
        )
    except Exception as e:
        raise PostHogProviderError(
            code=PostHogProviderErrorCodes.CLIENT_INIT,
            message=f"Failed to initialize PostHog client: {e}",
            cause=e,
        ) from e
