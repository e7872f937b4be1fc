"""InMemoryPostHogClient 実装"""

from __future__ import annotations

from typing import Any


class InMemoryPostHogClient:
    """テスト用インメモリ PostHog クライアント。"""

    def __init__(self) -> None:
        self._flags: dict[str, Any] = {}
        self._errors: dict[str, Exception] = {}
        self.calls: list[tuple[str, str]] = []

    def set_flag(self, key: str, value: Any) -> None:
        """フラグの応答値を設定する。"""
        self._flags[key] = value

    def set_error(self, key: str, error: Exception) -> None:
        """フラグ取得時に送出する例外を設定する。"""
        self._errors[key] = error

    def get_feature_flag(self, key: str, distinct_id: str) -> Any:
        self.calls.append((key, distinct_id))
        if key in self._errors:
            raise self._errors[key]
        # 未登録フラグは PostHog と同様に None を返す
        return self._flags.get(key)
