"""posthog provider データモデル"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final, TypeVar

from openfeature.exception import ErrorCode
from openfeature.flag_evaluation import FlagResolutionDetails, Reason

T = TypeVar("T")

# OpenFeature の targeting key と同じキー。PostHog の distinct_id として扱う。
DISTINCT_ID_KEY: Final[str] = "targetingKey"

ERROR_KIND_METADATA_KEY: Final[str] = "error_kind"


class ResolutionErrorKind(StrEnum):
    """評価エラーの種別。"""

    MISSING_IDENTITY = "MISSING_IDENTITY"
    BACKEND_ERROR = "BACKEND_ERROR"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"

    @property
    def error_code(self) -> ErrorCode:
        """対応する OpenFeature の ErrorCode を返す。"""
        return _ERROR_CODES[self]


_ERROR_CODES: dict[ResolutionErrorKind, ErrorCode] = {
    ResolutionErrorKind.MISSING_IDENTITY: ErrorCode.TARGETING_KEY_MISSING,
    ResolutionErrorKind.BACKEND_ERROR: ErrorCode.GENERAL,
    ResolutionErrorKind.TYPE_MISMATCH: ErrorCode.TYPE_MISMATCH,
    ResolutionErrorKind.NOT_IMPLEMENTED: ErrorCode.GENERAL,
}


@dataclass(frozen=True)
class ResolutionError:
    """評価エラー。"""

    kind: ResolutionErrorKind
    message: str

    def to_details(
        self, default_value: T, reason: Reason = Reason.ERROR
    ) -> FlagResolutionDetails[T]:
        """デフォルト値を持つ FlagResolutionDetails に変換する。

        エラーを持つ結果は常に呼び出し元のデフォルト値を返す。
        """
        return FlagResolutionDetails(
            value=default_value,
            reason=reason,
            error_code=self.kind.error_code,
            error_message=self.message,
            flag_metadata={ERROR_KIND_METADATA_KEY: self.kind.value},
        )


def targeting_match(value: bool) -> FlagResolutionDetails[bool]:
    """PostHog が true を返した場合の結果。"""
    # ルールに一致したのか単に有効なのかは PostHog から判別できない。
    return FlagResolutionDetails(value=value, reason=Reason.TARGETING_MATCH)


def unknown(value: bool) -> FlagResolutionDetails[bool]:
    """PostHog が false を返した場合の結果。"""
    # 無効なフラグと存在しないフラグは区別できない。
    return FlagResolutionDetails(value=value, reason=Reason.UNKNOWN)
