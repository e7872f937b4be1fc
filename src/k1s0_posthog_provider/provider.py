"""PostHog を評価バックエンドとする OpenFeature provider"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TypeVar

import structlog
from openfeature.evaluation_context import EvaluationContext
from openfeature.flag_evaluation import FlagResolutionDetails, FlagValueType, Reason
from openfeature.hook import Hook
from openfeature.provider import AbstractProvider, Metadata

from .client import PostHogClientProtocol, new_posthog_client
from .config import ProviderConfig
from .identity import extract_distinct_id, flatten_context
from .logger import new_logger
from .models import ResolutionError, ResolutionErrorKind, targeting_match, unknown

T = TypeVar("T")

PROVIDER_NAME = "PostHog"
NO_FLAG_VALUE = "no flag value returned"


def _not_implemented(type_name: str, default_value: T) -> FlagResolutionDetails[T]:
    return ResolutionError(
        ResolutionErrorKind.NOT_IMPLEMENTED,
        f"{type_name} evaluation not implemented",
    ).to_details(default_value, reason=Reason.DEFAULT)


class PostHogProvider(AbstractProvider):
    """PostHog の boolean フラグ評価を OpenFeature に橋渡しする provider。

    PostHog クライアントは外部所有の共有リソースとして扱い、
    生成・クローズは行わない。provider 自体は状態を持たない。
    """

    def __init__(self, client: PostHogClientProtocol) -> None:
        super().__init__()
        self._client = client

    @classmethod
    def from_config(
        cls, config: ProviderConfig, *, configure_logging: bool = False
    ) -> PostHogProvider:
        """設定から PostHog クライアントを構成して provider を返す。

        configure_logging が True の場合のみ config.log でグローバルなロガー設定を行う。
        """
        if configure_logging:
            new_logger(level=config.log.level, format=config.log.format)
        return cls(new_posthog_client(config.posthog))

    def get_metadata(self) -> Metadata:
        return Metadata(name=PROVIDER_NAME)

    def get_provider_hooks(self) -> list[Hook]:
        # フックは未対応
        return []

    def resolve_boolean_details(
        self,
        flag_key: str,
        default_value: bool,
        evaluation_context: EvaluationContext | None = None,
    ) -> FlagResolutionDetails[bool]:
        """PostHog でフラグを 1 回だけ評価し、結果を OpenFeature の形式に変換する。

        - distinct_id が無い・文字列でない: MISSING_IDENTITY（PostHog は呼ばない）
        - PostHog が例外を送出、または None を返す: BACKEND_ERROR
        - 応答が bool でない（バリアント文字列など）: TYPE_MISMATCH
        - True: TARGETING_MATCH / False: UNKNOWN

        エラー時は常に default_value を返し、例外は送出しない。
        distinct_id はログに出力しない。
        """
        distinct_id = extract_distinct_id(flatten_context(evaluation_context))
        if isinstance(distinct_id, ResolutionError):
            return distinct_id.to_details(default_value)

        log = structlog.stdlib.get_logger(__name__).bind(flag_key=flag_key)
        try:
            response = self._client.get_feature_flag(flag_key, distinct_id)
        except Exception as e:
            log.warning("PostHog feature flag request failed", error=str(e))
            return ResolutionError(
                ResolutionErrorKind.BACKEND_ERROR,
                f"posthog client error: {e}",
            ).to_details(default_value)

        # posthog クライアントは通信・API エラーを内部で握りつぶし None を返す
        if response is None:
            log.warning("PostHog feature flag request failed", error=NO_FLAG_VALUE)
            return ResolutionError(
                ResolutionErrorKind.BACKEND_ERROR,
                f"posthog client error: {NO_FLAG_VALUE}",
            ).to_details(default_value)

        if not isinstance(response, bool):
            log.warning("PostHog returned a non-boolean flag value", response=repr(response))
            return ResolutionError(
                ResolutionErrorKind.TYPE_MISMATCH,
                f"unable to convert response to boolean: {response!r}",
            ).to_details(default_value)

        log.debug("PostHog feature flag evaluated", value=response)
        if response:
            return targeting_match(response)
        return unknown(response)

    def resolve_string_details(
        self,
        flag_key: str,
        default_value: str,
        evaluation_context: EvaluationContext | None = None,
    ) -> FlagResolutionDetails[str]:
        """PostHog に文字列評価は無いため常にデフォルト値を返す。"""
        return _not_implemented("string", default_value)

    def resolve_integer_details(
        self,
        flag_key: str,
        default_value: int,
        evaluation_context: EvaluationContext | None = None,
    ) -> FlagResolutionDetails[int]:
        """PostHog に整数評価は無いため常にデフォルト値を返す。"""
        return _not_implemented("integer", default_value)

    def resolve_float_details(
        self,
        flag_key: str,
        default_value: float,
        evaluation_context: EvaluationContext | None = None,
    ) -> FlagResolutionDetails[float]:
        """PostHog に浮動小数点評価は無いため常にデフォルト値を返す。"""
        return _not_implemented("float", default_value)

    def resolve_object_details(
        self,
        flag_key: str,
        default_value: Sequence[FlagValueType] | Mapping[str, FlagValueType],
        evaluation_context: EvaluationContext | None = None,
    ) -> FlagResolutionDetails[Sequence[FlagValueType] | Mapping[str, FlagValueType]]:
        """PostHog にオブジェクト評価は無いため常にデフォルト値を返す。"""
        return _not_implemented("object", default_value)
