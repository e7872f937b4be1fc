"""評価コンテキストから distinct_id を取り出す"""

from __future__ import annotations

from typing import Any

from openfeature.evaluation_context import EvaluationContext

from .models import DISTINCT_ID_KEY, ResolutionError, ResolutionErrorKind


def flatten_context(evaluation_context: EvaluationContext | None) -> dict[str, Any]:
    """EvaluationContext を attributes と targeting key からなる辞書に平坦化する。

    targeting key が設定されている場合は attributes の同名キーより優先する。
    """
    if evaluation_context is None:
        return {}
    flattened: dict[str, Any] = dict(evaluation_context.attributes or {})
    if evaluation_context.targeting_key is not None:
        flattened[DISTINCT_ID_KEY] = evaluation_context.targeting_key
    return flattened


def extract_distinct_id(context: dict[str, Any]) -> str | ResolutionError:
    """平坦化したコンテキストから distinct_id を取り出す。

    Returns:
        distinct_id。キーが無い、または文字列でない場合は MISSING_IDENTITY の ResolutionError。
    """
    if DISTINCT_ID_KEY not in context:
        return ResolutionError(
            ResolutionErrorKind.MISSING_IDENTITY,
            "no targetingKey/distinctId",
        )
    value = context[DISTINCT_ID_KEY]
    if not isinstance(value, str):
        return ResolutionError(
            ResolutionErrorKind.MISSING_IDENTITY,
            "value of targetingKey/distinctId cannot be converted to string",
        )
    return value
