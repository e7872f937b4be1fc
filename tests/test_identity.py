"""distinct_id 抽出のユニットテスト"""

from k1s0_posthog_provider.identity import extract_distinct_id, flatten_context
from k1s0_posthog_provider.models import DISTINCT_ID_KEY, ResolutionError, ResolutionErrorKind
from openfeature.evaluation_context import EvaluationContext


def test_flatten_none_context() -> None:
    """None は空辞書。"""
    assert flatten_context(None) == {}


def test_flatten_merges_targeting_key() -> None:
    """targeting key が attributes に加えられること。"""
    ctx = EvaluationContext(targeting_key="user-1", attributes={"country": "JP"})
    assert flatten_context(ctx) == {"country": "JP", DISTINCT_ID_KEY: "user-1"}


def test_targeting_key_overrides_attribute() -> None:
    """targeting key は同名属性より優先。"""
    ctx = EvaluationContext(targeting_key="user-1", attributes={DISTINCT_ID_KEY: "other"})
    assert flatten_context(ctx)[DISTINCT_ID_KEY] == "user-1"


def test_flatten_does_not_mutate_attributes() -> None:
    """元の attributes を変更しないこと。"""
    attributes = {"country": "JP"}
    flatten_context(EvaluationContext(targeting_key="user-1", attributes=attributes))
    assert attributes == {"country": "JP"}


def test_extract_distinct_id() -> None:
    """文字列の distinct_id を返す。"""
    assert extract_distinct_id({DISTINCT_ID_KEY: "user-1", "plan": "pro"}) == "user-1"


def test_extract_empty_string_is_accepted() -> None:
    """空文字列も文字列として扱う。"""
    assert extract_distinct_id({DISTINCT_ID_KEY: ""}) == ""


def test_extract_missing_key() -> None:
    """キーが無い場合は MISSING_IDENTITY。"""
    result = extract_distinct_id({"plan": "pro"})
    assert isinstance(result, ResolutionError)
    assert result.kind == ResolutionErrorKind.MISSING_IDENTITY
    assert result.message == "no targetingKey/distinctId"


def test_extract_non_string_value() -> None:
    """文字列でない値は MISSING_IDENTITY。"""
    result = extract_distinct_id({DISTINCT_ID_KEY: ["user-1"]})
    assert isinstance(result, ResolutionError)
    assert result.kind == ResolutionErrorKind.MISSING_IDENTITY
