"""ロガー設定のユニットテスト"""

import json
import logging

import pytest
from k1s0_posthog_provider.logger import LOGGER_NAME, new_logger


def test_json_output_contains_logger_name_and_context(caplog: pytest.LogCaptureFixture) -> None:
    """JSON 出力に logger 名・レベル・バインドした flag_key が含まれること。"""
    logger = new_logger(level="INFO", format="json")
    with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
        logger.bind(flag_key="new-checkout").warning("PostHog feature flag request failed")
    record = caplog.records[-1]
    assert record.name == LOGGER_NAME
    payload = json.loads(record.getMessage())
    assert payload["event"] == "PostHog feature flag request failed"
    assert payload["logger"] == LOGGER_NAME
    assert payload["level"] == "warning"
    assert payload["flag_key"] == "new-checkout"
    assert "timestamp" in payload


def test_custom_logger_name(caplog: pytest.LogCaptureFixture) -> None:
    """name 指定時はその名前の stdlib ロガーに出力されること。"""
    logger = new_logger(format="json", name="k1s0_posthog_provider.provider")
    with caplog.at_level(logging.WARNING, logger="k1s0_posthog_provider.provider"):
        logger.warning("PostHog returned a non-boolean flag value")
    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["logger"] == "k1s0_posthog_provider.provider"


def test_text_output(caplog: pytest.LogCaptureFixture) -> None:
    """テキスト形式ではイベントとコンテキストが JSON でなく出力されること。"""
    logger = new_logger(level="DEBUG", format="text")
    with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
        logger.warning("PostHog feature flag request failed", flag_key="new-checkout")
    message = caplog.records[-1].getMessage()
    assert "PostHog feature flag request failed" in message
    assert "new-checkout" in message
    with pytest.raises(json.JSONDecodeError):
        json.loads(message)
