"""設定型定義と YAML 読み込み"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import PostHogProviderError, PostHogProviderErrorCodes


class PostHogSection(BaseModel):
    """PostHog クライアント設定。"""

    project_api_key: str = Field(min_length=1)
    host: str = "https://us.i.posthog.com"
    # 指定するとローカル評価用のフラグ定義ポーリングが有効になる
    personal_api_key: str | None = None
    feature_flags_request_timeout_seconds: float = Field(default=3.0, gt=0)
    disabled: bool = False
    debug: bool = False


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class ProviderConfig(BaseModel):
    """provider 全体設定。"""

    posthog: PostHogSection
    log: LogSection = Field(default_factory=LogSection)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """override を優先して base とディープマージした新しい辞書を返す。リストは置換する。"""
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    """YAML ファイルを読み込む。"""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PostHogProviderError(
            code=PostHogProviderErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data: dict[str, Any] = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise PostHogProviderError(
            code=PostHogProviderErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    return data


def load(base_path: Path, env_path: Path | None = None) -> ProviderConfig:
    """設定ファイルを読み込んで ProviderConfig を返す。

    base_path: ベース設定ファイルパス（必須）
    env_path: 環境別設定ファイルパス（オプション）。存在する場合はベースにマージ。
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = deep_merge(data, _read_yaml(env_path))
    try:
        return ProviderConfig.model_validate(data)
    except ValidationError as e:
        raise PostHogProviderError(
            code=PostHogProviderErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
