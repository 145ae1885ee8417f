"""Run configuration, read once from the environment."""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from errors import ConfigurationError
from sampler import DEFAULT_SAMPLE_SIZE

DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo"
DEFAULT_MAX_RESULTS = 10
DEFAULT_LOG_LEVEL = "INFO"

_REQUIRED_KEYS = ("SEARCH_QUERY", "OPENAI_KEY", "SLACK_TOKEN", "SLACK_CHANNEL")


class FailurePolicy(enum.Enum):
    """What a failed translation does to the rest of the run."""

    SKIP = "skip"    # log, skip that paper, keep going
    ABORT = "abort"  # re-raise and end the run


@dataclass(frozen=True, slots=True)
class Settings:
    search_query: str
    openai_key: str
    slack_token: str
    slack_channel: str
    openai_model: str = DEFAULT_OPENAI_MODEL
    max_results: int = DEFAULT_MAX_RESULTS
    sample_size: int = DEFAULT_SAMPLE_SIZE
    failure_policy: FailurePolicy = FailurePolicy.SKIP
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``; call
            ``load_dotenv()`` first to pick up a ``.env`` file.

    Raises:
        ConfigurationError: a required variable is missing or blank, or an
            optional one cannot be parsed.
    """
    env = os.environ if environ is None else environ

    values: dict[str, str] = {}
    for key in _REQUIRED_KEYS:
        value = (env.get(key) or "").strip()
        if not value:
            raise ConfigurationError(f"{key} is not set")
        values[key] = value

    return Settings(
        search_query=values["SEARCH_QUERY"],
        openai_key=values["OPENAI_KEY"],
        slack_token=values["SLACK_TOKEN"],
        slack_channel=values["SLACK_CHANNEL"],
        openai_model=(env.get("OPENAI_MODEL") or "").strip() or DEFAULT_OPENAI_MODEL,
        max_results=_positive_int(env, "ARXIV_MAX_RESULTS", DEFAULT_MAX_RESULTS),
        sample_size=_positive_int(env, "SAMPLE_SIZE", DEFAULT_SAMPLE_SIZE),
        failure_policy=_failure_policy(env),
        log_level=_log_level(env),
    )


def _positive_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ConfigurationError(f"{key} must be >= 1, got {value}")
    return value


def _failure_policy(env: Mapping[str, str]) -> FailurePolicy:
    raw = (env.get("ON_TRANSLATION_ERROR") or "").strip().lower()
    if not raw:
        return FailurePolicy.SKIP
    try:
        return FailurePolicy(raw)
    except ValueError as exc:
        choices = ", ".join(policy.value for policy in FailurePolicy)
        raise ConfigurationError(
            f"ON_TRANSLATION_ERROR must be one of: {choices}; got {raw!r}"
        ) from exc


def _log_level(env: Mapping[str, str]) -> str:
    raw = (env.get("LOG_LEVEL") or "").strip().upper()
    if not raw:
        return DEFAULT_LOG_LEVEL
    if raw not in logging.getLevelNamesMapping():
        raise ConfigurationError(f"LOG_LEVEL must be a logging level name, got {raw!r}")
    return raw
