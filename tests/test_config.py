import pytest

from config import DEFAULT_OPENAI_MODEL, FailurePolicy, load_settings
from errors import ConfigurationError

_REQUIRED = {
    "SEARCH_QUERY": "cat:cs.CL",
    "OPENAI_KEY": "sk-test",
    "SLACK_TOKEN": "xoxb-test",
    "SLACK_CHANNEL": "C0123456",
}


def test_load_settings_defaults() -> None:
    settings = load_settings(dict(_REQUIRED))

    assert settings.search_query == "cat:cs.CL"
    assert settings.openai_key == "sk-test"
    assert settings.slack_token == "xoxb-test"
    assert settings.slack_channel == "C0123456"
    assert settings.openai_model == DEFAULT_OPENAI_MODEL
    assert settings.max_results == 10
    assert settings.sample_size == 3
    assert settings.failure_policy is FailurePolicy.SKIP
    assert settings.log_level == "INFO"


@pytest.mark.parametrize("missing", sorted(_REQUIRED))
def test_missing_required_value_is_fatal(missing: str) -> None:
    env = {k: v for k, v in _REQUIRED.items() if k != missing}
    with pytest.raises(ConfigurationError, match=missing):
        load_settings(env)


def test_blank_required_value_is_fatal() -> None:
    with pytest.raises(ConfigurationError, match="SLACK_CHANNEL"):
        load_settings({**_REQUIRED, "SLACK_CHANNEL": "   "})


def test_optional_overrides() -> None:
    settings = load_settings({
        **_REQUIRED,
        "OPENAI_MODEL": "gpt-4o-mini",
        "ARXIV_MAX_RESULTS": "25",
        "SAMPLE_SIZE": "5",
        "ON_TRANSLATION_ERROR": "ABORT",
    })

    assert settings.openai_model == "gpt-4o-mini"
    assert settings.max_results == 25
    assert settings.sample_size == 5
    assert settings.failure_policy is FailurePolicy.ABORT


@pytest.mark.parametrize("value", ["ten", "0", "-3"])
def test_bad_integer_rejected(value: str) -> None:
    with pytest.raises(ConfigurationError, match="ARXIV_MAX_RESULTS"):
        load_settings({**_REQUIRED, "ARXIV_MAX_RESULTS": value})


def test_unknown_failure_policy_rejected() -> None:
    with pytest.raises(ConfigurationError, match="ON_TRANSLATION_ERROR"):
        load_settings({**_REQUIRED, "ON_TRANSLATION_ERROR": "retry"})


def test_reads_os_environ_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    for key, value in _REQUIRED.items():
        monkeypatch.setenv(key, value)
    for key in ("OPENAI_MODEL", "ARXIV_MAX_RESULTS", "SAMPLE_SIZE", "ON_TRANSLATION_ERROR", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)

    assert load_settings().slack_channel == "C0123456"


def test_log_level_is_normalized() -> None:
    assert load_settings({**_REQUIRED, "LOG_LEVEL": " debug "}).log_level == "DEBUG"


def test_unknown_log_level_rejected() -> None:
    with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
        load_settings({**_REQUIRED, "LOG_LEVEL": "verbose"})
