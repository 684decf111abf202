import pytest
from pydantic import ValidationError

from mock_factory import config
from mock_factory.domain.errors import SchemaDefinitionError
from mock_factory.utils.helpers import assert_that, copy_value, get_or_calc_value


def test_get_settings_defaults():
    settings = config.get_settings()
    assert settings.app_env == "development"
    assert settings.log_json is False
    assert settings.default_count == 10
    assert settings.start_id == 1
    assert settings.output_indent == 2


def test_get_settings_is_cached():
    assert config.get_settings() is config.get_settings()


def test_settings_reject_invalid_start_id(monkeypatch):
    monkeypatch.setenv("MOCK_START_ID", "0")
    with pytest.raises(ValidationError):
        config.Settings()


def test_assert_that_raises_schema_error_by_default():
    assert_that("fine", True)
    with pytest.raises(SchemaDefinitionError, match="broken"):
        assert_that("broken", False)


def test_assert_that_accepts_custom_error_type():
    with pytest.raises(KeyError):
        assert_that("missing", False, KeyError)


def test_copy_value_is_deep():
    original = [{"nested": [1]}]
    copied = copy_value(original)
    copied[0]["nested"].append(2)
    assert original == [{"nested": [1]}]


def test_get_or_calc_value():
    assert get_or_calc_value(lambda: 3) == 3
    assert get_or_calc_value("plain") == "plain"
    assert get_or_calc_value(None) is None
