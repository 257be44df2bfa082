"""Tests for ExpectConfig loading and overrides."""

import pytest

from expect_bn import ExpectConfig, configure, expect, get_config
from expect_bn.config import DEFAULT_CONFIG, reset_config


class TestExpectConfig:
    """Tests for the configuration dataclass."""

    def test_defaults(self):
        assert DEFAULT_CONFIG == ExpectConfig(show_diff=True, truncate_threshold=40, include_stack=False)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.show_diff = False  # type: ignore[misc]

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("EXPECT_BN_SHOW_DIFF", "false")
        monkeypatch.setenv("EXPECT_BN_TRUNCATE_THRESHOLD", "100")
        monkeypatch.setenv("EXPECT_BN_INCLUDE_STACK", "yes")
        config = ExpectConfig.from_env()
        assert config == ExpectConfig(show_diff=False, truncate_threshold=100, include_stack=True)

    def test_malformed_threshold_falls_back(self, monkeypatch):
        monkeypatch.setenv("EXPECT_BN_TRUNCATE_THRESHOLD", "forty")
        assert ExpectConfig.from_env().truncate_threshold == 40

    def test_from_env_without_variables(self, monkeypatch):
        for name in ("SHOW_DIFF", "TRUNCATE_THRESHOLD", "INCLUDE_STACK"):
            monkeypatch.delenv(f"EXPECT_BN_{name}", raising=False)
        assert ExpectConfig.from_env() == DEFAULT_CONFIG


class TestConfigure:
    """Tests for configure/get_config/reset_config."""

    def test_configure_returns_previous(self):
        before = get_config()
        previous = configure(truncate_threshold=5)
        assert previous == before
        assert get_config().truncate_threshold == 5

    def test_reset_restores_saved(self):
        saved = configure(include_stack=True)
        reset_config(saved)
        assert get_config() == saved

    def test_unknown_field_raises(self):
        with pytest.raises(TypeError):
            configure(colour=True)

    def test_include_stack_controls_traceback_hiding(self):
        configure(include_stack=False)
        assert expect(1).hide_traceback is True
        configure(include_stack=True)
        assert expect(1).hide_traceback is False

    def test_zero_threshold_disables_truncation(self):
        configure(truncate_threshold=0)
        long_value = list(range(100))
        with pytest.raises(AssertionError) as exc_info:
            expect(long_value).to.equal("y")
        assert repr(long_value) in str(exc_info.value)
