"""
Upload credentials from the environment.
"""
import pytest

from emojikitchen import config
from emojikitchen.config import ConfigError, DiscordConfig, SlackConfig


class TestSlackConfig:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("COOKIE", "d=abc")
        monkeypatch.setenv("TOKEN", "xoxc-1")
        monkeypatch.setenv("WORKSPACE_NAME", "myspace")
        config = SlackConfig.from_env()
        assert config == SlackConfig(cookie="d=abc", token="xoxc-1", workspace_name="myspace")

    def test_missing_variables_named(self, monkeypatch):
        monkeypatch.setenv("COOKIE", "d=abc")
        monkeypatch.delenv("TOKEN", raising=False)
        monkeypatch.setenv("WORKSPACE_NAME", "")
        with pytest.raises(ConfigError) as e:
            SlackConfig.from_env()
        assert "TOKEN" in str(e.value)
        assert "WORKSPACE_NAME" in str(e.value)
        assert "COOKIE" not in str(e.value)


class TestDiscordConfig:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DISCORD_TOKEN", "bot-token")
        monkeypatch.setenv("DISCORD_GUILD_ID", "1234")
        assert DiscordConfig.from_env() == DiscordConfig(token="bot-token", guild_id="1234")

    def test_missing(self, monkeypatch):
        monkeypatch.delenv("DISCORD_TOKEN", raising=False)
        monkeypatch.delenv("DISCORD_GUILD_ID", raising=False)
        with pytest.raises(ConfigError):
            DiscordConfig.from_env()


class TestEnvInt:
    def test_default(self, monkeypatch):
        monkeypatch.delenv("EMOJIKITCHEN_RATE_LIMIT", raising=False)
        assert config._env_positive_int("EMOJIKITCHEN_RATE_LIMIT", 20) == 20

    def test_value(self, monkeypatch):
        monkeypatch.setenv("EMOJIKITCHEN_RATE_LIMIT", "5")
        assert config._env_positive_int("EMOJIKITCHEN_RATE_LIMIT", 20) == 5

    @pytest.mark.parametrize("value", ["fast", "0", "-3"])
    def test_invalid_falls_back(self, monkeypatch, caplog, value):
        monkeypatch.setenv("EMOJIKITCHEN_RATE_LIMIT", value)
        assert config._env_positive_int("EMOJIKITCHEN_RATE_LIMIT", 20) == 20
        assert "EMOJIKITCHEN_RATE_LIMIT" in caplog.text
