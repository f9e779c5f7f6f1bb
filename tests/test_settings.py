import pytest

import server
from settings import Settings, SettingsError


class TestFromEnv:

    def test_defaults(self):
        s = Settings.from_env({"META_API_TOKEN": "tok", "ACCOUNT_ID": "acc"})
        assert s.meta_api_token == "tok"
        assert s.account_id == "acc"
        assert s.default_symbol == "XAUUSD"
        assert s.port == 5000
        assert s.base_url == "https://api.metaapi.cloud"

    def test_overrides(self):
        s = Settings.from_env({
            "META_API_TOKEN": "tok",
            "ACCOUNT_ID": "acc",
            "DEFAULT_SYMBOL": "EURUSD",
            "PORT": "8080",
            "META_API_BASE_URL": "https://example.test/",
        })
        assert s.default_symbol == "EURUSD"
        assert s.port == 8080
        assert s.base_url == "https://example.test"

    @pytest.mark.parametrize(
        "env",
        [
            {},
            {"META_API_TOKEN": "tok"},
            {"ACCOUNT_ID": "acc"},
            {"META_API_TOKEN": " ", "ACCOUNT_ID": "acc"},
        ],
    )
    def test_missing_credentials_fatal(self, env):
        with pytest.raises(SettingsError):
            Settings.from_env(env)

    def test_bad_port(self):
        with pytest.raises(SettingsError, match="PORT"):
            Settings.from_env({"META_API_TOKEN": "tok", "ACCOUNT_ID": "acc", "PORT": "http"})

    def test_repr_hides_token(self):
        s = Settings(meta_api_token="secret-token", account_id="acc")
        assert "secret-token" not in repr(s)


class TestStartup:

    def test_main_exits_without_credentials(self, monkeypatch):
        monkeypatch.delenv("META_API_TOKEN", raising=False)
        monkeypatch.delenv("ACCOUNT_ID", raising=False)
        monkeypatch.setattr(server, "load_dotenv", lambda: None)
        with pytest.raises(SystemExit) as exc:
            server.main()
        assert exc.value.code == 1

    def test_create_app_keeps_settings(self, settings):
        app = server.create_app(settings)
        assert app.state.settings is settings
        assert app.state.trading_service.settings is settings
