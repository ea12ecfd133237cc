from playlist_sorter.config import AppConfig, OAuthConfig


def test_app_config_defaults(monkeypatch):
    for name in ("PLAYLIST_SORTER_HOST", "PLAYLIST_SORTER_PORT", "PLAYLIST_SORTER_LOG_LEVEL", "FRONTEND_URL"):
        monkeypatch.delenv(name, raising=False)
    config = AppConfig()
    assert config.host == "127.0.0.1"
    assert config.port == 3001
    assert config.log_level == "INFO"
    assert config.frontend_url == "http://localhost:3000"


def test_app_config_from_env(monkeypatch):
    monkeypatch.setenv("PLAYLIST_SORTER_PORT", "9000")
    monkeypatch.setenv("PLAYLIST_SORTER_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("FRONTEND_URL", "https://sorter.example")
    config = AppConfig()
    assert config.port == 9000
    assert config.request_timeout_seconds == 2.5
    assert config.frontend_url == "https://sorter.example"


def test_oauth_config_from_env(monkeypatch):
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "sid")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "secret")
    monkeypatch.setenv("SPOTIFY_REDIRECT_URI", "http://localhost/callback")

    oauth = OAuthConfig.from_env()
    assert oauth.spotify_client_id == "sid"
    assert oauth.spotify_client_secret == "secret"
    assert oauth.spotify_redirect_uri == "http://localhost/callback"
