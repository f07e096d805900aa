from clue_chat.config import Settings


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("SERVER_URL", "http://chat.internal:9000")
    monkeypatch.setenv("STORAGE_PATH", "/tmp/clue/state.json")
    monkeypatch.setenv("NEWLINE_DELAY_MS", "250")

    settings = Settings()

    assert settings.server_url == "http://chat.internal:9000"
    assert settings.storage_path == "/tmp/clue/state.json"
    assert settings.newline_delay_ms == 250


def test_settings_defaults(monkeypatch):
    for name in ("SERVER_URL", "STORAGE_PATH", "INITIAL_DELAY_MS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.history_limit == 50
    assert settings.history_key == "clue-ai-chat-history"
    assert settings.bookmarks_key == "clue-ai-bookmarks"
