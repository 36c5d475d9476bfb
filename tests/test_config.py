from config import DEFAULT_PDA_FILE, Settings, load_settings


def clear_env(monkeypatch):
    for name in ("PDA_FILE", "PDA_MAX_STEPS", "LOG_LEVEL", "LOG_FILE", "PDA_THEME"):
        # setenv antes de delenv para que o monkeypatch desfaça o que o .env definir
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults(monkeypatch):
    clear_env(monkeypatch)
    settings = load_settings(dotenv=False)
    assert settings == Settings()
    assert settings.pda_file == DEFAULT_PDA_FILE
    assert settings.max_steps is None


def test_environment(monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.setenv("PDA_FILE", "exemplos/anbn.txt")
    monkeypatch.setenv("PDA_MAX_STEPS", "100")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PDA_THEME", "dark")
    settings = load_settings(dotenv=False)
    assert settings.pda_file == "exemplos/anbn.txt"
    assert settings.max_steps == 100
    assert settings.log_level == "DEBUG"
    assert settings.theme == "dark"


def test_invalid_max_steps_means_unbounded(monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.setenv("PDA_MAX_STEPS", "muitos")
    assert load_settings(dotenv=False).max_steps is None
    monkeypatch.setenv("PDA_MAX_STEPS", "0")
    assert load_settings(dotenv=False).max_steps is None


def test_dotenv_file(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    (tmp_path / ".env").write_text("PDA_FILE=de_dotenv.txt\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert load_settings().pda_file == "de_dotenv.txt"
