import io

import pytest

import main


@pytest.fixture
def definition(tmp_path, parenteses_text):
    path = tmp_path / "PDA.txt"
    path.write_text(parenteses_text, encoding="utf-8")
    return str(path)


def test_console_session(monkeypatch, capsys, definition):
    monkeypatch.setattr("sys.stdin", io.StringIO("(())\n(()\nx\nquit\n"))
    assert main.main([definition]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == f">>>Loading {definition}…"
    assert out.count("ACCEPTED") == 1
    assert out.count("REJECTED") == 1
    assert "INVALID INPUT" in out
    assert out[-1] == ">>>Goodbye!"


def test_missing_definition(capsys, tmp_path):
    missing = str(tmp_path / "nada.txt")
    assert main.main([missing]) == 1
    assert f"Error loading {missing}" in capsys.readouterr().err


def test_malformed_definition(capsys, tmp_path):
    bad = tmp_path / "ruim.txt"
    bad.write_text("dois\n0\na\nZ\n", encoding="utf-8")
    assert main.main([str(bad)]) == 1
    assert "linha 1" in capsys.readouterr().err


def test_max_steps_option(monkeypatch, capsys, definition):
    monkeypatch.setattr("sys.stdin", io.StringIO("(())\n"))
    assert main.main([definition, "--max-steps", "1"]) == 0
    assert "REJECTED" in capsys.readouterr().out.splitlines()


def test_gui_flag_dispatches(monkeypatch, definition):
    calls = []
    monkeypatch.setattr(main, "run_gui", lambda pda, path, theme, max_steps: calls.append((path, theme)) or 0)
    assert main.main([definition, "--gui", "--theme", "dark"]) == 0
    assert calls == [(definition, "dark")]
