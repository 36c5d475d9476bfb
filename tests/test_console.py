import io

from console import Console


def run_session(pda, text):
    out = io.StringIO()
    Console(pda, stdin=io.StringIO(text), stdout=out).loop()
    return out.getvalue().splitlines()


def test_accepted_session(parenteses):
    lines = run_session(parenteses, "(())\nquit\n")
    assert lines[0] == ">>>Loading PDA.txt…"
    assert lines[1] == ">>>Please enter a string to evaluate: "
    assert lines[2] == ">>>Computation…"
    assert "0, (())/Z -> 1, ())/(Z" in lines
    assert lines[lines.index("ACCEPTED") + 1] == ">>>Please enter a string to evaluate: "
    assert lines[-1] == ">>>Goodbye!"


def test_rejected(parenteses):
    lines = run_session(parenteses, "(()\nquit\n")
    assert "REJECTED" in lines
    assert "ACCEPTED" not in lines


def test_quit_is_case_insensitive(parenteses):
    lines = run_session(parenteses, "QUIT\n(())\n")
    assert lines[-1] == ">>>Goodbye!"
    assert ">>>Computation…" not in lines


def test_invalid_input_skips_simulation(parenteses):
    lines = run_session(parenteses, "(a)\nQuit\n")
    assert "INVALID INPUT" in lines
    assert ">>>Computation…" not in lines
    assert not any("->" in line for line in lines)


def test_end_of_input_ends_session(parenteses):
    lines = run_session(parenteses, "()")
    assert "ACCEPTED" in lines
    assert lines[-1] == ">>>Goodbye!"


def test_empty_line_is_the_empty_string(parenteses):
    lines = run_session(parenteses, "\nquit\n")
    assert lines[2:5] == [">>>Computation…", "0, {e}/Z", "0, {e}/Z"]
    assert "ACCEPTED" in lines


def test_evaluate_return_values(parenteses):
    console = Console(parenteses, stdin=io.StringIO(), stdout=io.StringIO())
    assert console.evaluate("()") is True
    assert console.evaluate("(") is False
    assert console.evaluate("x") is None


def test_source_name_and_step_limit(parenteses):
    out = io.StringIO()
    Console(parenteses, stdin=io.StringIO("(())\n"), stdout=out, source="outro.txt", max_steps=2).loop()
    lines = out.getvalue().splitlines()
    assert lines[0] == ">>>Loading outro.txt…"
    assert "REJECTED" in lines
