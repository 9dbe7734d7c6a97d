import io
import json

from calcly import Calculator, Settings, CONVENTIONAL
from calcly import config
from calcly.console import main, repl, render, BANNER, CLEAR_SCREEN, HISTORY_SIZE, EXIT_OK, \
    EXIT_EVALUATION_ERROR, EXIT_CONFIG_ERROR


def run_repl(lines, calculator=None):
    stdin = io.StringIO("".join(line + "\n" for line in lines))
    stdout = io.StringIO()
    code = repl(calculator or Calculator(), stdin, stdout)
    return code, stdout.getvalue()


class TestRender(object):
    def test_value(self):
        assert render(Calculator(), "2 + 3 * 4") == "= 14"
        assert render(Calculator(), "1/3") == "= 0.3333333333"

    def test_error(self):
        assert render(Calculator(), "5 % 0") == "Error: Modulo by zero"


class TestRepl(object):
    def test_session(self):
        code, out = run_repl(["2^8", "", "sqrt(-1)", "quit", "1 + 1"])
        assert code == EXIT_OK
        assert out.startswith(BANNER)
        assert "= 256\n" in out
        assert "Error: Square root of negative number\n" in out
        assert out.endswith("Goodbye!\n")
        assert "= 2\n" not in out

    def test_exit(self):
        _, out = run_repl(["exit"])
        assert out.endswith("Goodbye!\n")

    def test_help(self):
        _, out = run_repl(["help"])
        assert "=== Calculator Help ===" in out
        assert "sqrt(x)  Square root" in out

    def test_clear(self):
        _, out = run_repl(["clear"])
        assert CLEAR_SCREEN + BANNER in out

    def test_end_of_input(self):
        code, out = run_repl(["1 + 2"])
        assert code == EXIT_OK
        assert "= 3\n" in out
        assert "Goodbye!" not in out

    def test_reserved_words_are_exact(self):
        _, out = run_repl(["quit now"])
        assert "Error: Unknown identifier: quit" in out

    def test_windows_line_endings(self):
        stdin = io.StringIO("6 * 7\r\nquit\r\n")
        stdout = io.StringIO()
        repl(Calculator(), stdin, stdout)
        assert "= 42\n" in stdout.getvalue()
        assert stdout.getvalue().endswith("Goodbye!\n")

    def test_history(self):
        _, out = run_repl(["2^8", "1 / 0", "history"])
        assert out.endswith("2^8 = 256\n1 / 0 = Error\n> ")

    def test_history_empty(self):
        _, out = run_repl(["history"])
        assert "(no history)\n" in out

    def test_history_keeps_last_entries(self):
        lines = [str(i) for i in range(HISTORY_SIZE + 5)]
        _, out = run_repl(lines + ["history"])
        listing = out.split("= 14\n> ", 1)[1].splitlines()[:-1]
        assert listing == [f"{i} = {i}" for i in range(5, HISTORY_SIZE + 5)]

    def test_conventional_calculator(self):
        _, out = run_repl(["-2^2"], Calculator(Settings(mode=CONVENTIONAL)))
        assert "= -4\n" in out


class TestMain(object):
    def setup_method(self, method):
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()

    def call(self, argv, stdin=None):
        return main(argv, stdin=stdin, stdout=self.stdout, stderr=self.stderr)

    def use_settings(self, monkeypatch, tmp_path, data=None):
        path = tmp_path / "settings.json"
        if data is not None:
            path.write_text(json.dumps(data), encoding="utf-8")
        monkeypatch.setattr(config, "default_settings_path", lambda: str(path))

    def test_expression(self, monkeypatch, tmp_path):
        self.use_settings(monkeypatch, tmp_path)
        assert self.call(["sqrt(16) + log(e)"]) == EXIT_OK
        assert self.stdout.getvalue() == "5\n"

    def test_expression_error(self, monkeypatch, tmp_path):
        self.use_settings(monkeypatch, tmp_path)
        assert self.call(["1 2"]) == EXIT_EVALUATION_ERROR
        assert self.stderr.getvalue() == "Error: Unexpected tokens after expression\n"

    def test_flags_override_settings(self, monkeypatch, tmp_path):
        self.use_settings(monkeypatch, tmp_path, {"mode": "classic", "precision": 3})
        assert self.call(["--mode", "conventional", "--", "-2^2"]) == EXIT_OK
        assert self.stdout.getvalue() == "-4\n"

        assert self.call(["pi"]) == EXIT_OK
        assert self.stdout.getvalue().endswith("3.14\n")

    def test_config_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"precision": 2}), encoding="utf-8")
        assert self.call(["--config", str(path), "pi"]) == EXIT_OK
        assert self.stdout.getvalue() == "3.1\n"

    def test_bad_config(self, tmp_path):
        assert self.call(["--config", str(tmp_path / "missing.json"), "1"]) == EXIT_CONFIG_ERROR
        assert "does not exist" in self.stderr.getvalue()

    def test_bad_flag_value(self, monkeypatch, tmp_path):
        self.use_settings(monkeypatch, tmp_path)
        assert self.call(["--max-depth", "0", "1"]) == EXIT_CONFIG_ERROR

    def test_interactive(self, monkeypatch, tmp_path):
        self.use_settings(monkeypatch, tmp_path)
        assert self.call([], stdin=io.StringIO("(5 + 3) * 2\nexit\n")) == EXIT_OK
        assert "= 16\n" in self.stdout.getvalue()

    def test_expression_starting_with_minus(self, monkeypatch, tmp_path):
        self.use_settings(monkeypatch, tmp_path)
        assert self.call(["--", "-2^2"]) == EXIT_OK
        assert self.call(["--", "-sqrt 4"]) == EXIT_OK
        assert self.stdout.getvalue() == "4\n-2\n"

    def test_options_after_expression(self, monkeypatch, tmp_path):
        self.use_settings(monkeypatch, tmp_path)
        assert self.call(["pi", "--precision", "3"]) == EXIT_OK
        assert self.stdout.getvalue() == "3.14\n"
