"""Tests for the writing assistant CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from generation.base import ErrorKind, Failure, Success
from generation.orchestrator import GenerationOrchestrator
from generation.strategies import WritingStrategy, WritingStyle
from scripts.writing_assistant import ConsoleObserver, InteractiveSession, main, parse_args
from session.storage import Session, load_session, write_session


@pytest.fixture
def base_args(tmp_path: Path) -> list:
    return ["--env-file", str(tmp_path / "missing.env")]


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.style == "professional"
        assert args.text is None
        assert args.interactive is False


class TestSingleShot:
    """Tests for one-off rewrites from the command line."""

    def test_prints_rewrite(self, base_args, transport, config, capsys):
        """Test the generated text is printed and exit code is 0."""
        transport.outcome = Success("Please revise the email.")

        code = main(base_args + ["--text", "fix my email"], transport=transport, config=config)

        assert code == 0
        assert "Please revise the email." in capsys.readouterr().out
        assert transport.calls[0][0]["preamble"] == WritingStyle.PROFESSIONAL.preamble

    def test_style_option(self, base_args, transport, config):
        """Test --style selects the preamble."""
        main(base_args + ["--style", "creative", "-t", "x"], transport=transport, config=config)

        assert transport.calls[0][0]["preamble"] == WritingStyle.CREATIVE.preamble

    def test_json_output(self, base_args, transport, config, capsys):
        """Test --json prints a structured result."""
        code = main(base_args + ["--text", "hi", "--json"], transport=transport, config=config)

        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert data == {"style": "Professional", "input": "hi", "output": "rewritten"}

    def test_json_failure(self, base_args, transport, config, capsys):
        """Test failures are reported with their kind and exit code 1."""
        transport.outcome = Failure.of(ErrorKind.RATE_LIMITED)

        code = main(base_args + ["--text", "hi", "--json"], transport=transport, config=config)

        data = json.loads(capsys.readouterr().out)
        assert code == 1
        assert data["kind"] == "rate_limited"
        assert "Rate limit" in data["error"]

    def test_unknown_style(self, base_args, transport, config, capsys):
        """Test an unknown style exits with an error."""
        code = main(base_args + ["--style", "poetic", "-t", "x"], transport=transport, config=config)

        assert code == 1
        assert "Unknown writing style" in capsys.readouterr().err
        assert transport.calls == []

    def test_input_file(self, base_args, transport, config, tmp_path: Path):
        """Test --input-file supplies the text."""
        source = tmp_path / "draft.txt"
        source.write_text("draft from file\n", encoding="utf-8")

        main(base_args + ["--input-file", str(source)], transport=transport, config=config)

        assert transport.calls[0][0]["message"] == "draft from file"

    def test_save_dir(self, base_args, transport, config, tmp_path: Path):
        """Test --save-dir writes a session file for a success."""
        out_dir = tmp_path / "sessions"

        code = main(
            base_args + ["-t", "hello", "--save-dir", str(out_dir)],
            transport=transport,
            config=config,
        )

        files = list(out_dir.iterdir())
        assert code == 0
        assert len(files) == 1
        loaded = load_session(files[0])
        assert (loaded.input_text, loaded.output_text) == ("hello", "rewritten")


class TestInteractiveSession:
    """Tests for the interactive loop."""

    def run_lines(self, session: InteractiveSession, lines: list) -> None:
        feed = iter(lines)
        session.run(input_fn=lambda prompt: next(feed))

    def make_session(self, transport, config, tmp_path: Path, orchestrator) -> InteractiveSession:
        strategy = WritingStrategy(WritingStyle.PROFESSIONAL, transport, config)
        return InteractiveSession(orchestrator, strategy, ConsoleObserver(), tmp_path)

    def test_style_switch_then_rewrite_then_save(self, transport, config, tmp_path: Path, capsys):
        """Test a full interactive round: switch, rewrite, save, quit."""
        with GenerationOrchestrator() as orchestrator:
            session = self.make_session(transport, config, tmp_path, orchestrator)
            self.run_lines(session, ["/style creative", "a dull day", "/save", "exit"])

        out = capsys.readouterr().out
        assert "Strategy changed to: Creative" in out
        assert "rewritten" in out
        assert transport.calls[0][0]["preamble"] == WritingStyle.CREATIVE.preamble
        saved = list(tmp_path.glob("session_*.txt"))
        assert len(saved) == 1
        loaded = load_session(saved[0])
        assert loaded.style == "Creative"
        assert (loaded.input_text, loaded.output_text) == ("a dull day", "rewritten")

    def test_load_command(self, transport, config, tmp_path: Path, capsys):
        """Test /load restores the last input and output."""
        path = write_session(Session("Academic", "old in", "old out"), tmp_path / "prev.txt")

        with GenerationOrchestrator() as orchestrator:
            session = self.make_session(transport, config, tmp_path, orchestrator)
            self.run_lines(session, [f"/load {path}", "quit"])

        assert session.last_input == "old in"
        assert session.last_output == "old out"
        assert "Loaded: prev.txt" in capsys.readouterr().out

    def test_unknown_style_keeps_current(self, transport, config, tmp_path: Path, capsys):
        """Test a bad /style leaves the active strategy unchanged."""
        with GenerationOrchestrator() as orchestrator:
            session = self.make_session(transport, config, tmp_path, orchestrator)
            self.run_lines(session, ["/style poetic", "exit"])

        assert session.strategy.name == "Professional"
        assert "Unknown writing style" in capsys.readouterr().err

    def test_save_with_nothing(self, transport, config, tmp_path: Path, capsys):
        """Test /save before any rewrite reports an error."""
        with GenerationOrchestrator() as orchestrator:
            session = self.make_session(transport, config, tmp_path, orchestrator)
            self.run_lines(session, ["/save", "exit"])

        assert "Nothing to save!" in capsys.readouterr().err
        assert list(tmp_path.glob("session_*.txt")) == []

    def test_eof_ends_loop(self, transport, config, tmp_path: Path, capsys):
        """Test end of input exits cleanly."""

        def raise_eof(prompt):
            raise EOFError

        with GenerationOrchestrator() as orchestrator:
            session = self.make_session(transport, config, tmp_path, orchestrator)
            session.run(input_fn=raise_eof)

        assert "Goodbye!" in capsys.readouterr().out
