"""CLI for rewriting text in a creative, professional or academic style."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from dotenv import load_dotenv

from generation import (
    AssistantConfig,
    CohereTransport,
    GenerationFailed,
    GenerationOrchestrator,
    StyleError,
    Transport,
    WritingStrategy,
    available_styles,
    create_strategy,
    load_config,
)
from session import Session, SessionError, load_session, save_session

HELP_TEXT = """Commands:
  /style <name>   switch style ({styles})
  /styles         list styles
  /save [dir]     save the last input and output
  /load <path>    load a saved session
  /help           show this help
  exit, quit      leave"""


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Rewrite text in a chosen style using a remote language model.",
    )
    parser.add_argument(
        "--style",
        "-s",
        default="professional",
        help=f"Writing style. Options: {', '.join(available_styles())}.",
    )
    parser.add_argument(
        "--text",
        "-t",
        help="Text to rewrite (omit for interactive mode).",
    )
    parser.add_argument(
        "--input-file",
        help="Read the text to rewrite from this file.",
    )
    parser.add_argument(
        "--interactive",
        "-i",
        action="store_true",
        help="Run in interactive mode.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output result as JSON (single text mode only).",
    )
    parser.add_argument(
        "--save-dir",
        help="Save each successful rewrite as a session file in this directory.",
    )
    parser.add_argument(
        "--config",
        help="Path to config.properties (default: $WRITING_ASSISTANT_CONFIG or ./config.properties).",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to .env file with API credentials.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s")


class ConsoleObserver:
    """Prints lifecycle notifications to the terminal."""

    def __init__(self, out=None, err=None):
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def on_generation_started(self) -> None:
        print("Generating text...", file=self.err)

    def on_text_generated(self, generated_text: str) -> None:
        print(f"\n{generated_text}\n", file=self.out)

    def on_generation_error(self, error_message: str) -> None:
        print(f"[error] {error_message}", file=self.err)


class InteractiveSession:
    """Interactive prompt loop. Waits for each rewrite before reading the next line."""

    def __init__(
        self,
        orchestrator: GenerationOrchestrator,
        strategy: WritingStrategy,
        observer: ConsoleObserver,
        save_dir: Optional[Path] = None,
    ):
        self.orchestrator = orchestrator
        self.strategy = strategy
        self.observer = observer
        self.save_dir = save_dir or Path(".")
        self.last_input = ""
        self.last_output = ""

    def _say(self, message: str) -> None:
        print(message, file=self.observer.out)

    def switch_style(self, name: str) -> None:
        try:
            self.strategy = create_strategy(name, self.strategy.transport, self.strategy.config)
        except StyleError as e:
            self.observer.on_generation_error(str(e))
            return
        self._say(f"Strategy changed to: {self.strategy.name}")

    def save(self, directory: Optional[str] = None) -> None:
        session = Session(
            style=self.strategy.name,
            input_text=self.last_input,
            output_text=self.last_output,
        )
        try:
            path = save_session(session, Path(directory) if directory else self.save_dir)
        except SessionError as e:
            self.observer.on_generation_error(str(e))
            return
        self._say(f"Saved to: {path}")

    def load(self, path: str) -> None:
        try:
            session = load_session(path)
        except SessionError as e:
            self.observer.on_generation_error(str(e))
            return
        self.last_input = session.input_text
        self.last_output = session.output_text
        self._say(f"Loaded: {Path(path).name}")
        self._say(f"--- Input ---\n{session.input_text}\n--- Output ---\n{session.output_text}")

    def rewrite(self, text: str) -> None:
        handle = self.orchestrator.start(text, self.strategy)
        terminal = handle.dispatch(self.observer)
        if not isinstance(terminal, GenerationFailed):
            self.last_input = terminal.request.input_text
            self.last_output = terminal.text

    def handle_line(self, line: str) -> bool:
        """Process one line of input. Returns False when the user quits."""
        if line.lower() in ("exit", "quit"):
            return False
        if not line:
            return True

        command, _, argument = line.partition(" ")
        argument = argument.strip()
        if command == "/style":
            self.switch_style(argument)
        elif command == "/styles":
            self._say(", ".join(available_styles()))
        elif command == "/save":
            self.save(argument or None)
        elif command == "/load":
            if argument:
                self.load(argument)
            else:
                self.observer.on_generation_error("Usage: /load <path>")
        elif command == "/help":
            self._say(HELP_TEXT.format(styles=", ".join(available_styles())))
        else:
            self.rewrite(line)
        return True

    def run(self, input_fn: Callable[[str], str] = input) -> None:
        self._say("=== Writing Assistant ===")
        self._say(f"Style: {self.strategy.name}. Type /help for commands, 'exit' to quit.\n")

        while True:
            try:
                line = input_fn(f"[{self.strategy.name}] > ").strip()
            except (EOFError, KeyboardInterrupt):
                self._say("\nGoodbye!")
                break

            if not self.handle_line(line):
                self._say("Goodbye!")
                break


def run_single(
    orchestrator: GenerationOrchestrator,
    strategy: WritingStrategy,
    text: str,
    as_json: bool,
    save_dir: Optional[Path],
) -> int:
    handle = orchestrator.start(text, strategy)
    if as_json:
        terminal = handle.result()
    else:
        terminal = handle.dispatch(ConsoleObserver())

    if as_json:
        output = {"style": strategy.name, "input": text}
        if isinstance(terminal, GenerationFailed):
            output.update({"error": terminal.message, "kind": terminal.kind.value})
        else:
            output["output"] = terminal.text
        json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")

    if isinstance(terminal, GenerationFailed):
        return 1

    if save_dir is not None:
        session = Session(
            style=strategy.name,
            input_text=terminal.request.input_text,
            output_text=terminal.text,
        )
        try:
            path = save_session(session, save_dir)
        except SessionError as e:
            print(f"[error] {e}", file=sys.stderr)
            return 1
        print(f"[info] Saved to: {path}", file=sys.stderr)
    return 0


def main(
    argv: Optional[list[str]] = None,
    transport: Optional[Transport] = None,
    config: Optional[AssistantConfig] = None,
) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    # Load environment variables
    env_path = Path(args.env_file)
    if env_path.exists():
        load_dotenv(env_path)
    else:
        load_dotenv()  # Try default locations

    if config is None:
        config = load_config(args.config)
    logging.debug(
        "Endpoint: %s, max tokens: %d, temperature: %.2f",
        config.endpoint,
        config.max_tokens,
        config.temperature,
    )
    if not config.is_configured():
        print("[warn] No API key configured. Set COHERE_API_KEY or api.key.", file=sys.stderr)

    owned_transport = transport is None
    transport = transport if transport is not None else CohereTransport()

    try:
        strategy = create_strategy(args.style, transport, config)
    except StyleError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1

    text = args.text
    if args.input_file:
        try:
            text = Path(args.input_file).read_text(encoding="utf-8")
        except OSError as e:
            print(f"[error] Failed to read {args.input_file}: {e}", file=sys.stderr)
            return 1

    save_dir = Path(args.save_dir) if args.save_dir else None

    try:
        with GenerationOrchestrator() as orchestrator:
            if args.interactive or text is None:
                InteractiveSession(orchestrator, strategy, ConsoleObserver(), save_dir).run()
                return 0
            return run_single(orchestrator, strategy, text, args.json, save_dir)
    finally:
        if owned_transport:
            transport.close()


if __name__ == "__main__":
    sys.exit(main())
