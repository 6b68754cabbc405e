import logging
from typing import Optional

from ..api import evaluate
from ..utils.formatting import print_result_pretty
from .context import ReplContext

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Enter a quantity or an expression:
  2 m/s                     show a quantity
  60 cel to K               convert
  [2 m/s] * [4 s]           arithmetic (+ - * /) on bracketed quantities
  [10 km] / [2 hr] to mi/hr arithmetic, then convert
Commands:
  units                     list registered units
  html | unicode | plain    choose how exponents are rendered
  history                   show previous inputs
  help                      show this text
  quit                      exit"""

COMMAND_REGISTRY = {"help", "?", "quit", "exit", "units", "html", "unicode", "plain", "history"}


class REPL:
    """Read-eval-print loop over quantity expressions."""

    def __init__(self, context: Optional[ReplContext] = None):
        self.ctx = context if context else ReplContext()
        self.running = True

    def start(self):
        """Main loop entry point."""
        from ..config import VERSION

        print(f"quantifier v{VERSION} - type 'help' for commands, 'quit' to exit.")
        while self.running:
            self.loop_once()

    def loop_once(self):
        """Single iteration of the read-eval-print loop."""
        try:
            raw = input(">>> ")
        except (EOFError, KeyboardInterrupt):
            print()
            self.running = False
            return
        self.handle(raw)

    def handle(self, raw: str) -> None:
        text = raw.strip()
        if not text:
            return
        if text.lower() in COMMAND_REGISTRY:
            self._handle_command(text.lower())
            return

        self.ctx.history.append(text)
        result = evaluate(text, precision=self.ctx.precision)
        if result.get("ok") and self.ctx.style:
            result["result"] = result[self.ctx.style]
        print_result_pretty(result, output_format=self.ctx.output_format)

    def _handle_command(self, command: str) -> None:
        if command in ("quit", "exit"):
            self.running = False
        elif command in ("help", "?"):
            print(HELP_TEXT)
        elif command == "units":
            from .app import _print_units

            _print_units(self.ctx.output_format)
        elif command == "history":
            for i, entry in enumerate(self.ctx.history, 1):
                print(f"{i:>3}  {entry}")
        else:
            self.ctx.style = None if command == "plain" else command
            logger.debug("Render style set to %s", command)
