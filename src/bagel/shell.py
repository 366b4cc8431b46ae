"""Interactive Bagel shell. Uses cmd as backend."""

from __future__ import annotations

import cmd
import logging

from .report import report
from .session import Ok, Session
from .tokens import scan

logger = logging.getLogger(__name__)

OPENERS = {"(", "{"}
CLOSERS = {")", "}"}


def is_incomplete(source: str) -> bool:
    """True while the chunk has an open string, brace or parenthesis."""
    tokens, errors = scan(source)
    for e in errors:
        if e.msg.startswith("unterminated string"):
            return True
    depth = 0
    for tok in tokens:
        if tok.kind in OPENERS:
            depth += 1
        elif tok.kind in CLOSERS:
            depth -= 1
    return depth > 0


class Shell(cmd.Cmd):
    """Bagel interpreter shell."""

    intro = "Bagel interpreter\nType 'exit' or press Ctrl-D to quit."
    prompt = "> "
    secondary_prompt = ". "  # shown while a chunk is still open
    _tmp_prompt = "> "

    def __init__(self, sess: Session | None = None, *args, color: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess if sess is not None else Session()
        self.color = color
        self._pending: list[str] = []
        self.chunks = 0

    def onecmd(self, line: str) -> bool:
        # Every input line is Bagel source; only exit/EOF are shell commands.
        if line == "EOF":
            return self.do_EOF("")
        if not self._pending:
            stripped = line.strip()
            if stripped == "exit":
                return self.do_exit("")
            if stripped == "":
                return self.emptyline()
        self.default(line)
        return False

    def default(self, line: str) -> None:
        """Feed one line of Bagel source."""
        self._pending.append(line)
        chunk = "\n".join(self._pending)
        if is_incomplete(chunk):
            self.prompt = self.secondary_prompt
            return
        self._pending = []
        self.prompt = self._tmp_prompt
        self._run(chunk)

    def _run(self, chunk: str) -> None:
        self.chunks += 1
        logger.debug("running chunk %d", self.chunks)
        try:
            result = self.sess.run_interactive(chunk)
        except KeyboardInterrupt:
            # Abandons the chunk; globals it already set are kept.
            print("interrupted", file=self.stdout)
            return
        if not isinstance(result, Ok):
            report(result, chunk, "<stdin>", self.stdout, color=self.color)

    def emptyline(self) -> bool:
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg: str) -> bool:
        """Exits interpreter, running whatever chunk is still open."""
        print(file=self.stdout)
        if self._pending:
            chunk = "\n".join(self._pending)
            self._pending = []
            self._run(chunk)
        return self.do_exit(arg)

    def do_exit(self, arg: str) -> bool:
        """Exits interpreter."""
        return True
