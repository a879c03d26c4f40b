"""Shell quoting and command specs.

Commands are executed as argv vectors, never through a shell. Quoting is
applied when a command is rendered as a single line (logs, dry runs), so
the rendered line can be pasted into a POSIX shell and run unchanged.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Tuple

_SAFE_TOKEN = re.compile(r"^[A-Za-z0-9_@%+=:,./-]+$")


def quote_arg(value: str) -> str:
    """Wrap value in single quotes, escaping embedded single quotes.

    Each ``'`` becomes ``'"'"'``: close the quote, emit a double-quoted
    single quote, reopen. Nothing inside single quotes is special to a
    POSIX shell, so ``;``, ``|``, backticks, ``$()`` and newlines stay
    literal.
    """
    return "'" + value.replace("'", "'\"'\"'") + "'"


def render_command(tokens: Iterable[str]) -> str:
    """Join tokens into a shell line, quoting anything not obviously safe."""
    parts = []
    for token in tokens:
        if _SAFE_TOKEN.match(token):
            parts.append(token)
        else:
            parts.append(quote_arg(token))
    return " ".join(parts)


@dataclass(frozen=True)
class CommandSpec:
    """One external-process invocation.

    Attributes:
        program: Executable name or path.
        args: Flags and positional arguments, in order.
    """

    program: str
    args: Tuple[str, ...] = ()

    @property
    def tokens(self) -> Tuple[str, ...]:
        return (self.program,) + tuple(self.args)

    def render(self) -> str:
        return render_command(self.tokens)

    def __str__(self) -> str:
        return self.render()
