"""
Argument tokenizer.

Not argparse: the CLI accepts options anywhere on the line and any unknown
option is kept, so commands decide which options they read.
"""

from dataclasses import dataclass, field
from typing import Literal, Union

# A bare flag is stored as True, an option with a value as its string.
OptionValue = Union[str, Literal[True]]


@dataclass
class ParsedCommand:
    """Result of tokenizing argv."""

    command: str | None = None
    positional: list[str] = field(default_factory=list)
    options: dict[str, OptionValue] = field(default_factory=dict)

    def has(self, *names: str) -> bool:
        """True if any of the options was given, as a flag or with a value."""
        return any(name in self.options for name in names)

    def flag(self, *names: str) -> bool:
        return any(bool(self.options.get(name)) for name in names)

    def value(self, *names: str) -> str | None:
        """First non-empty string value among the names.

        Bare flags are not values: ``--status --summary`` gives no status.
        """
        for name in names:
            raw = self.options.get(name)
            if isinstance(raw, str) and raw:
                return raw
        return None

    def first_positional(self) -> str | None:
        return self.positional[0] if self.positional else None


def _takes_value(argv: list[str], i: int) -> bool:
    return i + 1 < len(argv) and not argv[i + 1].startswith("-")


def parse_args(argv: list[str]) -> ParsedCommand:
    """
    Tokenize argv into command, positionals and options.

    - First bare token is the command, later bare tokens are positionals
    - ``--key=value`` sets a string (possibly empty)
    - ``--key value`` / ``-k value`` consume the next token unless it starts
      with "-"; otherwise the option is a bare flag (True)

    Values starting with "-" (negative numbers too) are never consumed.
    """
    parsed = ParsedCommand()
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg.startswith("--"):
            key, sep, value = arg[2:].partition("=")
            if sep:
                parsed.options[key] = value
            elif _takes_value(argv, i):
                parsed.options[key] = argv[i + 1]
                i += 1
            else:
                parsed.options[key] = True
        elif arg.startswith("-"):
            key = arg[1:]
            if _takes_value(argv, i):
                parsed.options[key] = argv[i + 1]
                i += 1
            else:
                parsed.options[key] = True
        elif parsed.command is None:
            parsed.command = arg
        else:
            parsed.positional.append(arg)
        i += 1
    return parsed
