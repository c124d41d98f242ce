"""Command-line option parsing and cell counting."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

_USAGE = (
    "Usage: lifegrid [-n size] [-s seed] [-d density] [-i iterations] "
    "[-v verbose] [-c verify] [-r repetitions]"
)

_VALUE_OPTIONS = {"n": "n", "s": "seed", "d": "density", "i": "iterations", "r": "reps"}
_FLAG_OPTIONS = {"v": "verbose", "c": "verify"}
_LONG_OPTIONS = {
    "number": "n",
    "seed": "s",
    "density": "d",
    "verbose": "v",
    "iterations": "i",
    "verify": "c",
    "reps": "r",
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class UsageError(ValueError):
    """Raised when the command line cannot be accepted."""


@dataclass(frozen=True)
class Options:
    """Simulation settings taken from the command line."""

    n: int = 10
    seed: int = 10
    density: int = 10
    iterations: int = 2
    verbose: bool = False
    verify: bool = False
    reps: int = 1


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _usage_error(detail: str) -> UsageError:
    return UsageError(f"{detail}\n{_USAGE}")


def _resolve_long(name: str) -> str:
    if name in _LONG_OPTIONS:
        return _LONG_OPTIONS[name]
    matches = [long for long in _LONG_OPTIONS if name and long.startswith(name)]
    if len(matches) == 1:
        return _LONG_OPTIONS[matches[0]]
    if matches:
        raise _usage_error(f"option '--{name}' is ambiguous")
    raise _usage_error(f"unrecognized option '--{name}'")


def parse_arguments(argv: Iterable[str], defaults: Options | None = None) -> Options:
    """Parse options (without the program name) over ``defaults``.

    Non-option words are ignored; ``--`` ends option processing.
    """
    values: dict[str, object] = {}
    args = iter(argv)
    for arg in args:
        if arg == "--":
            break
        if arg.startswith("--"):
            name, has_value, value = arg[2:].partition("=")
            letter = _resolve_long(name)
            if letter in _FLAG_OPTIONS:
                values[_FLAG_OPTIONS[letter]] = True
            elif not has_value:
                raise _usage_error(f"option '--{name}' requires a value")
            else:
                values[_VALUE_OPTIONS[letter]] = _atoi(value)
        elif arg.startswith("-") and len(arg) > 1:
            body = arg[1:]
            while body:
                letter, body = body[0], body[1:]
                if letter in _FLAG_OPTIONS:
                    values[_FLAG_OPTIONS[letter]] = True
                elif letter in _VALUE_OPTIONS:
                    if not body:
                        body = next(args, None)
                        if body is None:
                            raise _usage_error(f"option requires an argument -- '{letter}'")
                    values[_VALUE_OPTIONS[letter]] = _atoi(body)
                    body = ""
                else:
                    raise _usage_error(f"invalid option -- '{letter}'")

    options = replace(defaults if defaults is not None else Options(), **values)
    if options.density <= 0 or options.density > 100:
        raise UsageError("Density should be between 1 and 100")
    return options


def count_cells(matrix: Sequence[Sequence[int]]) -> tuple[int, int]:
    """Return ``(alive, dead)``; only cells equal to 1 count as alive."""
    alive = sum(1 for row in matrix for value in row if value == 1)
    total = sum(len(row) for row in matrix)
    return alive, total - alive