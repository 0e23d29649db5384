"""
Argot parse results and control signals.

Overview
- Continue / Terminate(code): what an option action hands back to the parser.
  Returning None (or Continue) keeps parsing; returning Terminate stops the
  parse on the spot and asks the calling layer to exit with `code`.
- ParseResult: read-only mapping key → cast value, plus:
  • other: tuple of bare tokens no positional option consumed (also present
    under the reserved "other" key when non-empty),
  • action: the control signal the parse ended with.
- assemble(): the pure merge defaults ⊕ parsed values (parsed values win).
"""
import functools
from collections.abc import Mapping
from typing import NamedTuple, final

from .options import OVERFLOW


@final
class ContinueType:
    """signal: keep consuming tokens."""

    __slots__ = ()

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __repr__(self):
        return "Continue"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'ContinueType' is not an acceptable base type")


Continue = ContinueType()


class Terminate(NamedTuple):
    """signal: stop parsing, the calling layer should exit with `code`."""
    code: int = 0

    def __repr__(self):
        return "Terminate(%d)" % self.code


class ParseResult(Mapping):
    __slots__ = ("_values", "_other", "_action")

    def __init__(self, values, other=(), action=Continue):
        self._values = dict(values)
        self._other = tuple(other)
        self._action = action

    @property
    def other(self):
        return self._other

    @property
    def action(self):
        return self._action

    @property
    def terminated(self):
        return isinstance(self._action, Terminate)

    def __getitem__(self, key, /):
        return self._values[key]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return "ParseResult(%r, action=%r)" % (self._values, self._action)

    def __rich_repr__(self):
        yield from self._values.items()
        yield "action", self._action


def assemble(defaults, values, other=(), action=Continue):
    """
    merge defaults, explicitly parsed values and the overflow bucket.

    parsed values always override defaults; the overflow is attached under
    the reserved "other" key only when something overflowed.
    """
    merged = dict(defaults) | dict(values)
    if other:
        merged[OVERFLOW] = tuple(other)
    return ParseResult(merged, other, action)


__all__ = (
    "Continue",
    "Terminate",
    "ParseResult",
    "assemble",
)
