"""
Argot faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- ParseException / ParseWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

UX goals
- Token-first messages: every message names the token or key at fault, so the
  caller can correct the invocation in one pass.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The parse engine only raises; it never prints or logs.
- The calling layer (Parser.run) hands faults to trigger(fault, **ctx): in shell
  mode they are rendered via rich and the process exits, otherwise they are raised.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    this enumeration is based on the Seralix Fault Codes convention:
    - numeric ranges encode domains (flags, values, results, internal, warnings).
    - spacing leaves room for future additions without reshuffling existing codes.
    - normalize() allows host remapping to custom labels while keeping code-stability.

    grouping (by high-level domain)
    - flags (1111x)
      • UNDEFINED_FLAG
    - values (1112x)
      • NOT_A_NUMBER, MISSING_DEFAULT
    - results (1113x)
      • MISSING_REQUIRED
    - internal guards (1119x)
      • TOO_MUCH_RECURSION
    - warnings (12xxx)
      • DUPLICATE_ALIAS
    """
    # --- flag errors (1111x) ---
    UNDEFINED_FLAG              = 11112

    # --- value errors (1112x) ---
    NOT_A_NUMBER                = 11123
    MISSING_DEFAULT             = 11124

    # --- result errors (1113x) ---
    MISSING_REQUIRED            = 11131

    # --- internal guards (1119x) ---
    TOO_MUCH_RECURSION          = 11191

    # --- warnings (12xxx) ---
    DUPLICATE_ALIAS             = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, /):
    """
    shared rich rendering for exceptions and warnings.

    palette keys: prog-name, code, title, message, hint-arrow, hint.
    """
    main = __import__("__main__")
    colorful = fault.options.get("colorful", True)
    fancy = fault.options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", fault.options.get("prog") or "argot"), styler("prog-name"))

    try:
        code = fault.options["code"].normalize()
    except KeyError:
        code = "-----"

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code, styler("code")),
        " | ",
        text(fault.options.get("title", type(fault).__name__).title(), styler("title")),
        " ]"
    )
    message = text(fault.message, styler("message"))
    hint = Text.assemble(text(" → ", styler("hint-arrow")), text(fault.options.get("hint"), styler("hint")))

    if fancy:
        return Panel(Group(message, hint), title=header, title_align="left")

    return Group(header, message, hint)


class ParseException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title

            # body
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingDefaultError(ParseException): ...
class UndefinedFlagError(ParseException): ...
class NotANumberError(ParseException): ...
class TooMuchRecursionError(ParseException): ...
class MissingRequiredError(ParseException): ...


class ParseWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicateAliasWarning(ParseWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are
      raised and warnings are emitted through the warnings module.

    typical options
    - prog, shell, fancy, colorful, title, code, hint, and any other context the
      reporter may want to show (e.g., token/key/keys).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseException",
    "MissingDefaultError",
    "UndefinedFlagError",
    "NotANumberError",
    "TooMuchRecursionError",
    "MissingRequiredError",
    "ParseWarning",
    "DuplicateAliasWarning",
    "trigger",
)
