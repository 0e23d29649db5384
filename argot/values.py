"""
Argot value types and casting.

Overview
- ValueType: the three declared payload kinds an option can carry
  (boolean, string, number). Declarations may spell them by name
  ("boolean", "string", "number") or by Python type (bool, str, int/float).
- tonumber(text): permissive numeric parse following the usual shell-tool
  conventions: surrounding whitespace ignored, empty text is zero, decimal
  literals with optional exponent, 0x/0o/0b literals and Infinity.
- ValueType.cast(value, token=...): one explicit cast per declared type.

Casting rules
- boolean
  • text: true when the text is a number greater than zero, or when it is
    "true"/"t" (case-insensitive); anything else is false.
  • other values: plain truthiness.
- string
  • None becomes "null"; anything else goes through str().
- number
  • falsy values (None, "", False, 0) become 0.
  • text is parsed with tonumber(); integral literals stay int, the rest float.
  • a value that is not a number raises NotANumberError naming the token.
"""
import math
import re
from enum import StrEnum

from .faults import FaultCode, NotANumberError

_DECIMAL = re.compile(r"[+-]?(?:(?P<integral>\d+)|\d+\.\d*|\.\d+|\d+(?:\.\d*)?[eE][+-]?\d+|\.\d+[eE][+-]?\d+)")
_RADIX = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")
_INFINITY = re.compile(r"[+-]?Infinity")


def tonumber(text, /):
    """
    parse text into an int or a float.

    returns
    - int for integral decimal literals and radix literals ("0x1f").
    - float for fractional/exponent literals and for "Infinity".
    - math.nan when the text is not a number (callers decide how to fail).
    """
    if not isinstance(text, str):
        raise TypeError("tonumber() argument must be a string")

    if not (text := text.strip()):
        return 0
    if match := _DECIMAL.fullmatch(text):
        if match["integral"]:
            try:
                return int(text)
            except ValueError:
                # past the int digit limit; float overflows to inf
                return float(text)
        return float(text)
    if _RADIX.fullmatch(text):
        return int(text, 0)
    if _INFINITY.fullmatch(text):
        return -math.inf if text.startswith("-") else math.inf
    return math.nan


class ValueType(StrEnum):
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"

    @classmethod
    def resolve(cls, object, /):
        """
        map a declared type (name or python type) to a ValueType.
        """
        if isinstance(object, cls):
            return object
        if object is bool:
            return cls.BOOLEAN
        if object is str:
            return cls.STRING
        if object in (int, float):
            return cls.NUMBER
        if not isinstance(object, str):
            raise TypeError("value type must be a string or one of bool, str, int, float")
        try:
            return cls(object.strip().lower())
        except ValueError:
            raise ValueError("unknown value type %r (expected one of: %s)" % (
                object, ", ".join(map(str, cls))
            )) from None

    def accepts(self, object, /):
        """
        whether a python value is a legal default for this type.
        """
        match self:
            case ValueType.BOOLEAN:
                return isinstance(object, bool)
            case ValueType.STRING:
                return isinstance(object, str)
            case ValueType.NUMBER:
                return isinstance(object, int | float) and not isinstance(object, bool)

    def cast(self, value, /, *, token=None, key=None):
        match self:
            case ValueType.BOOLEAN:
                if isinstance(value, str):
                    number = tonumber(value)
                    # nan compares false, so non-numeric text falls through to the words
                    return number > 0 or value.lower() in ("true", "t")
                return bool(value)
            case ValueType.STRING:
                return "null" if value is None else str(value)
            case ValueType.NUMBER:
                if not value:
                    return 0
                if isinstance(value, bool):
                    return int(value)
                if isinstance(value, int | float):
                    return value
                number = tonumber(str(value))
                if math.isnan(number):
                    raise NotANumberError(
                        "value %r for %r is not a number" % (value, token if token is not None else key),
                        title="not a number",
                        code=FaultCode.NOT_A_NUMBER,
                        hint="pass a numeric value (for example: 3, 2.5, 0x10)",
                        token=token,
                        value=value,
                        key=key,
                    )
                return number


__all__ = (
    "ValueType",
    "tonumber",
)
