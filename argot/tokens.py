r"""
Argot tokenizer: split one raw argument into its structural pieces.

grammar (one argv entry)
    (-*)  body  (=inline)?

- prefix: the run of leading dashes, collapsed to "" (none), "-" (single) or
  "--" (two or more, stray extra dashes included).
- body: everything after the dashes up to the first '='; it may be empty
  (a lone "-"), a single letter, a long name, or a short-flag cluster ("abc").
- inline: everything after the first '=' (possibly ""), or None when the
  token has no '='. an empty inline value is distinct from an absent one.

classify() is pure: no registry lookups, no errors.
"""
import re
from typing import NamedTuple

_TOKEN = re.compile(r"(?P<dashes>-*)(?P<body>[^=]*)(?:=(?P<inline>.*))?", re.DOTALL)


class Token(NamedTuple):
    raw: str
    prefix: str
    body: str
    inline: str | None

    @property
    def flag(self):
        """whether the token is dash-prefixed (short, long or bare dash)."""
        return bool(self.prefix)

    @property
    def long(self):
        return self.prefix == "--"


def classify(raw, /):
    """
    classify a raw argv entry into a Token.

    examples
    - "--name=value" → Token(prefix="--", body="name", inline="value")
    - "--name="      → Token(prefix="--", body="name", inline="")
    - "-abc"         → Token(prefix="-", body="abc", inline=None)
    - "---x"         → Token(prefix="--", body="x", inline=None)
    - "-"            → Token(prefix="-", body="", inline=None)
    - "file.txt"     → Token(prefix="", body="file.txt", inline=None)
    """
    if not isinstance(raw, str):
        raise TypeError("classify() argument must be a string")

    match = _TOKEN.fullmatch(raw)
    prefix = match["dashes"][:2]
    return Token(raw, prefix, match["body"], match["inline"])


__all__ = (
    "Token",
    "classify",
)
