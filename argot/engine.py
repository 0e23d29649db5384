"""
Argot parse engine: the token-consuming state machine.

What it does
- Drains a deque of pending raw tokens left-to-right. Every step pops the
  front token, classifies it (argot.tokens.classify) and branches:
  • bare dash ("-", "--", "-=x"): the next positional option receives its
    declared default (MissingDefaultError when it has none); with no
    positional left the token is ignored.
  • long flag ("--name[=value]"): looked up by name; the value is the inline
    text when present (even ""), True for booleans, "" otherwise.
    unknown names raise UndefinedFlagError.
  • short flag ("-n", "-n value", "-abc"): looked up by body. value-taking
    options pop the next pending token; booleans become True. an inline
    "=value" on a short flag is ignored. an unknown multi-letter body is a
    cluster: it is split into one "-letter" token per character, pushed back
    to the front of the deque in order, and re-classified on the next steps. an unknown single letter
    raises UndefinedFlagError.
  • bare token: matched against the next positional option (each consumed
    once, in registration order); with none left it overflows into `other`.
- Every value is cast through its option's ValueType before assignment. for
  flags and bare dashes the option action (if any) is then called with the
  cast value, in token order; bare tokens matched to positionals never fire
  actions.
- After the last token: defaults fill the gaps (never overriding parsed
  values) and missing required keys raise MissingRequiredError, all at once.

Invariants
- The pending deque and the positional cursor are created per run() call;
  the registry is read, never written.
- A bounded step counter (256) stops runaway expansion with
  TooMuchRecursionError. each cluster expansion strictly shortens the body,
  so this only triggers on inputs with more than 256 tokens after expansion.
- An action returning Terminate(code) stops the loop immediately; the
  result then carries that signal and the required check is skipped.
"""
from collections import deque

from .faults import *
from .results import Continue, Terminate, assemble
from .tokens import classify
from .utils import Unset
from .values import ValueType


class ParseEngine:
    """
    One engine per registry; run() may be called any number of times.
    """

    limit = 256

    def __init__(self, registry, /):
        self._registry = registry

    def run(self, tokens, /):
        """
        parse a sequence of raw tokens into a ParseResult.

        raises
        - MissingDefaultError, UndefinedFlagError, NotANumberError,
          TooMuchRecursionError, MissingRequiredError (see argot.faults).
        """
        pending = deque(tokens)
        positionals = deque(self._registry.positionals)
        values = {}
        other = []
        steps = 0

        while pending:
            if (steps := steps + 1) > self.limit:
                raise TooMuchRecursionError(
                    "gave up after %d parsing steps at %r" % (self.limit, pending[0]),
                    title="too much recursion",
                    code=FaultCode.TOO_MUCH_RECURSION,
                    hint="pass fewer arguments or check the option declarations",
                    limit=self.limit,
                    token=pending[0],
                )

            token = classify(pending.popleft())

            if token.flag and not token.body:
                spec, value = self._bare_dash(token, positionals)
            elif token.long:
                spec, value = self._long_flag(token)
            elif token.flag:
                spec, value = self._short_flag(token, pending)
            else:
                spec, value = self._bare_token(token, positionals, other)

            if spec is None:
                continue

            values[spec.key] = value = spec.type.cast(value, token=token.raw, key=spec.key)

            if token.flag and spec.action is not Unset and isinstance(signal := spec.action(value), Terminate):
                return assemble(self._registry.defaults, values, other, signal)

        result = assemble(self._registry.defaults, values, other, Continue)

        if missing := [key for key in self._registry.required if key not in result]:
            raise MissingRequiredError(
                "missing required arguments: %s" % ", ".join(missing),
                title="missing required arguments",
                code=FaultCode.MISSING_REQUIRED,
                hint="provide %s and run again" % ", ".join(map(repr, missing)),
                keys=tuple(missing),
            )

        return result

    def _bare_dash(self, token, positionals, /):
        try:
            spec = positionals.popleft()
        except IndexError:
            return None, None

        try:
            return spec, self._registry.defaults[spec.key]
        except KeyError:
            raise MissingDefaultError(
                "option %r does not have a default value" % spec.key,
                title="missing default value",
                code=FaultCode.MISSING_DEFAULT,
                hint="give a value for %r instead of %r" % (spec.key, token.raw),
                key=spec.key,
                token=token.raw,
            ) from None

    def _long_flag(self, token, /):
        if (spec := self._registry.flags.get(token.body)) is None:
            self._undefined(token)

        if token.inline is not None:
            return spec, token.inline
        return spec, True if spec.type is ValueType.BOOLEAN else ""

    def _short_flag(self, token, pending, /):
        if (spec := self._registry.flags.get(token.body)) is not None:
            if spec.takes_value:
                return spec, pending.popleft() if pending else None
            return spec, True

        if len(token.body) < 2:
            self._undefined(token)

        # "-abc" → "-a", "-b", "-c" processed next, ahead of anything queued after the cluster
        shorts = ["-" + letter for letter in token.body]
        pending.extendleft(reversed(shorts))
        return None, None

    def _bare_token(self, token, positionals, other, /):
        try:
            return positionals.popleft(), token.raw
        except IndexError:
            other.append(token.raw)
            return None, None

    def _undefined(self, token, /):
        raise UndefinedFlagError(
            "flag %r is not defined" % token.raw,
            title="undefined flag",
            code=FaultCode.UNDEFINED_FLAG,
            hint="check the spelling of %r or declare it first" % (token.prefix + token.body),
            token=token.raw,
            name=token.body,
        )


__all__ = (
    "ParseEngine",
)
