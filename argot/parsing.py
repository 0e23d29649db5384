"""
Argot parsing layer: declare options, parse tokens, run as a CLI.

What this module provides
- Parser: owns one option registry and one configuration mapping.
  • construction accepts, in any order, sequences of option declarations
    (concatenated) and configuration mappings (shallow-merged, later wins).
  • add(): register more declarations (same normalization rules).
  • set()/name()/description()/usage(): configuration setters (fluent).
  • help()/version(): register the reserved help/h and version/v flags.
  • parse(): tokens in, ParseResult out; never prints, never exits.
  • run(): the calling layer; exits on Terminate(code) and routes faults
    through argot.faults.trigger (printed in shell mode, raised otherwise).
- parser(...): factory shorthand for Parser(...).

Quick start
    from argot import parser

    cli = parser(
        {"name": "greet", "usage": "greet [options] <who>"},
        [
            {"name": "who", "flag": False, "required": True, "help": "who to greet"},
            {"name": ["times", "n"], "type": "number", "default": 1, "help": "repeat count"},
            {"name": ["loud", "l"], "help": "shout"},
        ],
    ).help().version("1.0.0")

    if __name__ == "__main__":
        options = cli.run()
        for _ in range(options["times"]):
            print(("HELLO %s!" if options["loud"] else "hello %s") % options["who"])

Configuration keys
- name, description, usage, version, show_boolean: rendering (see argot.rendering).
- shell: print faults with rich and exit instead of raising (run() only).
- fancy, colorful: rendering chrome for help, version and faults.
"""
import shlex
import sys
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from rich.console import Console

from .engine import ParseEngine
from .faults import ParseException, trigger
from .options import OptionRegistry
from .rendering import gethelp, getversion, render_help, render_version
from .results import Terminate
from .utils import *


def _tokens(prompt, /):
    """
    normalize a prompt into a list of raw tokens.

    - Unset: sys.argv[1:] (the running program's own arguments).
    - str: shell-style splitting via shlex.split.
    - Iterable[str]: used as-is (each item must be a string).
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() tokens must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() tokens must be a string or an iterable of strings")


class Parser:
    """
    A command-line option parser bound to one registry.

    The registry persists across parse() calls; every call gets its own
    token queue and positional cursor, so parsing the same tokens twice
    gives equal results.
    """

    def __init__(self, *params):
        config = {}
        declarations = []
        for param in params:
            if isinstance(param, Mapping):
                config |= param
            elif isinstance(param, Iterable) and not isinstance(param, str):
                declarations.extend(param)
            else:
                raise TypeError("Parser() arguments must be option declaration sequences or config mappings")

        self._config = config
        self._registry = OptionRegistry()
        self._engine = ParseEngine(self._registry)
        self.add(declarations)

    @property
    def config(self):
        return MappingProxyType(self._config)

    @property
    def registry(self):
        return self._registry

    @property
    def specs(self):
        return tuple(self._registry.specs)

    def add(self, declarations=(), /):
        """register more option declarations; returns self."""
        self._registry.register(
            declarations,
            prog=self._config.get("name"),
            shell=self._config.get("shell", False),
            fancy=self._config.get("fancy", False),
            colorful=self._config.get("colorful", True),
        )
        return self

    def set(self, config=Unset, /, **options):
        """shallow-merge configuration; returns self."""
        if config is not Unset and not isinstance(config, Mapping):
            raise TypeError("set() argument must be a mapping")
        self._config |= dict(coalesce(config, {}))
        self._config |= options
        return self

    def name(self, text, /):
        self._config["name"] = text
        return self

    def description(self, text, /):
        self._config["description"] = text
        return self

    def usage(self, text, /):
        self._config["usage"] = text
        return self

    def help(self, action=Unset, /):
        """
        register the help/h flag.

        the default action prints the help screen and returns Terminate(0);
        pass a callable to replace it (it receives the cast flag value).
        """
        return self.add([{
            "name": ["help", "h"],
            "help": "Display help",
            "action": coalesce(action, self.display_help),
        }])

    def version(self, version, action=Unset, /):
        """
        store config['version'] and register the version/v flag.

        the default action prints the version and returns Terminate(0).
        """
        self._config["version"] = version
        return self.add([{
            "name": ["version", "v"],
            "help": "Display version",
            "action": coalesce(action, self.display_version),
        }])

    def gethelp(self):
        return gethelp(self._registry.specs, self._config)

    def getversion(self):
        return getversion(self._config)

    def display_help(self, value=True, /):
        Console().print(render_help(self._registry.specs, self._config))
        return Terminate(0)

    def display_version(self, value=True, /):
        Console().print(render_version(self._config))
        return Terminate(0)

    def parse(self, tokens=Unset, extra=(), /):
        """
        parse tokens against the registered options.

        parameters
        - tokens: Unset | str | Iterable[str]
          defaults to sys.argv[1:]; strings are split shell-style.
        - extra: Iterable of declarations registered (permanently) before
          the first token is read.

        returns
        - ParseResult

        raises
        - any argot.faults.ParseException subclass.
        """
        self.add(extra)
        return self._engine.run(_tokens(tokens))

    def run(self, tokens=Unset, extra=(), /):
        """
        parse like a program entry point.

        - a Terminate(code) signal from an action exits the process with code.
        - faults go through trigger(): printed with rich and exit(1) in shell
          mode, raised otherwise.
        """
        try:
            result = self.parse(tokens, extra)
        except ParseException as fault:
            trigger(
                fault,
                prog=self._config.get("name"),
                shell=self._config.get("shell", False),
                fancy=self._config.get("fancy", False),
                colorful=self._config.get("colorful", True),
            )
        else:
            if isinstance(result.action, Terminate):
                sys.exit(result.action.code)
            return result

    def __repr__(self):
        return "Parser(%s, config=%r)" % (", ".join(spec.key for spec in self._registry.specs), self._config)


def parser(*params):
    """
    Create a Parser.

    Accepts any mix of option declaration sequences and configuration
    mappings; see Parser.
    """
    return Parser(*params)


__all__ = (
    "Parser",
    "parser",
)
