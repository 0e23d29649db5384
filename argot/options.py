r"""
Argot option specifications and the option registry.

Overview
- OptionSpec: one declared option, validated on construction and immutable
  afterwards (backing fields are locked by StorageGuard once built).
  • names: ordered aliases; the first one is the canonical key.
  • flag: matched by '-'/'--' tokens when True, by bare-token order otherwise.
  • type: ValueType (boolean for flags, string for positionals unless declared).
  • takes_value: derived, a flag whose type is string or number.
  • required / default / help / action.

- OptionRegistry: normalizes raw declarations into OptionSpec records and
  maintains the lookup tables the parse engine reads:
  • flags: alias → spec (last registration of an alias wins).
  • positionals: non-flag specs in registration order.
  • required: canonical keys that must be present in a result.
  • defaults: key → default value.
  • specs: every registered spec, in order (help rendering).

Declarations
- Either an OptionSpec or a mapping with the keys
  name, flag, type, required, default, help, action.

Quick example:
    >>> registry = OptionRegistry()
    >>> registry.register([
    ...     {"name": ["verbose", "v"]},
    ...     {"name": ["count", "c"], "type": "number", "default": 1},
    ...     {"name": "path", "flag": False, "required": True},
    ... ])
    >>> sorted(registry.flags)
    ['c', 'count', 'v', 'verbose']
"""
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .faults import DuplicateAliasWarning, FaultCode, trigger
from .utils import *
from .values import ValueType

OVERFLOW = "other"
"""result key reserved for bare tokens that no positional option consumed."""

_NAME = re.compile(r"[^\s=\-][^\s=]*")


class OptionSpec(StorageGuard):
    """
    Validated, immutable option declaration.

    Properties
    - The names listed in __fields__ are exposed as read-only attributes
      (sequences are handed back as tuples).
    - key and takes_value are derived from the stored fields.
    - copy.replace(spec, **changes) builds a new, re-validated spec.
    """

    __fields__ = (
        "names",
        "flag",
        "type",
        "required",
        "default",
        "help",
        "action",
    )

    def __new__(
            cls,
            *names,
            flag=True,
            type=Unset,
            required=False,
            default=Unset,
            help="",
            action=Unset,
    ):
        """
        Construct an OptionSpec.

        Parameters
        - names: str
          Aliases without leading dashes ("verbose", "v"). At least one; no
          whitespace or '='; no duplicates within one spec.
        - flag: bool
          False declares a positional option.
        - type: Unset | str | ValueType | bool | str | int | float
          Declared payload kind; defaults to boolean for flags, string otherwise.
        - required: bool
        - default: Unset | bool | str | int | float
          Must match the declared type.
        - help: str
          Short description for help output.
        - action: Unset | Callable[[value], Any]
          Called with the cast value each time a flag token (or a bare dash
          standing in for a positional default) matches the option.

        Raises
        - TypeError: bad types for names, type, default, help or action.
        - ValueError: empty/malformed/duplicate names, unknown type names.
        """
        if not names:
            raise TypeError("option must specify at least one name")

        sanitized = []
        for name in names:
            if not isinstance(name, str):
                raise TypeError("option names must be strings")
            elif not name:
                raise ValueError("option names cannot be empty-strings")
            elif not _NAME.fullmatch(name):
                raise ValueError(f"option name {name!r} cannot start with '-' or contain whitespace or '='")
            elif name in sanitized:
                raise ValueError(f"option names cannot contain duplicates ({name!r})")
            sanitized.append(name)

        flag = bool(flag)
        type = ValueType.resolve(coalesce(type, ValueType.BOOLEAN if flag else ValueType.STRING))

        if default is not Unset and not type.accepts(default):
            raise TypeError(f"option {sanitized[0]!r} default must be a {type} value, not {default!r}")
        if not isinstance(help, str):
            raise TypeError(f"option {sanitized[0]!r} help must be a string")
        if action is not Unset and not callable(action):
            raise TypeError(f"option {sanitized[0]!r} action must be callable")

        with super().__new__(cls) as self:
            setattr(self, "-names", sanitized)
            setattr(self, "-flag", flag)
            setattr(self, "-type", type)
            setattr(self, "-required", bool(required))
            setattr(self, "-default", default)
            setattr(self, "-help", help.strip())
            setattr(self, "-action", action)
        return self

    names = view("names")
    flag = view("flag")
    type = view("type")
    required = view("required")
    default = view("default")
    help = view("help")
    action = view("action")

    @property
    def key(self):
        """canonical key: the first declared name."""
        return self.names[0]

    @property
    def takes_value(self):
        return self.flag and self.type in (ValueType.STRING, ValueType.NUMBER)

    @classmethod
    def from_declaration(cls, declaration, /):
        """
        build a spec from a raw declaration mapping.

        'name' may be a single string or an iterable of strings; unknown keys
        are rejected so typos do not silently vanish.
        """
        if isinstance(declaration, cls):
            return declaration
        if not isinstance(declaration, Mapping):
            raise TypeError("option declaration must be a mapping or an OptionSpec")

        if unknown := declaration.keys() - {"name", *cls.__fields__}:
            raise ValueError("unknown option declaration keys: %s" % ", ".join(sorted(map(str, unknown))))

        declaration = dict(declaration)
        if "name" in declaration and "names" in declaration:
            raise TypeError("option declaration cannot give both 'name' and 'names'")
        names = declaration.pop("name") if "name" in declaration else declaration.pop("names", ())
        if isinstance(names, str):
            names = (names,)
        elif not isinstance(names, Iterable):
            raise TypeError("option declaration 'name' must be a string or an iterable of strings")
        return cls(*names, **declaration)

    def __replace__(self, /, **changes):
        fields = {name: getattr(self, name) for name in type(self).__fields__} | changes
        return type(self)(*fields.pop("names"), **fields)

    def __repr__(self):
        fields = ", ".join("%s=%r" % (name, getattr(self, name)) for name in type(self).__fields__)
        return f"option-spec({fields})"

    def __rich_repr__(self):
        for name in type(self).__fields__:
            yield name, getattr(self, name)


class OptionRegistry:
    """
    Lookup tables for one parser instance.

    The registry only grows: register() may be called any number of times,
    and the engine reads it without mutating it (each parse copies the
    positional order into its own cursor).
    """

    def __init__(self):
        self._specs = []
        self._flags = {}
        self._positionals = []
        self._required = {}
        self._defaults = {}

    specs = mirror("specs")
    positionals = mirror("positionals")

    @property
    def flags(self):
        return MappingProxyType(self._flags)

    @property
    def required(self):
        return tuple(self._required)

    @property
    def defaults(self):
        return MappingProxyType(self._defaults)

    def register(self, declarations, /, **options):
        """
        normalize and register a batch of declarations.

        parameters
        - declarations: Iterable[Mapping | OptionSpec]
        - options: forwarded to trigger() for warnings (prog/shell/fancy/colorful).

        returns
        - list[OptionSpec]: the specs created for this batch, in order.

        behavior
        - required keys and defaults are recorded per canonical key.
        - every flag alias is inserted into the flag table; rebinding an alias
          owned by another spec emits DuplicateAliasWarning and the new spec wins.
        - non-flags are appended to the positional order.
        """
        if isinstance(declarations, str | Mapping | OptionSpec) or not isinstance(declarations, Iterable):
            raise TypeError("register() argument must be an iterable of option declarations")

        specs = list(map(OptionSpec.from_declaration, declarations))

        for spec in specs:
            if spec.key == OVERFLOW:
                raise ValueError(f"option key {OVERFLOW!r} is reserved for unparsed bare tokens")

        for spec in specs:
            self._specs.append(spec)

            if spec.required:
                self._required[spec.key] = None
            if spec.default is not Unset:
                self._defaults[spec.key] = spec.default

            if not spec.flag:
                self._positionals.append(spec)
                continue

            for name in spec.names:
                if (previous := self._flags.get(name)) is not None and previous is not spec:
                    trigger(DuplicateAliasWarning(
                        "alias %r of option %r now belongs to option %r" % (name, previous.key, spec.key),
                        title="duplicate alias",
                        code=FaultCode.DUPLICATE_ALIAS,
                        hint="give each option its own aliases; the latest declaration wins",
                        name=name,
                        previous=previous,
                        spec=spec,
                    ), **options)
                self._flags[name] = spec

        return specs

    def __len__(self):
        return len(self._specs)


__all__ = (
    "OVERFLOW",
    "OptionSpec",
    "OptionRegistry",
)
