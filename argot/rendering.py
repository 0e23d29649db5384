"""
Argot help and version rendering.

This module is a collaborator of the parser, not part of the parse engine:
it reads option specs and the parser configuration and builds rich
renderables. Printing and exiting are left to the caller.

Help layout
    <name>
    <description>
    Usage: <usage>

      --count=[number] -c [number]  how many times  [number]*
                      --verbose -v  chatty output
                          [path]=.  where to look   [string]

- names column (right-aligned):
  • positional: "[key]", plus "=default" when a default is declared.
  • value-taking flag: "--long=[type]" for multi-letter names, "-s [type]" for letters.
  • boolean flag: "--long" / "-s".
- help column: the option help text.
- type column: "[type]" (boolean flags only with show_boolean), "*" when required.

Palette keys
- program-name, description-section, usage-label, usage-section
- option-name, positional-name, argument-description, type-label, required-mark
- program-version, panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
- When fancy is True, the output is wrapped in a panel.
"""
import io
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .utils import Unset
from .values import ValueType


def _palette(config, defaults, /):
    """build styler/text helpers honoring __styles__ and the colorful switch."""
    colorful = config.get("colorful", True)
    styles = defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        # Normalize to Text; never parse user strings as console markup ("[number]" must survive)
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text(str(fragment), style if colorful else "")

    return styler, text


def _names(spec, styler, text, /):
    if not spec.flag:
        label = text("[%s]" % spec.key, styler("positional-name"))
        if spec.default is not Unset:
            label.append("=%s" % (spec.default,))
        return label

    segments = []
    for name in spec.names:
        if spec.takes_value:
            segment = ("--%s=[%s]" if len(name) > 1 else "-%s [%s]") % (name, spec.type)
        else:
            segment = ("--%s" if len(name) > 1 else "-%s") % name
        segments.append(text(segment, styler("option-name")))
    return Text(" ").join(segments)


def _kind(spec, config, styler, text, /):
    kind = Text()
    if config.get("show_boolean", False) or spec.type is not ValueType.BOOLEAN or not spec.flag:
        kind.append(text("[%s]" % spec.type, styler("type-label")))
    if spec.required:
        kind.append(text("*", styler("required-mark")))
    return kind


def render_help(specs, config, /):
    """
    build the help renderable for the given specs and configuration.

    parameters
    - specs: Iterable[OptionSpec], rendered in the given order.
    - config: Mapping with optional name, description, usage, show_boolean,
      colorful, fancy.
    """
    styler, text = _palette(config, {
        # === Head sections ===
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "description-section": "italic #A3A3A3",  # Neutral gray
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan

        # === Rows ===
        "option-name": "bold #22C55E",  # GREEN for flags
        "positional-name": "bold #FFD600",  # AMBER for positionals
        "argument-description": "#9CA3AF",  # Muted gray
        "type-label": "#36C5F0",
        "required-mark": "bold #EF4444",

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    })

    renders = []

    if name := config.get("name"):
        renders.append(text(name, styler("program-name")))
    if description := config.get("description"):
        renders.append(text(description, styler("description-section")))
    if usage := config.get("usage"):
        renders.append(Text.assemble(text("Usage", styler("usage-label")), ": ", text(usage, styler("usage-section"))))

    # Column alignment is delegated to a borderless grid
    table = Table.grid(padding=(0, 2), pad_edge=True)
    table.add_column(justify="right", no_wrap=True)
    table.add_column()
    table.add_column(no_wrap=True)

    for spec in specs:
        table.add_row(
            _names(spec, styler, text),
            text(spec.help, styler("argument-description")),
            _kind(spec, config, styler, text),
        )

    if table.row_count:
        if renders:
            renders.append(Text(""))
        renders.append(table)

    renderable = Group(*renders)

    if config.get("fancy", False):
        renderable = Panel(
            renderable,
            title=text("[ %s HELP ]" % str(config.get("name") or "").upper(), styler("panel-title")),
            title_align="left",
        )

    return renderable


def render_version(config, /):
    """build the version renderable (config['version'], possibly empty)."""
    styler, text = _palette(config, {
        "program-version": "bold #00E6FF",  # Cyan version
        "panel-title": "bold #FF4D94",
    })

    renderable = text(_version(config), styler("program-version"))

    if config.get("fancy", False):
        renderable = Panel(
            renderable,
            title=text("[ %s VERSION ]" % str(config.get("name") or "").upper(), styler("panel-title")),
            title_align="left",
        )

    return renderable


def _version(config, /):
    version = config.get("version")
    return "" if version is None else str(version)


def _plain(renderable, width, /):
    buffer = io.StringIO()
    console = Console(file=buffer, width=width, color_system=None, highlight=False, emoji=False)
    console.print(renderable)
    return "\n".join(line.rstrip() for line in buffer.getvalue().splitlines())


def gethelp(specs, config, /):
    """
    render the help text as a plain string (no colors, no trailing blanks).
    """
    return _plain(render_help(specs, {**config, "colorful": False}), config.get("width", 80))


def getversion(config, /):
    """
    render the version text as a plain string.
    """
    return _plain(render_version({**config, "colorful": False}), config.get("width", 80))


__all__ = (
    "render_help",
    "render_version",
    "gethelp",
    "getversion",
)
