"""
Terminal styling and the help/version screens.

What this module provides
- format(text, *, color, modifier): the styling collaborator. Turns a string into a
  rich Text with a color and a list of modifiers ("bold", "underline", "italic",
  ... and the special "uppercase" which transforms the string itself).
- render_help(...): pure function building the help screen of one command.
- render_version(...): pure function building the "<program> — <version>" line.

Both renderers only build rich renderables; printing is the caller's concern
(see commands.Command._helper/_versioner).

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- Define __prog__ in __main__ to override the program name shown in the screens.
- When colorful is False, styling is suppressed (uppercase still applies).

Palette keys
- section-title, program-name, command-name, usage-section
- label, description, program-version, panel-title
- fault-program, fault-code, fault-title, fault-message, hint-arrow, hint
"""
from collections import defaultdict

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .default import DEFAULT_COMMAND

PALETTE = {
    # === Sections ===
    "section-title": "bold underline yellow",
    "usage-section": "",
    "description-section": "",

    # === Names ===
    "program-name": "green",
    "command-name": "green",
    "label": "green",
    "description": "",

    # === Version ===
    "program-version": "bold cyan",

    # === Fancy panel ===
    "panel-title": "bold yellow",

    # === Fault reports ===
    "fault-program": "bold #E6E6F0",
    "fault-code": "bold #00E5FF",
    "fault-title": "bold #FF4DA6",
    "fault-message": "#C8C8D0",
    "hint-arrow": "#9CE19C dim",
    "hint": "italic #9CE19C",
}


def palette(colorful):
    styles = defaultdict(str, PALETTE | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def program_name(program):
    return str(getattr(__import__("__main__"), "__prog__", None) or program or "termost")


def format(text, *, color=None, modifier=(), colorful=True):
    """
    Style a fragment of text.

    - color: any rich color ("yellow", "#FF4D94", ...), or None.
    - modifier: one modifier or an iterable of them; "uppercase" upper-cases the
      text, anything else is a rich style word added to the style.
    - colorful=False drops every style (the uppercase transform is kept).
    """
    modifiers = [modifier] if isinstance(modifier, str) else list(modifier or ())
    text = str(text)
    if "uppercase" in modifiers:
        text = text.upper()
        modifiers.remove("uppercase")
    if not colorful:
        return Text(text)
    return Text(text, " ".join(filter(None, (*modifiers, color))))


def _section(title, styler):
    return Text.assemble("\n", Text(title.upper() + ":", styler("section-title")))


def render_help(name, description, options, commands, /, *, program=None, colorful=True, fancy=False):
    """
    Build the help screen of a command.

    Parameters
    - name: the command name (DEFAULT_COMMAND for the default command).
    - description: the command description (or None).
    - options: mapping option label ("-h, --help") -> description, in declaration order.
    - commands: mapping command name -> description for the whole program.
    - program: the program name shown in the usage line.

    Layout
    - USAGE: "<program>[ <name>] [<command> ][[...options]]"; the default command
      never prints a name token.
    - DESCRIPTION: shown when the command has a description.
    - COMMANDS: only on the default command, when other commands are registered.
    - OPTIONS: every declared option.
    Labels of the last two sections share one column, padded to the longest label.
    """
    styler = palette(colorful)
    others = {command: text for command, text in commands.items() if command is not DEFAULT_COMMAND}
    listing = name is DEFAULT_COMMAND and len(others) > 0

    usage = Text()
    usage.append(format(program_name(program), color=styler("program-name"), colorful=colorful))
    if name is not DEFAULT_COMMAND:
        usage.append(" ").append(format(name, color=styler("command-name"), colorful=colorful))
    usage.append(" ")
    if listing:
        usage.append("<command> ", styler("usage-section"))
    if options:
        usage.append("[...options]", styler("usage-section"))
    usage.rstrip()

    renders = [_section("usage", styler), usage]
    if description:
        renders.extend((_section("description", styler), Text(description, styler("description-section"))))

    padding = max(map(len, (*(others if listing else ()), *options)), default=0)

    def rows(entries):
        for label, text in entries:
            row = Text("  ")
            row.append(format(str(label).ljust(padding + 1), color=styler("label"), colorful=colorful))
            row.append(" ")
            row.append(Text(text or "", styler("description")))
            yield row

    if listing:
        renders.append(_section("commands", styler))
        renders.extend(rows(others.items()))
    if options:
        renders.append(_section("options", styler))
        renders.extend(rows(options.items()))

    renderable = Group(*renders)
    if fancy:
        title = program_name(program) if name is DEFAULT_COMMAND else f"{program_name(program)} {name}"
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{title} HELP".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )
    return renderable


def render_version(program, version, /, *, colorful=True, fancy=False):
    """
    Build the version line: "<program> — <version>" ("unknown" when unversioned).
    """
    styler = palette(colorful)
    renderable = Text(" — ").join((
        format(program_name(program), color=styler("program-name"), modifier="bold", colorful=colorful),
        format(version or "unknown", color=styler("program-version"), colorful=colorful),
    ))
    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{program_name(program)} VERSION".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )
    return renderable


__all__ = (
    "render_help",
    "render_version",
)
