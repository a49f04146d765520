"""
Help rendering for a declaration pass.

Two layouts, chosen from what the pass registered:
- command help (no commands registered, or one of them is active)
      usage: <prog> <global qualifiers> <command> <qualifiers> [--] <parameters>

          <parameter>         help
          -x, --qualifier     help
- global help (commands registered, none active)
      usage: <prog> <global qualifiers> <command> [<args>]

      Available commands:

          <command>           help

Both are built as rich Text so the same layout can be printed with colors or
returned as plain text. Palette entries may be overridden with a __styles__
mapping in __main__.
"""
import sys
from collections import defaultdict

from rich.text import Text

GUTTER = 8
MARGIN = 4


def _palette(colorful):
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",  # cyan headline
        "program-name": "bold #FF4D94",  # magenta-pink brand pop
        "command": "bold #36C5F0",  # sky-blue commands
        "qualifier": "bold #22C55E",  # green qualifiers
        "parameter": "bold #FFD600",  # amber parameters
        "placeholder": "italic #FFD600",
        "section-label": "bold #FFFFFF",
        "help-text": "#9CA3AF",  # muted gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def wrap(words, width):
    """
    greedily pack words (str or Text) into lines no wider than width.

    a word longer than width is put on a line of its own, unbroken.
    yields rich Text lines.
    """
    line = Text()
    for word in words:
        if isinstance(word, str):
            word = Text(word)
        extent = len(word) if not line else len(line) + 1 + len(word)
        if extent > width:
            if not line:
                yield word
                continue
            yield line
            line = Text()
        if line:
            line.append(" ")
        line.append_text(word)
    if line:
        yield line


def _qualifier_token(qualifier, styler):
    token = Text("|").join(Text(spelling, styler("qualifier")) for spelling in qualifier.spellings())
    if qualifier.optional:
        return Text.assemble("[", token, "]")
    if len(qualifier.names) > 1:
        return Text.assemble("(", token, ")")
    return token


def _parameter_token(parameter, styler):
    token = Text("<%s>" % parameter.name, styler("parameter"))
    if parameter.optional:
        return Text.assemble("[", token, "]")
    return token


def _usage(prog, tokens, width, styler):
    usage = Text.assemble(Text("usage", styler("usage-label")), ": ", Text(prog, styler("program-name")), " ")
    indent = len(usage)
    lines = list(wrap(tokens, width - indent if indent < width else width))
    for index, line in enumerate(lines):
        if index:
            usage.append(" " * indent)
        usage.append_text(line)
        usage.append("\n")
    if not lines:
        usage.rstrip()
        usage.append("\n")
    return usage


def _rows(rows, width, styler):
    section = Text()
    if not rows:
        return section

    indent = max(len(name) for name, _ in rows) + GUTTER
    available = width - indent
    if available < 0:
        available = width

    for name, help in rows:
        row = Text(" " * MARGIN).append_text(name)
        row.append(" " * (indent - len(row)))
        lines = list(wrap((Text(word, styler("help-text")) for word in (help or "").split(" ")), available))
        for index, line in enumerate(lines):
            if index:
                row.append(" " * indent)
            row.append_text(line)
            row.append("\n")
        if not lines:
            row.rstrip()
            row.append("\n")
        section.append_text(row)
    return section


def render(prog, /, width=sys.maxsize, *, commands=(), qualifiers=(), parameters=(), active=None, colorful=False):
    """
    render help for a declaration pass as rich Text.

    parameters
    - prog: program name shown after 'usage:'.
    - width: maximum line width (help wraps at word boundaries).
    - commands / qualifiers / parameters: registered records, in declaration order.
    - active: the active RegisteredCommand, or None.
    - colorful: apply palette styles (plain Text otherwise).
    """
    styler = _palette(colorful)

    globals = [qualifier for qualifier in qualifiers if qualifier.command is None]

    if active is None and commands:
        tokens = [_qualifier_token(qualifier, styler) for qualifier in globals]
        tokens += [Text("<command>", styler("placeholder")), Text("[<args>]", styler("placeholder"))]

        text = _usage(prog, tokens, width, styler)
        text.append("\n")
        text.append_text(Text("Available commands:", styler("section-label")))
        text.append("\n\n")
        text.append_text(_rows([(Text(command.name, styler("command")), command.help) for command in commands], width, styler))
        return text

    own = [qualifier for qualifier in qualifiers if active is not None and qualifier.command is active]
    arguments = [parameter for parameter in parameters if parameter.command is active]

    tokens = [_qualifier_token(qualifier, styler) for qualifier in globals]
    if active is not None:
        tokens.append(Text(active.name, styler("command")))
    tokens += [_qualifier_token(qualifier, styler) for qualifier in own]
    if arguments:
        tokens.append(Text("[--]"))
        tokens += [_parameter_token(parameter, styler) for parameter in arguments]

    text = _usage(prog, tokens, width, styler)

    rows = [(Text("<%s>" % parameter.name, styler("parameter")), parameter.help) for parameter in arguments]
    rows += [
        (Text(", ").join(Text(spelling, styler("qualifier")) for spelling in qualifier.spellings()), qualifier.help)
        for qualifier in globals + own
    ]
    if rows:
        text.append("\n")
        text.append_text(_rows(rows, width, styler))
    return text


__all__ = (
    "wrap",
    "render",
)
