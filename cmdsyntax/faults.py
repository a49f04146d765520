"""
cmdsyntax faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every error kind the
  lexer, the classifier, the registry and the validator can surface. Codes are
  grouped by domain to keep searches in logs predictable.
- CommandException: base type that carries message + options and knows how to
  render itself through rich.
- CommandSyntaxError: user-input errors (bad quoting, unknown qualifiers, ...).
  These are the only faults parse() turns into output and an exit status.
- DeclarationConflictError: programmer errors in the declaration pass
  (duplicate alias, parameter before qualifier, ...). Never rendered, always raised.
- trigger(): central entry point to surface a fault (respecting shell/deferred/fancy/colorful).

Integration
- Library code raises faults directly; they propagate to the caller.
- parse() is the single boundary that triggers them in shell mode, where they are
  printed on stderr and the process exits.
"""
import copy
import sys
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
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - lexical (1110x)
      • UNMATCHED_QUOTE, RESPONSE_FILE_NOT_FOUND
    - routing (1111x)
      • UNKNOWN_COMMAND, MISSING_COMMAND
    - qualifiers (1112x)
      • INVALID_QUALIFIER, DUPLICATED_QUALIFIER, MISSING_QUALIFIER
    - parameters (1113x)
      • EXTRA_PARAMETER, MISSING_PARAMETER
    - values (1114x)
      • VALUE_CONVERSION
    - declarations (1115x)
      • DECLARATION_CONFLICT

    normalize() lets the host remap codes to custom labels while the numbers stay stable.
    """
    # --- lexical errors ---
    UNMATCHED_QUOTE             = 11101
    RESPONSE_FILE_NOT_FOUND     = 11102

    # --- routing errors ---
    UNKNOWN_COMMAND             = 11111
    MISSING_COMMAND             = 11112

    # --- qualifier errors ---
    INVALID_QUALIFIER           = 11121
    DUPLICATED_QUALIFIER        = 11122
    MISSING_QUALIFIER           = 11123

    # --- parameter errors ---
    EXTRA_PARAMETER             = 11131
    MISSING_PARAMETER           = 11132

    # --- value errors ---
    VALUE_CONVERSION            = 11141

    # --- declaration errors ---
    DECLARATION_CONFLICT        = 11151

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-label": "bold #FF4DA6",
            "error-message": "#C8C8D0",  # soft light gray message
        } | getattr(main, "__styles__", {}))

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

        message = text(str(self), styler("error-message"))

        if fancy:
            prog = text(self.options.get("prog") or getattr(main, "__prog__", "cmdsyntax"), styler("prog-name"))
            header = Text.assemble("[ ", prog, " — ")
            if isinstance(self.code, FaultCode):
                header.append_text(text(self.code.normalize(), styler("code")))
                header.append(" | ")
            header.append_text(text(self.options.get("title", "error").title(), styler("error-title")))
            header.append(" ]")
            return Panel(Group(message), title=header, title_align="left")

        return Text.assemble(text("error", styler("error-label")), ": ", message)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class CommandSyntaxError(CommandException): ...
class UnmatchedQuoteError(CommandSyntaxError): ...
class ResponseFileNotFoundError(CommandSyntaxError): ...
class UnknownCommandError(CommandSyntaxError): ...
class MissingCommandError(CommandSyntaxError): ...
class InvalidQualifierError(CommandSyntaxError): ...
class DuplicatedQualifierError(CommandSyntaxError): ...
class ExtraParameterError(CommandSyntaxError): ...
class MissingQualifierError(CommandSyntaxError): ...
class MissingParameterError(CommandSyntaxError): ...
class ValueConversionError(CommandSyntaxError): ...


class DeclarationConflictError(CommandException, ValueError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode the fault is rendered via the rich console; otherwise it is raised.

    typical options
    - shell, fancy, colorful, deferred, prog, title, code.
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
    "CommandException",
    "CommandSyntaxError",
    "UnmatchedQuoteError",
    "ResponseFileNotFoundError",
    "UnknownCommandError",
    "MissingCommandError",
    "InvalidQualifierError",
    "DuplicatedQualifierError",
    "ExtraParameterError",
    "MissingQualifierError",
    "MissingParameterError",
    "ValueConversionError",
    "DeclarationConflictError",
    "FaultCode",
    "trigger",
)
