r"""
cmdsyntax syntax registry: declare, match, validate, explain.

What this module provides
- Syntax: one parse session. It classifies its input once, then every
  declaration call (command / qualifier / parameter) both registers the
  declaration and eagerly matches it against the arguments still unconsumed,
  returning the bound value.
- parse(prompt, callback): the entry point for programs. It is the only place
  where faults become output on the console and a process exit status.

Quick start
    from cmdsyntax import parse, Unset

    def declare(syntax):
        quiet = syntax.qualifier("q|quiet", bool, help="do not print names of files removed")
        if syntax.command("commit", help="Record changes to the repository"):
            message = syntax.qualifier("m|message", help="commit message")
            path = syntax.parameter("pathspec", help="Path to a file")
            return "commit", quiet, message, path
        if syntax.command("compile", help="Compile the sources"):
            references = syntax.qualifier("r|reference", multiple=True, help="Reference metadata")
            sources = syntax.parameter("file", multiple=True, required=True, help="Source files")
            return "compile", quiet, references, sources
        return None, quiet

    if __name__ == "__main__":
        print(parse(Unset, declare))

Declaration rules
- qualifiers of a command come before its parameters.
- global parameters (declared before any command) forbid later commands.
- qualifier aliases are unique per session; parameter names are unique per command.
- declarations of a command that is not the active one are registered (for
  help and validation) but return their default untouched.

Matching rules
- qualifiers scan the whole input, case-insensitively, and take their value from
  an inline 'name:value', a following ':'/'=' separator and word, or, unless the
  qualifier is boolean, a directly following bare word.
- parameters consume the unmatched bare words left to right.
- a command is recognised only as the first input argument; global qualifiers follow it.
"""
import os.path
import sys
from collections.abc import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from . import helper
from .arguments import classify
from .converters import resolve
from .faults import *
from .registered import RegisteredCommand, RegisteredQualifier, RegisteredParameter
from .utils import Unset, coalesce, mirror


class Syntax:
    """
    A single declaration pass over one command line.

    Parameters
    - prompt: str (split with the shell-like lexer) or Iterable[str] (already tokenized).

    Raises (at construction)
    - UnmatchedQuoteError, ResponseFileNotFoundError.
    """
    arguments = mirror("arguments")
    commands = mirror("commands")
    qualifiers = mirror("qualifiers")
    parameters = mirror("parameters")

    def __init__(self, prompt, /):
        if not isinstance(prompt, str | Iterable):
            raise TypeError("Syntax() argument must be a string or an iterable of strings")

        self._arguments = classify(prompt)
        self._commands = []
        self._qualifiers = []
        self._parameters = []

        self._aliases = set()

        self._defined = None  # command currently being declared
        self._parsed = None  # command recognised from the input

    @property
    def active(self):
        """name of the active command, or None."""
        return self._parsed.name if self._parsed is not None else None

    def _leading(self):
        # commands are only recognised in the first position of the input
        return self._arguments[0] if self._arguments else None

    def command(self, name, /, help=""):
        """
        declare a command; return True when it is the one the input selects.
        """
        if not isinstance(name, str) or not name:
            raise DeclarationConflictError(
                "command name must be a non-empty string",
                code=FaultCode.DECLARATION_CONFLICT,
                title="declaration conflict",
            )
        if any(parameter.command is None for parameter in self._parameters):
            raise DeclarationConflictError(
                "cannot define commands if global parameters exist",
                code=FaultCode.DECLARATION_CONFLICT,
                title="declaration conflict",
            )
        if any(command.name == name for command in self._commands):
            raise DeclarationConflictError(
                "command '%s' is already registered" % name,
                code=FaultCode.DECLARATION_CONFLICT,
                title="declaration conflict",
            )

        self._defined = RegisteredCommand(name, help)
        self._commands.append(self._defined)

        if self._parsed is not None:
            return False

        argument = self._leading()
        if argument is None or argument.qualifier or argument.separator or argument.name != name:
            return False

        argument.match()
        self._parsed = self._defined
        return True

    def _register_qualifier(self, names, required, help, flag):
        if any(parameter.command is self._defined for parameter in self._parameters):
            raise DeclarationConflictError(
                "qualifiers must be defined before any parameters",
                code=FaultCode.DECLARATION_CONFLICT,
                title="declaration conflict",
            )
        if not isinstance(names, str):
            raise TypeError("qualifier names must be a string")

        aliases = [alias.strip() for alias in names.split("|")]
        for alias in aliases:
            if not alias:
                raise DeclarationConflictError(
                    "qualifier names must be non-empty",
                    code=FaultCode.DECLARATION_CONFLICT,
                    title="declaration conflict",
                )
            if alias.casefold() in self._aliases:
                raise DeclarationConflictError(
                    "qualifier '%s' is already registered" % alias,
                    code=FaultCode.DECLARATION_CONFLICT,
                    title="declaration conflict",
                )
            self._aliases.add(alias.casefold())

        qualifier = RegisteredQualifier(self._defined, aliases, required, help, flag=flag)
        self._qualifiers.append(qualifier)
        return qualifier

    def _register_parameter(self, name, required, help):
        if not isinstance(name, str) or not name:
            raise DeclarationConflictError(
                "parameter name must be a non-empty string",
                code=FaultCode.DECLARATION_CONFLICT,
                title="declaration conflict",
            )
        if any(parameter.command is self._defined and parameter.name == name for parameter in self._parameters):
            raise DeclarationConflictError(
                "parameter '%s' is already registered" % name,
                code=FaultCode.DECLARATION_CONFLICT,
                title="declaration conflict",
            )

        parameter = RegisteredParameter(self._defined, name, required, help)
        self._parameters.append(parameter)
        return parameter

    def _take(self, index, flag):
        """
        find the raw value for the qualifier argument at index.

        returns None when the qualifier carries no value.
        """
        argument = self._arguments[index]
        if argument.hasvalue:
            return argument.value

        following = self._arguments[index + 1:index + 3]
        if not following or following[0].matched or following[0].qualifier:
            return None

        if not following[0].separator:
            # booleans only take values that are attached or separator-delimited
            if flag:
                return None
            following[0].match()
            return following[0].name

        following[0].match()
        if len(following) < 2 or following[1].matched or following[1].qualifier:
            return None
        following[1].match()
        return following[1].name

    @staticmethod
    def _convert(converter, text, display):
        try:
            return converter(text)
        except (ValueError, TypeError) as exception:
            raise ValueConversionError(
                "cannot parse value for %s: %s" % (display, exception),
                code=FaultCode.VALUE_CONVERSION,
                title="invalid value",
                target=display,
                value=text,
                inner=str(exception),
            ) from exception

    def qualifier(self, names, /, type=str, *, required=False, multiple=False, default=Unset, help=""):
        """
        declare a qualifier and return its value.

        parameters
        - names: '|'-separated aliases, e.g. "o|out". one-letter aliases read as '-o',
          longer ones as '--out' in help; input may use any of '-', '--' or '/'.
        - type: converter applied to every raw value. bool declares a flag, which
          is True when present and never consumes a following bare word.
        - required: validate() fails when the qualifier is absent.
        - multiple: collect every occurrence into a list instead of allowing one.
        - default: value returned when the qualifier is absent (False for flags,
          [] for multiple, None otherwise).

        raises
        - DeclarationConflictError, DuplicatedQualifierError, ValueConversionError.
        """
        flag = type is bool
        converter = resolve(type)
        default = coalesce(default, [] if multiple else False if flag else None)

        qualifier = self._register_qualifier(names, required, help, flag)

        if self._parsed is not self._defined:
            return default

        aliases = {name.casefold() for name in qualifier.names}
        values = []
        occurrences = []

        for index, argument in enumerate(self._arguments):
            if not argument.qualifier or argument.matched or argument.name.casefold() not in aliases:
                continue

            argument.match()
            qualifier.match()
            occurrences.append(argument)

            text = self._take(index, flag)
            if text is not None:
                values.append(self._convert(converter, text, "--" + qualifier.name))
            elif flag:
                values.append(True)

        if not multiple and len(values) > 1:
            raise DuplicatedQualifierError(
                "qualifier %s%s is specified multiple times" % (occurrences[-1].modifier, occurrences[-1].name),
                code=FaultCode.DUPLICATED_QUALIFIER,
                title="duplicated qualifier",
                name=qualifier.name,
            )

        if not values:
            return default
        return values if multiple else values[0]

    def parameter(self, name, /, type=str, *, required=False, multiple=False, default=Unset, help=""):
        """
        declare a positional parameter and return its value.

        a scalar parameter consumes the next unmatched bare word; a multiple one
        consumes all that remain, in order.
        """
        converter = resolve(type)
        default = coalesce(default, [] if multiple else None)

        parameter = self._register_parameter(name, required, help)

        if self._parsed is not self._defined:
            return default

        values = []
        for argument in self._arguments:
            if argument.matched or argument.qualifier or argument.separator:
                continue

            argument.match()
            parameter.match()
            values.append(self._convert(converter, argument.name, "<%s>" % name))

            if not multiple:
                break

        if not values:
            return default
        return values if multiple else values[0]

    def validate(self):
        """
        check the pass as a whole; the first failure is raised.

        order
        1. commands registered but none active → UnknownCommandError / MissingCommandError.
        2. unconsumed input → InvalidQualifierError / ExtraParameterError.
        3. required qualifiers of the active command (and globals) → MissingQualifierError.
        4. required parameters of the active command → MissingParameterError.
        """
        if self._parsed is None and self._commands:
            argument = self._leading()
            if argument is not None and not argument.qualifier and not argument.separator:
                raise UnknownCommandError(
                    "unknown command '%s'" % argument.name,
                    code=FaultCode.UNKNOWN_COMMAND,
                    title="unknown command",
                    name=argument.name,
                )
            raise MissingCommandError(
                "missing command",
                code=FaultCode.MISSING_COMMAND,
                title="missing command",
            )

        for argument in self._arguments:
            if argument.matched:
                continue
            if argument.qualifier:
                raise InvalidQualifierError(
                    "invalid qualifier %s%s" % (argument.modifier, argument.name),
                    code=FaultCode.INVALID_QUALIFIER,
                    title="invalid qualifier",
                    modifier=argument.modifier,
                    name=argument.name,
                )
            raise ExtraParameterError(
                "extra parameter '%s'" % argument.name,
                code=FaultCode.EXTRA_PARAMETER,
                title="extra parameter",
                name=argument.name,
            )

        for qualifier in self._qualifiers:
            if qualifier.command not in (None, self._parsed):
                continue
            if qualifier.required and qualifier.missing:
                raise MissingQualifierError(
                    "required qualifier '%s' not specified" % qualifier.name,
                    code=FaultCode.MISSING_QUALIFIER,
                    title="missing qualifier",
                    name=qualifier.name,
                )

        for parameter in self._parameters:
            if parameter.command is not self._parsed:
                continue
            if parameter.required and parameter.missing:
                raise MissingParameterError(
                    "required parameter '%s' not specified" % parameter.name,
                    code=FaultCode.MISSING_PARAMETER,
                    title="missing parameter",
                    name=parameter.name,
                )

    def render(self, prog, /, width=sys.maxsize, *, colorful=True):
        """help for this pass as rich Text (see cmdsyntax.helper)."""
        return helper.render(
            prog,
            width,
            commands=self._commands,
            qualifiers=self._qualifiers,
            parameters=self._parameters,
            active=self._parsed,
            colorful=colorful,
        )

    def gethelp(self, prog, /, width=sys.maxsize):
        """help for this pass as plain text."""
        return self.render(prog, width, colorful=False).plain


def _program():
    main = __import__("__main__")
    if prog := getattr(main, "__prog__", None):
        return prog
    return os.path.splitext(os.path.basename(sys.argv[0]))[0].lower()


def _showhelp(syntax, prog, width, *, stderr, colorful, fancy):
    console = Console(stderr=stderr)
    renderable = syntax.render(prog, coalesce(width, console.width - 2 - 4 * fancy), colorful=colorful)
    if fancy:
        renderable.rstrip()
        renderable = Panel(
            renderable,
            title=Text("[ %s HELP ]" % prog.upper(), style="bold #FF4D94" if colorful else ""),
            title_align="left",
        )
        console.print(renderable)
    else:
        console.print(renderable, end="")


def parse(prompt, callback, /, *, prog=Unset, width=Unset, colorful=True, fancy=False):
    """
    run a declaration pass for a program and return what the callback returns.

    parameters
    - prompt:
      • Unset: read tokens from sys.argv[1:].
      • str: shell-like string, split with cmdsyntax.lexer.split.
      • Iterable[str]: pre-tokenized sequence.
    - callback: called once with the Syntax; declares everything and may return
      the bound values.
    - prog: program name for help and error panels (default: __prog__ in
      __main__, else the lower-cased stem of sys.argv[0]).
    - width: help width (default: console width - 2).
    - colorful / fancy: rich styling and panel chrome.

    behavior
    - '-?', '--help' (or '/?', '/help') is always declared as a global flag.
    - a syntax fault while reading the input or declaring: print it, exit 1.
    - help requested: print help on stdout, exit 0.
    - validation fault: print it and the help on stderr, exit 1.
    """
    prog = coalesce(prog, None) or _program()
    options = {"shell": True, "prog": prog, "colorful": colorful, "fancy": fancy}

    try:
        syntax = Syntax(sys.argv[1:] if prompt is Unset else prompt)
        help = syntax.qualifier("?|help", bool, help="Shows this help page")
        result = callback(syntax)
    except CommandSyntaxError as fault:
        trigger(fault, **options)
        return

    if help:
        _showhelp(syntax, prog, width, stderr=False, colorful=colorful, fancy=fancy)
        sys.exit(0)

    try:
        syntax.validate()
    except CommandSyntaxError as fault:
        trigger(fault, **options, deferred=True)
        _showhelp(syntax, prog, width, stderr=True, colorful=colorful, fancy=fancy)
        sys.exit(1)

    return result


__all__ = (
    "Syntax",
    "parse",
)
