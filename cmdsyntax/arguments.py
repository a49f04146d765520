r"""
cmdsyntax argument classification.

Overview
- Argument: one classified input token, split into modifier, name and value,
  plus the matched flag the syntax registry flips when a declaration consumes it.
- classify(tokens): the classifier pass over a token list (or a raw string).

Pipeline (in order)
1. response files
   • a token '@path' is replaced by the lines of that file, each trimmed, blank
     lines dropped. expansion is one level deep: a line starting with '@' inside a
     response file is kept as a literal token.
   • a missing file raises ResponseFileNotFoundError.
2. '--' terminator
   • recognised once, never emitted. every later token is a bare value.
3. modifiers and key/value split
   • prefixes are tried in the order '--', '-', '/'.
   • the remainder is split on the first ':' (or, failing that, the first '=').
       {"--out", "out.exe"} ==> Argument("--", "out"), Argument(None, "out.exe")
       {"--out:out.exe"}    ==> Argument("--", "out", "out.exe")
4. single-letter expansion
   • '-xdf' becomes '-x -d -f' so later phases never see combined letters.
   • '/xdf' and '--xdf' are left alone.
"""
import os.path

from .faults import FaultCode, ResponseFileNotFoundError
from .lexer import split
from .utils import RecordType

MODIFIERS = ("--", "-", "/")
SEPARATORS = (":", "=")


class Argument(metaclass=RecordType):
    """
    A classified input token.

    Fields
    - modifier: "-", "--", "/" or None for bare words.
    - name: the qualifier name (without modifier) or the bare word itself.
    - value: inline value of 'name:value' / 'name=value', else None.
    - matched: False until a declaration consumes the argument; never reset.
    """
    __introspectable__ = ("modifier", "name", "value", "matched")

    def __init__(self, modifier, name, value=None):
        self._modifier = modifier
        self._name = name
        self._value = value
        self._matched = False

    @property
    def qualifier(self):
        return bool(self._modifier)

    @property
    def separator(self):
        return self._name in SEPARATORS

    @property
    def hasvalue(self):
        return bool(self._value)

    def match(self):
        self._matched = True

    def __str__(self):
        if self.hasvalue:
            return "%s%s:%s" % (self._modifier or "", self._name, self._value)
        return "%s%s" % (self._modifier or "", self._name)


def _expand(tokens):
    # one level only: lines read from a response file are never expanded again
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("classify() argument must be a string or an iterable of strings")
        if not token.startswith("@"):
            yield token
            continue

        path = token[1:]
        if not os.path.isfile(path):
            raise ResponseFileNotFoundError(
                "Response file '%s' doesn't exist." % path,
                code=FaultCode.RESPONSE_FILE_NOT_FOUND,
                title="response file not found",
                path=path,
            )

        with open(path, encoding="utf-8") as file:
            for line in file:
                if line := line.strip():
                    yield line


def _classify(token):
    for modifier in MODIFIERS:
        if token.startswith(modifier):
            remainder = token[len(modifier):]
            break
    else:
        return Argument(None, token)

    for separator in SEPARATORS:
        name, found, value = remainder.partition(separator)
        if found:
            return Argument(modifier, name, value)

    return Argument(modifier, remainder)


def classify(tokens, /):
    """
    classify a raw command line (str) or a token iterable into a list of Argument.

    raises
    - UnmatchedQuoteError when a string with an unterminated quote is given.
    - ResponseFileNotFoundError when an '@path' token points nowhere.
    """
    if isinstance(tokens, str):
        tokens = split(tokens)

    arguments = []
    terminated = False

    for token in _expand(tokens):
        if not terminated and token == "--":
            terminated = True
            continue
        arguments.append(Argument(None, token) if terminated else _classify(token))

    # right to left so insertions never shift the indexes still to be visited
    for index in reversed(range(len(arguments))):
        argument = arguments[index]
        if argument.modifier == "-" and len(argument.name) > 1:
            arguments[index:index + 1] = [Argument("-", letter) for letter in argument.name]

    return arguments


__all__ = (
    "Argument",
    "classify",
)
