"""
Records of what a declaration pass registered.

A Syntax instance keeps one RegisteredCommand per command(), one
RegisteredQualifier per qualifier() and one RegisteredParameter per
parameter(). They back validation and help rendering, and they live exactly
as long as the Syntax that created them.
"""
from .utils import RecordType


class RegisteredCommand(metaclass=RecordType):
    __introspectable__ = ("name", "help")

    def __init__(self, name, help=""):
        self._name = name
        self._help = help


class RegisteredArgument(metaclass=RecordType):
    """
    Shared state of qualifiers and parameters: the owning command (None for
    global declarations), necessity, help text and whether input matched it.
    """
    __introspectable__ = ("command", "required", "help", "matched")

    def __init__(self, command, required, help):
        self._command = command
        self._required = required
        self._help = help
        self._matched = False

    @property
    def optional(self):
        return not self._required

    @property
    def missing(self):
        return not self._matched

    def match(self):
        self._matched = True


class RegisteredQualifier(RegisteredArgument):
    __introspectable__ = ("names", "flag")
    __displayable__ = ("name", "names", "command", "required", "flag", "matched")

    def __init__(self, command, names, required, help, *, flag=False):
        super().__init__(command, required, help)
        self._names = tuple(names)
        self._flag = flag

    @property
    def name(self):
        """display name: the first alias longer than one character, else the first alias."""
        return next((name for name in self._names if len(name) > 1), self._names[0])

    def spellings(self):
        """each alias with the modifier help text shows for it ('-x' or '--name')."""
        return ["%s%s" % ("-" if len(name) == 1 else "--", name) for name in self._names]


class RegisteredParameter(RegisteredArgument):
    __introspectable__ = ("name",)
    __displayable__ = ("name", "command", "required", "matched")

    def __init__(self, command, name, required, help):
        super().__init__(command, required, help)
        self._name = name


__all__ = (
    "RegisteredCommand",
    "RegisteredArgument",
    "RegisteredQualifier",
    "RegisteredParameter",
)
