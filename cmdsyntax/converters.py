"""
Value converters for qualifier and parameter declarations.

A converter is any callable taking the raw string and returning the typed
value. Raising ValueError or TypeError marks the input as unparsable; the
registry wraps that into a ValueConversionError naming the declaration.
"""


def string(text, /):
    return text


def boolean(text, /):
    """strict boolean parsing: 'true' or 'false', case-insensitive, surrounding blanks ignored."""
    match text.strip().lower():
        case "true":
            return True
        case "false":
            return False
    raise ValueError("%r is not a valid boolean" % text)


def integer(text, /):
    try:
        return int(text.strip())
    except ValueError:
        raise ValueError("%r is not a valid integer" % text) from None


def resolve(type, /):
    """map builtin types onto the converters above; other callables pass through."""
    if not callable(type):
        raise TypeError("converter must be callable")
    return {str: string, bool: boolean, int: integer}.get(type, type)


__all__ = (
    "string",
    "boolean",
    "integer",
    "resolve",
)
