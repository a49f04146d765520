'''
Re-serialize literal argument values into a single command-line string.

escape() is the inverse of cmdsyntax.lexer.split for one argument:

    >>> escape('say "hi"')
    '"say ""hi"""'
    >>> join(["commit", "-m", "first draft"])
    'commit -m "first draft"'
'''


def escape(text, /):
    """
    quote text when it holds a space or a quote, or ends with a backslash.

    quotes inside are doubled. a trailing backslash is followed by one space
    before the closing quote so it cannot be read as escaping it; split() trims
    that space away again.
    """
    if not isinstance(text, str):
        raise TypeError("escape() argument must be a string")

    if " " not in text and '"' not in text and not text.endswith("\\"):
        return text

    text = text.replace('"', '""')
    if text.endswith("\\"):
        text += " "
    return '"%s"' % text


def join(arguments, /):
    """escape every argument and join them with single spaces."""
    if isinstance(arguments, str):
        raise TypeError("join() argument must be an iterable of strings, not a string")
    return " ".join(map(escape, arguments))


__all__ = (
    "escape",
    "join",
)
