r"""
cmdsyntax lexer: split a raw command line into word tokens.

Rules
- an unquoted space separates tokens; runs of spaces fold into one separator.
- '"' opens a quoted span copied literally up to the closing '"'.
  • '""' inside a span is one literal quote.
  • '\"' inside a span is one literal quote.
- quoted and unquoted segments with no space between them form one token
  (abc""def → abcdef).
- tokens are trimmed when flushed, so whitespace at the edges of a quoted span
  disappears; empty tokens are dropped.
- an unterminated quote raises UnmatchedQuoteError carrying the 0-based position
  of the opening quote.

Examples
    >>> split('abc  "def  ghi"')
    ['abc', 'def  ghi']
    >>> split('abc "d""ef"')
    ['abc', 'd"ef']
"""
from .faults import FaultCode, UnmatchedQuoteError


def _flush(tokens, buffer):
    if token := "".join(buffer).strip():
        tokens.append(token)
    buffer.clear()


def split(text, /):
    """
    split a command-line string into a list of tokens (see module docs for the rules).
    """
    if not isinstance(text, str):
        raise TypeError("split() argument must be a string")

    tokens = []
    buffer = []
    length = len(text)
    index = 0

    while index < length:
        char = text[index]

        if char == " ":
            _flush(tokens, buffer)
        elif char == '"':
            opening = index
            index += 1

            while index < length:
                if text[index] == '"':
                    # a doubled quote is a literal one, anything else closes the span
                    if index + 1 < length and text[index + 1] == '"':
                        index += 1
                    else:
                        break
                elif text[index] == "\\" and index + 1 < length and text[index + 1] == '"':
                    index += 1

                buffer.append(text[index])
                index += 1

            if index >= length:
                raise UnmatchedQuoteError(
                    "Unmatched quote at position %d" % opening,
                    code=FaultCode.UNMATCHED_QUOTE,
                    title="unmatched quote",
                    position=opening,
                )
        else:
            buffer.append(char)

        index += 1

    _flush(tokens, buffer)

    return tokens


__all__ = (
    "split",
)
