from __future__ import annotations

"""Single-line CSV tokenizer.

Splits one physical line into trimmed field strings. Commas inside a
double-quoted span do not end a field; the quote characters themselves are
dropped from the output.

Known limitation: quotes are toggled naively. A doubled quote (``""``) inside
a quoted field is read as two toggles, not as an escaped quote character.
"""

__all__ = [
    "tokenize_line",
]

QUOTE = '"'
DELIMITER = ","


def tokenize_line(line: str) -> list[str]:
    """Tokenize a CSV line honoring quote-toggled commas.

    Args:
        line: One line of CSV text (without the trailing newline)

    Returns:
        List of trimmed field strings. Never empty: a blank line yields ``[""]``.

    Examples:
        >>> tokenize_line('a,"b,c",d')
        ['a', 'b,c', 'd']
        >>> tokenize_line('')
        ['']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    fields.append("".join(current).strip())
    return fields
