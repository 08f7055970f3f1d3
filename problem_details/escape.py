"""Escaping of text for safe inclusion in JSON string literals."""

from typing import Dict

# Characters with a dedicated two-character escape sequence. The forward
# slash is optional in JSON, but is always escaped here so the output can be
# embedded in inline HTML.
REPLACEMENTS: Dict[str, str] = {
    '"': '\\"',
    '\\': '\\\\',
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '/': '\\/',
}


def should_be_hexed(character: str) -> bool:
    """Check whether a character must be written as a \\uXXXX escape.

    This covers the C0 and C1 control characters as well as the general
    punctuation block (U+2000 to U+20FF), which holds several invisible
    spaces and line separators.
    """
    code = ord(character)
    return (
        code <= 0x1F
        or 0x7F <= code <= 0x9F
        or 0x2000 <= code <= 0x20FF
    )


def escape(value: str) -> str:
    """Escape the given string for inclusion between double quotes in JSON.

    Args:
        value: The text to escape.

    Returns:
        The escaped text. Decoding it as the contents of a JSON string literal
        yields the original value.
    """
    result = []
    for character in value:
        if character in REPLACEMENTS:
            result.append(REPLACEMENTS[character])
        elif should_be_hexed(character):
            result.append(f'\\u{ord(character):04X}')
        else:
            result.append(character)
    return ''.join(result)
