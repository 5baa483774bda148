"""
Parameter Key Spelling and Token Parsing.

Parameters are registered under PascalCase names ("UpwindWeight") and
spelled in kebab-case on the command line ("--upwind-weight"). This module
converts between both spellings and splits raw "key = value" text into its
tokens, including the quoted-value escape rules used by parameter files.
"""

from typing import Tuple

from .errors import InvalidKeyFormatError, MalformedQuotedStringError


ESCAPES = {
    'n':  '\n',
    'r':  '\r',
    't':  '\t',
    '"':  '"',
    '\\': '\\',
}


def _is_letter(c: str) -> bool:
    return c.isascii() and c.isalpha()


def _is_alnum(c: str) -> bool:
    return c.isascii() and c.isalnum()


def to_cli_flag(name: str) -> str:
    """
    Convert a PascalCase parameter name to its command line spelling.

    A dash is inserted before every upper-case letter after the first and the
    result is lower-cased. Single-letter names get a single leading dash.

        >>> to_cli_flag("UpwindWeight")
        '--upwind-weight'
    """
    flag = ""
    for i, c in enumerate(name):
        if i > 0 and c.isupper():
            flag += "-"
        flag += c.lower()

    if len(name) == 1:
        return f"-{flag}"

    return f"--{flag}"


def canonicalize(key: str, capitalize_first: bool = True, error_prefix: str = "") -> str:
    """
    Convert a kebab-case key to its canonical PascalCase name.

    Every dash must be followed by a letter, which is upper-cased; all other
    characters must be alphanumeric and the key must start with a letter.

    Args:
        key: Raw key text, without any leading dashes.
        capitalize_first: Upper-case the first letter as well.
        error_prefix: Prepended to error messages (e.g. "file.ini:3: ").

    Raises:
        InvalidKeyFormatError: If the key is empty or malformed.
    """
    if not key:
        raise InvalidKeyFormatError(f"{error_prefix}Empty parameter names are invalid")

    if not _is_letter(key[0]):
        raise InvalidKeyFormatError(
            f"{error_prefix}Parameter name '{key}' is invalid: First character must be a letter"
        )

    result = key[0].upper() if capitalize_first else key[0]

    i = 1
    while i < len(key):
        c = key[i]
        if c == '-':
            i += 1
            if i >= len(key) or not _is_letter(key[i]):
                raise InvalidKeyFormatError(f"{error_prefix}Invalid parameter name '{key}'")
            result += key[i].upper()
        elif not _is_alnum(c):
            raise InvalidKeyFormatError(f"{error_prefix}Invalid parameter name '{key}'")
        else:
            result += c
        i += 1

    return result


def canonicalize_path(key: str, error_prefix: str = "") -> str:
    """
    Canonicalize a dot-separated key segment by segment.

        >>> canonicalize_path("numerics.max-iter")
        'Numerics.MaxIter'
    """
    return '.'.join(canonicalize(segment, True, error_prefix) for segment in key.split('.'))


def from_cli_flag(flag: str) -> str:
    """ Inverse of to_cli_flag: strips the leading dashes and canonicalizes. """
    if flag.startswith("--"):
        flag = flag[2:]
    elif flag.startswith("-"):
        flag = flag[1:]

    return canonicalize(flag, True)


def skip_leading_whitespace(s: str) -> str:
    return s.lstrip()


def parse_key_token(s: str) -> Tuple[str, str]:
    """ Splits s at the first whitespace or '=' into (key, remainder). """
    i = 0
    while i < len(s) and not s[i].isspace() and s[i] != '=':
        i += 1

    return s[:i], s[i:]


def parse_value_token(s: str, quoted: bool = None, error_prefix: str = "") -> Tuple[str, str]:
    """
    Split the leading value off s and return (value, remainder).

    An unquoted value runs up to the first whitespace. A quoted value starts
    after an opening double quote and ends at the first unescaped one; the
    escapes \\n \\r \\t \\" and \\\\ are decoded and the remainder begins after
    the closing quote. When quoted is None it is decided by the first
    character of s.

    Raises:
        MalformedQuotedStringError: On an unknown escape or a missing
            closing quote.
    """
    if quoted is None:
        quoted = s.startswith('"')

    if not quoted:
        i = 0
        while i < len(s) and not s[i].isspace():
            i += 1
        return s[:i], s[i:]

    if not s.startswith('"'):
        raise MalformedQuotedStringError(f"{error_prefix}Expected quoted string")

    result, i = [], 1
    while i < len(s):
        c = s[i]
        if c == '\\':
            i += 1
            if i >= len(s):
                raise MalformedQuotedStringError(f"{error_prefix}Unexpected end of quoted string")
            if s[i] not in ESCAPES:
                raise MalformedQuotedStringError(f"{error_prefix}Unknown escape character '\\{s[i]}'")
            result.append(ESCAPES[s[i]])
        elif c == '"':
            return ''.join(result), s[i+1:]
        else:
            result.append(c)
        i += 1

    raise MalformedQuotedStringError(f"{error_prefix}Missing closing quote in quoted string")
