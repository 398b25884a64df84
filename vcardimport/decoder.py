"""
Parameter-driven value decoding (base64, quoted-printable, charset).

Dependencies:
    - base64: Standard library for base64 decoding
    - quopri: Standard library for quoted-printable decoding
    - codecs: Standard library for charset lookup
    - logging: Standard library for logging
"""
# pylint: disable=logging-fstring-interpolation

import base64
import codecs
import logging
import quopri
import re
from typing import List, NamedTuple, Optional, Sequence, Union

logger = logging.getLogger("vcardimport")

_NON_BASE64_RE = re.compile(r'[^A-Za-z0-9+/]')
_URLSAFE_TO_STANDARD = str.maketrans('-_', '+/')
_UNDECODABLE_RE = re.compile("[\udc80-\udcff]")

Value = Union[str, bytes]


class DecodedValue(NamedTuple):
    """Result of decoding one property value."""

    params: List[str]
    value: Value
    is_raw: bool


def as_text(value: Value) -> str:
    """
    Return a value as text, decoding bytes as UTF-8.

    :param value: Decoded property value
    :return: Text form; undecodable bytes are replaced
    """
    if isinstance(value, bytes):
        return value.decode('utf-8', errors='replace')
    return value


def _to_bytes(value: Value) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode('utf-8', errors='surrogateescape')


def _drop_undecodable(value: str) -> str:
    """Remove source bytes that were not valid UTF-8 (kept as lone surrogates)."""
    return value.encode('utf-8', errors='ignore').decode('utf-8')


def decode_base64(value: Value) -> bytes:
    """
    Decode base64 leniently.

    Characters outside the base64 alphabet (whitespace, padding, stray
    punctuation) are discarded and padding is restored before decoding.
    The URL-safe alphabet ('-', '_') is accepted as well.
    A single dangling character cannot encode a byte and is dropped.

    :param value: Encoded value
    :return: Decoded bytes
    """
    if isinstance(value, bytes):
        value = value.decode('ascii', errors='ignore')
    cleaned = _NON_BASE64_RE.sub('', value.translate(_URLSAFE_TO_STANDARD))
    remainder = len(cleaned) % 4
    if remainder == 1:
        cleaned = cleaned[:-1]
    elif remainder:
        cleaned += '=' * (4 - remainder)
    return base64.b64decode(cleaned)


def decode_quoted_printable(value: Value) -> bytes:
    """
    Decode a quoted-printable value.

    :param value: Encoded value
    :return: Decoded bytes
    """
    return quopri.decodestring(_to_bytes(value))


def convert_charset(value: Value, charset: str) -> Value:
    """
    Convert a value from the named charset to text.

    Bytes are decoded with the charset. Text is converted only when it
    carries source bytes that were not valid UTF-8 (as lone surrogates);
    those are re-encoded to the original bytes first. Text that was read as
    valid UTF-8 is returned as is. Unknown charsets and undecodable bytes
    leave the value unchanged.

    :param value: Value to convert
    :param charset: Charset name taken from a CHARSET= parameter
    :return: Converted text, or the original value
    """
    try:
        codecs.lookup(charset)
    except LookupError:
        logger.debug(f"Unknown charset '{charset}', keeping value unchanged")
        return value

    if isinstance(value, str) and not _UNDECODABLE_RE.search(value):
        return value

    try:
        return _to_bytes(value).decode(charset)
    except UnicodeDecodeError as e:
        logger.debug(f"Could not decode value as {charset}: {e}")
        return value


def decode_value(params: Sequence[str], value: str) -> DecodedValue:
    """
    Apply the encodings named by parameter tokens to a raw value.

    Tokens are checked in order, case-insensitively. Tokens that name an
    encoding or a charset are consumed; all others are kept, in order, for
    group key construction. Several encoding tokens are applied one after
    the other. The charset is applied after all encodings, so it works
    whether CHARSET= comes before or after ENCODING=.

    Args:
        params: Parameter tokens of the property line
        value: Raw value

    Returns:
        DecodedValue with the remaining tokens, the decoded value and
        whether an encoding was applied
    """
    remaining: List[str] = []
    decoded: Value = value
    is_raw = False
    charset: Optional[str] = None
    encodings = 0

    for token in params:
        lowered = token.lower()
        if 'base64' in lowered or 'encoding=b' in lowered:
            decoded = decode_base64(decoded)
            is_raw = True
            encodings += 1
        elif 'quoted-printable' in lowered:
            decoded = decode_quoted_printable(decoded)
            is_raw = True
            encodings += 1
        elif lowered.startswith('charset='):
            charset = token[len('charset='):]
        else:
            remaining.append(_drop_undecodable(token))

    if encodings > 1:
        logger.debug(f"Applied {encodings} encodings in sequence for parameters {list(params)}")

    if charset:
        decoded = convert_charset(decoded, charset)

    if isinstance(decoded, str):
        decoded = _drop_undecodable(decoded)

    return DecodedValue(remaining, decoded, is_raw)
