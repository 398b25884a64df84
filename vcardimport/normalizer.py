"""
Text normalization applied before vCard content is split into lines.
"""

import re

# RFC 2425 5.8.1: a line break followed by a single space or tab is a fold.
_FOLD_RE = re.compile(r'\n[ \t]')


def normalize_text(text: str) -> str:
    """
    Canonicalize line endings and unfold folded lines.

    Steps, in order:
    1. CRLF and lone CR become LF.
    2. Every LF followed by a space or tab is removed together with that
       one whitespace character.
    3. The quoted-printable soft break artifact "=\\n=" becomes "=".

    Args:
        text: Raw vCard content

    Returns:
        Normalized content ready for line splitting
    """
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    text = _FOLD_RE.sub('', text)
    return text.replace('=\n=', '=')
