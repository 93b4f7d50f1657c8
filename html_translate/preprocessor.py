"""
Byte-level preparation of fetched pages and files before parsing.

The tree engine only accepts text.  Everything that touches raw bytes
lives here:
- Detects the charset (HTTP header, then <meta>, then UTF-8)
- Decodes with the browser-equivalent codec
- Strips NULL bytes and control characters that corrupt text output

Design principle: NEVER FAIL on bad bytes.  Undecodable sequences become
U+FFFD and decoding carries on.
"""

import codecs
import re
from typing import Optional

from .logger import get_module_logger

logger = get_module_logger("preprocessor")

# WHATWG encoding spec: browsers silently remap these charsets.
# https://encoding.spec.whatwg.org/#names-and-labels
WHATWG_CHARSET_MAP = {
    'iso-8859-1': 'windows-1252',
    'iso8859-1': 'windows-1252',
    'iso88591': 'windows-1252',
    'latin-1': 'windows-1252',
    'latin1': 'windows-1252',
    'us-ascii': 'windows-1252',
    'ascii': 'windows-1252',
    'iso-8859-9': 'windows-1254',
    'iso-8859-11': 'windows-874',
}

META_CHARSET_PATTERN = re.compile(
    r'<meta[^>]+charset=["\']?\s*([^\s"\';>]+)', re.IGNORECASE
)
META_CONTENT_TYPE_PATTERN = re.compile(
    r'<meta[^>]+content=["\'][^"\']*charset=([^\s"\';>]+)', re.IGNORECASE
)

# Every C0 control except tab, newline and carriage return.
CONTROL_CHARS = ''.join(chr(c) for c in range(32) if c not in (9, 10, 13))
_CONTROL_TABLE = str.maketrans('', '', CONTROL_CHARS)


def normalize_charset(charset: Optional[str]) -> Optional[str]:
    """Map a declared charset to the codec a browser would use, or None if unknown."""
    if not charset:
        return None
    charset = charset.strip().strip('"\'').lower()
    charset = WHATWG_CHARSET_MAP.get(charset, charset)
    try:
        codecs.lookup(charset)
    except LookupError:
        logger.debug(f"Unknown charset {charset!r}, ignoring")
        return None
    return charset


def detect_charset_from_bytes(raw_bytes: bytes) -> str:
    """
    Detect charset from raw HTML bytes by scanning the first 2048 bytes
    for <meta charset=...> or <meta http-equiv="Content-Type" content="...; charset=...">.

    Returns the browser-equivalent charset or 'utf-8' as default.
    """
    # The HTML spec puts charset declarations in the first 1024 bytes.
    head_str = raw_bytes[:2048].decode('ascii', errors='ignore')

    match = META_CHARSET_PATTERN.search(head_str) or META_CONTENT_TYPE_PATTERN.search(head_str)
    if not match:
        return 'utf-8'
    return normalize_charset(match.group(1)) or 'utf-8'


def sanitize_text(text: str) -> str:
    """Remove NULL bytes and control characters, normalize line endings."""
    if '\x00' in text:
        text = text.replace('\x00', '')
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    return text.translate(_CONTROL_TABLE)


def decode_html(raw_bytes: bytes, declared_charset: Optional[str] = None) -> str:
    """
    Decode a page or file body to sanitized text.

    Args:
        raw_bytes: Body as received
        declared_charset: Charset from the HTTP Content-Type header, if any

    Returns:
        Decoded text ready for parse()
    """
    # A UTF-8 BOM beats every declaration.
    if raw_bytes.startswith(codecs.BOM_UTF8):
        return sanitize_text(raw_bytes[len(codecs.BOM_UTF8):].decode('utf-8', errors='replace'))

    charset = normalize_charset(declared_charset) or detect_charset_from_bytes(raw_bytes)
    logger.debug(f"Decoding {len(raw_bytes)} bytes as {charset}")
    return sanitize_text(raw_bytes.decode(charset, errors='replace'))
