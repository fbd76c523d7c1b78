"""Value cleaners shared by the field behaviors.

Every function here is total: whatever it receives, it returns a value of the
documented type and never raises.
"""

from __future__ import annotations

import math
import re
from typing import Any

TRUTHY_TOKENS = ("true", "1", "on")

ALLOWED_URL_PROTOCOLS = (
    "http",
    "https",
    "ftp",
    "ftps",
    "mailto",
    "news",
    "irc",
    "irc6",
    "ircs",
    "gopher",
    "nntp",
    "feed",
    "telnet",
    "mms",
    "rtsp",
    "sms",
    "svn",
    "tel",
    "fax",
    "xmpp",
    "webcal",
    "urn",
)

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_LONE_LT_RE = re.compile(r"<(?![a-zA-Z/!?])")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_WHITESPACE_RE = re.compile(r"[\r\n\t ]+")
_OCTET_RE = re.compile(r"%[a-fA-F0-9]{2}")
_URL_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\x80-\U0010ffff]")
_PHP_FILE_RE = re.compile(r"^[a-z0-9-]+?\.php", re.IGNORECASE)
_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_INT_RE = re.compile(r"^\s*[+-]?\d+\s*$")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_HEX_COLOR_RE = re.compile(r"^#([A-Fa-f0-9]{3}){1,2}$")


def scalar_to_str(value: Any) -> str | None:
    """Convert a scalar to text the way form transports do; None for non-scalars."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    return None


def strip_all_tags(text: str, remove_breaks: bool = False) -> str:
    """Remove script/style blocks and every remaining tag."""
    text = _SCRIPT_STYLE_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    if remove_breaks:
        text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def sanitize_text(value: Any, keep_newlines: bool = False) -> str:
    """Clean a single-line (or multi-line) text value.

    Tags are stripped, a lone `<` is kept as `&lt;`, control characters and
    percent-encoded octets are removed and whitespace runs are collapsed.
    """
    text = scalar_to_str(value)
    if not text:
        return ""

    if "<" in text:
        text = _LONE_LT_RE.sub("&lt;", text)
        text = strip_all_tags(text)
        text = text.replace("<", "&lt;")

    if keep_newlines:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        text = _CONTROL_RE.sub("", text)
    else:
        text = _CONTROL_RE.sub("", text)
        text = _WHITESPACE_RE.sub(" ", text)

    found = False
    while _OCTET_RE.search(text):
        text = _OCTET_RE.sub("", text)
        found = True
    if found:
        text = re.sub(r" +", " ", text)

    return text.strip()


def sanitize_url(value: Any) -> str:
    """Normalize a URL for storage; unsafe or unknown-protocol URLs become ''."""
    url = scalar_to_str(value)
    if not url:
        return ""
    url = url.strip().replace(" ", "%20")
    url = _URL_UNSAFE_RE.sub("", url)
    if not url:
        return ""

    if ":" not in url and not url.startswith(("/", "#", "?")) and not _PHP_FILE_RE.match(url):
        url = "http://" + url

    scheme_end = url.find(":")
    first_delim = min((i for i in (url.find("/"), url.find("?"), url.find("#")) if i >= 0), default=len(url))
    if 0 <= scheme_end < first_delim:
        scheme = url[:scheme_end].lower()
        if scheme not in ALLOWED_URL_PROTOCOLS:
            return ""
    return url


def sanitize_code(value: Any) -> str:
    """Keep code verbatim apart from NUL bytes and line-ending normalization."""
    text = scalar_to_str(value)
    if not text:
        return ""
    return text.replace("\x00", "").replace("\r\n", "\n").replace("\r", "\n")


def to_number(value: Any) -> int | float:
    """Coerce to int or float, preserving the literal's form; 0 when not numeric."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if not isinstance(value, str) or not _NUMERIC_RE.match(value):
        return 0
    if _INT_RE.match(value):
        try:
            return int(value)
        except ValueError:
            # Past the int conversion digit limit; read it as a float instead.
            pass
    number = float(value)
    return number if math.isfinite(number) else 0


def to_unsigned_int(value: Any) -> int:
    """Coerce to a non-negative integer, reading a leading integer from text."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return max(0, value)
    if isinstance(value, float):
        return max(0, int(value)) if math.isfinite(value) else 0
    if isinstance(value, str):
        if _NUMERIC_RE.match(value) and not _INT_RE.match(value):
            number = float(value)
            return max(0, int(number)) if math.isfinite(number) else 0
        match = _LEADING_INT_RE.match(value)
        if not match:
            return 0
        try:
            return max(0, int(match.group(1)))
        except ValueError:
            return 0
    return 0


def is_truthy_token(value: Any) -> bool:
    """Strict truthiness: True, 1, "true", "1" or "on"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value in TRUTHY_TOKENS
    return False


def sanitize_hex_color(value: Any) -> str | None:
    """Return the color when it is `#RGB` or `#RRGGBB`, else None."""
    if not isinstance(value, str):
        return None
    return value if _HEX_COLOR_RE.match(value) else None
