"""
URL syntax validation and normalization.

Accepted grammar:
- optional http:// or https:// scheme
- dot-separated labels of letters, digits and hyphens (no label starts
  or ends with a hyphen), or the literal host ``localhost``
- optional :port (positive integer, no leading zero)
- optional path of unreserved / sub-delim characters
"""

import re

_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?"

URL_PATTERN = re.compile(
    r"^(?:https?://)?"
    r"(?!-)"
    r"(?:(?:" + _LABEL + r"\.)+" + _LABEL + r"|localhost)"
    r"(?<!-)"
    r"(?::[1-9][0-9]*)?"
    r"(?:/[\w\-._~:/?#\[\]@!$&'()*+,;=]*)?"
    r"$",
    re.ASCII,
)

SCHEMES = ("http://", "https://")
DEFAULT_SCHEME = "https://"


class UrlValidator:
    """Stateless validator; the pattern is compiled once at import"""

    def validate(self, raw: str) -> bool:
        if raw is None or not raw.strip():
            return False
        return URL_PATTERN.match(raw.strip()) is not None

    def normalize(self, raw: str) -> str:
        """Trim and prefix https:// when no scheme is present"""
        trimmed = raw.strip()
        if not trimmed.startswith(SCHEMES):
            return DEFAULT_SCHEME + trimmed
        return trimmed
