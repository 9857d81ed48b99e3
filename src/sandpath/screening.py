"""Pattern screening for raw path input.

Runs before any filesystem call. The raw string gets one round of
percent-decoding, then the decoded text (and its NFKC-normalized form) must not
match any of the rejection patterns below. An escape that survives the single
decoding round is rejected, so a validated path never decodes to a different
file when it is validated again.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from urllib.parse import unquote

from sandpath.errors import EncodingError, InvalidInputError, SuspiciousPatternError


@dataclass(frozen=True, slots=True)
class RejectionPattern:
    name: str
    regex: re.Pattern[str]

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


REJECTION_PATTERNS: tuple[RejectionPattern, ...] = (
    RejectionPattern("parent-reference", re.compile(r"\.\.")),
    RejectionPattern("unix-traversal", re.compile(r"/\.\.")),
    RejectionPattern("windows-traversal", re.compile(r"\\\.\.")),
    RejectionPattern("encoded-dot-dot", re.compile(r"%2e%2e", re.IGNORECASE)),
    RejectionPattern("encoded-slash", re.compile(r"%2f", re.IGNORECASE)),
    RejectionPattern("encoded-backslash", re.compile(r"%5c", re.IGNORECASE)),
    RejectionPattern("residual-encoding", re.compile(r"%")),
    RejectionPattern("null-byte", re.compile(r"\x00")),
    RejectionPattern("invalid-filename-char", re.compile(r'[<>:"|?*]')),
)

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_percent(raw: str) -> str:
    """Apply a single round of strict percent-decoding."""

    if _MALFORMED_ESCAPE.search(raw):
        raise EncodingError("path contains invalid URL encoding")
    try:
        return unquote(raw, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise EncodingError("path contains invalid URL encoding") from exc


def find_suspicious_pattern(text: str) -> RejectionPattern | None:
    """Return the first rejection pattern matching ``text`` or its NFKC form."""

    candidates = [text]
    folded = unicodedata.normalize("NFKC", text)
    if folded != text:
        candidates.append(folded)
    for pattern in REJECTION_PATTERNS:
        if any(pattern.matches(candidate) for candidate in candidates):
            return pattern
    return None


def screen(raw: object) -> str:
    """Return the decoded form of ``raw`` or raise if it looks like an attack."""

    if not isinstance(raw, str) or not raw:
        raise InvalidInputError("path must be a non-empty string")

    decoded = decode_percent(raw)
    matched = find_suspicious_pattern(decoded)
    if matched is not None:
        raise SuspiciousPatternError(matched.name, matched.regex.pattern)
    return decoded


__all__ = [
    "RejectionPattern",
    "REJECTION_PATTERNS",
    "decode_percent",
    "find_suspicious_pattern",
    "screen",
]
