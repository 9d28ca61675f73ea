"""Keyword scan that flags documents holding credentials or identity numbers.

Patterns are checked in order and the first hit decides the reason. The file
name is scanned ahead of the body so that an upload such as "secrets.png" is
flagged even when OCR finds no text.
"""

import re

from paperwork.sensitive.models import SensitiveMatch

# Letter-only lookarounds so "ssn_scan.pdf" or "pin:" still match while
# "spinning" does not.
_SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (
        re.compile(r"password|passwd|(?<![a-z])secrets(?![a-z])", re.IGNORECASE),
        "Contains a password or stored secrets",
    ),
    (re.compile(r"passphrase", re.IGNORECASE), "Contains a passphrase"),
    (
        re.compile(r"(?<![a-z])ssn(?![a-z])|social[\s_-]*security", re.IGNORECASE),
        "Contains a Social Security number",
    ),
    (re.compile(r"passport", re.IGNORECASE), "Contains a passport number"),
    (re.compile(r"(?<![a-z])visa(?![a-z])", re.IGNORECASE), "Contains visa details"),
    (
        re.compile(r"driv(?:er'?s?|ing)[\s_-]*licen[cs]e", re.IGNORECASE),
        "Contains a driver's license",
    ),
    (
        re.compile(r"bank[\s_-]*account|account[\s_-]*(?:number|no(?![a-z]))", re.IGNORECASE),
        "Contains a bank account number",
    ),
    (
        re.compile(r"card[\s_-]*number|(?:credit|debit)[\s_-]*card", re.IGNORECASE),
        "Contains a card number",
    ),
    (
        re.compile(r"routing[\s_-]*number|sort[\s_-]*code", re.IGNORECASE),
        "Contains a routing number",
    ),
    (re.compile(r"(?<![a-z])pin(?![a-z])", re.IGNORECASE), "Contains a PIN"),
    (
        re.compile(r"api[\s_-]*key|secret[\s_-]*key", re.IGNORECASE),
        "Contains an API key",
    ),
]


def detect_sensitive_content(text: str, file_name: str | None = None) -> SensitiveMatch:
    """Scan file name plus text and report the first sensitive pattern found."""
    combined = "\n".join(part for part in (file_name, text) if part).strip()
    if not combined:
        return SensitiveMatch(matched=False)
    for pattern, reason in _SENSITIVE_PATTERNS:
        if pattern.search(combined):
            return SensitiveMatch(matched=True, reason=reason)
    return SensitiveMatch(matched=False)
