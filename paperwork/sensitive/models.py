from dataclasses import dataclass


@dataclass(frozen=True)
class SensitiveMatch:
    """Verdict of the sensitive content scan."""

    matched: bool
    reason: str | None = None
