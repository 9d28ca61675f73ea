from dataclasses import dataclass, field


@dataclass(frozen=True)
class TextExtractionResult:
    """Raw text of a document plus its per-page breakdown."""

    text: str
    pages: list[str] = field(default_factory=list)
    used_vision_ocr: bool = False
