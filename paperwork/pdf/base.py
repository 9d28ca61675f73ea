from abc import ABC, abstractmethod


class BasePdfExtractor(ABC):
    """Contract for PDF readers: text layer per page and page rasterisation."""

    DEFAULT_RENDER_SCALE = 2.0

    def __init__(self, render_scale: float = DEFAULT_RENDER_SCALE) -> None:
        self.render_scale = render_scale

    @abstractmethod
    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        """Read the structural text layer of a PDF, one string per page.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Stripped page texts in page order. Image-only pages yield "".

        Raises:
            PdfExtractionError: if the PDF cannot be parsed.
        """

    @abstractmethod
    def render_pages(self, pdf_bytes: bytes, max_pages: int) -> list[bytes]:
        """Rasterise the first *max_pages* pages to PNG at ``render_scale``.

        Raises:
            PdfExtractionError: if the PDF cannot be rendered.
        """
