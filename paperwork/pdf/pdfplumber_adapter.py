import io

import pdfplumber

from paperwork.pdf.base import BasePdfExtractor
from paperwork.pdf.exceptions import PdfExtractionError

_PDF_POINTS_PER_INCH = 72


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [(page.extract_text() or "").strip() for page in pdf.pages]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc

    def render_pages(self, pdf_bytes: bytes, max_pages: int) -> list[bytes]:
        resolution = int(_PDF_POINTS_PER_INCH * self.render_scale)
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                images: list[bytes] = []
                for page in pdf.pages[:max_pages]:
                    buf = io.BytesIO()
                    page.to_image(resolution=resolution).original.save(buf, format="PNG")
                    images.append(buf.getvalue())
                return images
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber rendering failed: {exc}") from exc
