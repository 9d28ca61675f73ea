import pymupdf

from paperwork.pdf.base import BasePdfExtractor
from paperwork.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [page.get_text().strip() for page in doc]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc

    def render_pages(self, pdf_bytes: bytes, max_pages: int) -> list[bytes]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                matrix = pymupdf.Matrix(self.render_scale, self.render_scale)
                return [
                    doc[index].get_pixmap(matrix=matrix).tobytes("png")
                    for index in range(min(doc.page_count, max_pages))
                ]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf rendering failed: {exc}") from exc
