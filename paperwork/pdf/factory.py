from typing import ClassVar

from paperwork.config.settings import Settings
from paperwork.pdf.base import BasePdfExtractor
from paperwork.pdf.pdfplumber_adapter import PdfPlumberAdapter
from paperwork.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the PDF reader named by ``settings.pdf_engine``.

    The reader is configured with ``settings.ocr_render_scale``, the zoom
    used when pages are rasterised for vision OCR.
    """

    ADAPTERS: ClassVar[dict[str, type[BasePdfExtractor]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        """Raises ValueError for an unknown engine or a non-positive scale."""
        engine = settings.pdf_engine.strip().lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {sorted(cls.ADAPTERS)}"
            )
        if settings.ocr_render_scale <= 0:
            raise ValueError(
                f"ocr_render_scale must be positive, got {settings.ocr_render_scale}"
            )
        return adapter_cls(render_scale=settings.ocr_render_scale)
