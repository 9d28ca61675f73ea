"""Turns uploaded PDF and image bytes into text.

PDFs are read through their structural text layer first. When that layer
holds fewer than ``min_words`` words the PDF is treated as a scan: the first
``max_pages`` pages are rasterised and transcribed by the vision model, and
the transcriptions replace both the text and the page list. Images go
straight to the vision model and become a single page.
"""

from paperwork.logging.logger import Log
from paperwork.ocr.exceptions import UnsupportedMediaTypeError
from paperwork.ocr.models import TextExtractionResult
from paperwork.ocr.text_normalizer import word_count
from paperwork.ocr.vision import VisionTextRecognizer
from paperwork.pdf.base import BasePdfExtractor

PDF_MEDIA_TYPE = "application/pdf"
_PAGE_SEPARATOR = "\n\n"


class TextExtractor:
    """Chooses between the PDF text layer and vision OCR."""

    def __init__(
        self,
        *,
        pdf_extractor: BasePdfExtractor,
        recognizer: VisionTextRecognizer,
        min_words: int = 20,
        max_pages: int = 3,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._recognizer = recognizer
        self._min_words = min_words
        self._max_pages = max_pages

    async def extract(self, buffer: bytes, media_type: str | None) -> TextExtractionResult:
        """Extract raw text and pages from a stored file.

        Raises:
            UnsupportedMediaTypeError: for anything but PDF or image media.
            PdfExtractionError: if the PDF cannot be parsed or rendered.
        """
        if media_type == PDF_MEDIA_TYPE:
            return await self._extract_pdf(buffer)
        if media_type and media_type.startswith("image/"):
            return await self._extract_image(buffer, media_type)
        raise UnsupportedMediaTypeError(f"Unsupported file type for OCR: {media_type}")

    def needs_vision_ocr(self, text: str) -> bool:
        return word_count(text) < self._min_words

    async def _extract_pdf(self, buffer: bytes) -> TextExtractionResult:
        pages = self._pdf_extractor.extract_pages(buffer)
        text = _PAGE_SEPARATOR.join(pages).strip()
        if not self.needs_vision_ocr(text):
            Log.info(f"Read PDF text layer: {len(pages)} pages, {len(text)} chars")
            return TextExtractionResult(text=text, pages=pages)

        Log.info(
            f"PDF text layer has {word_count(text)} words, "
            f"falling back to vision OCR (max {self._max_pages} pages)"
        )
        images = self._pdf_extractor.render_pages(buffer, max_pages=self._max_pages)
        ocr_pages: list[str] = []
        for page_number, image in enumerate(images, start=1):
            ocr_pages.append(
                await self._recognizer.recognize(image, "image/png", page_number=page_number)
            )
        return TextExtractionResult(
            text=_PAGE_SEPARATOR.join(ocr_pages),
            pages=ocr_pages,
            used_vision_ocr=True,
        )

    async def _extract_image(self, buffer: bytes, media_type: str) -> TextExtractionResult:
        text = await self._recognizer.recognize(buffer, media_type)
        Log.info(f"Vision OCR read {len(text)} chars from {media_type} image")
        return TextExtractionResult(
            text=text,
            pages=[text] if text else [],
            used_vision_ocr=True,
        )
