import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

LONG_LINE = (
    "Invoice from Northwind Utilities for electricity supplied during March "
    "with the total amount due of 84.20 payable before the end of April "
    "to the account holder listed on the front page of this statement"
)


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def text_rich_pdf_bytes() -> bytes:
    """Generate a PDF whose text layer holds well over twenty words."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    words = LONG_LINE.split()
    c.drawString(72, 720, " ".join(words[:12]))
    c.drawString(72, 700, " ".join(words[12:24]))
    c.drawString(72, 680, " ".join(words[24:]))
    c.save()
    return buf.getvalue()


@pytest.fixture()
def four_page_pdf_bytes() -> bytes:
    """Generate a four-page PDF with a single word per page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for number in range(1, 5):
        c.drawString(72, 720, f"Scan{number}")
        c.showPage()
    c.save()
    return buf.getvalue()
