import io
from collections.abc import Callable

import pytest
from docx import Document
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "This lease may be terminated with 30 days notice")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Clause one: rent is due monthly")
    c.showPage()
    c.drawString(72, 720, "Clause two: late fee applies")
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
def truncated_pdf_bytes(sample_pdf_bytes: bytes) -> bytes:
    """First bytes of a real PDF: header present, body and xref cut off."""
    return sample_pdf_bytes[:40]


def build_docx(paragraphs: list[str], table: list[list[str]] | None = None) -> bytes:
    """Create a DOCX file in memory with the given paragraphs and an optional table."""
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    if table:
        grid = doc.add_table(rows=len(table), cols=max(len(row) for row in table))
        for r, row in enumerate(table):
            for c, text in enumerate(row):
                grid.rows[r].cells[c].text = text
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture()
def docx_factory() -> Callable[..., bytes]:
    return build_docx


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    return build_docx(
        ["Employment Agreement", "The employee may resign with 60 days notice."],
        table=[["Salary", "50000"], ["Probation", "6 months"]],
    )


@pytest.fixture()
def truncated_docx_bytes(sample_docx_bytes: bytes) -> bytes:
    """A DOCX zip cut in half: the central directory is gone."""
    return sample_docx_bytes[: len(sample_docx_bytes) // 2]
