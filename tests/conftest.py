"""Shared fixtures: small in-memory PDF and Word documents."""

import io
from typing import Dict, List, Sequence, Tuple

import pytest
from docx import Document

Run = Tuple[str, float, float]


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: Sequence[Sequence[Run]]) -> bytes:
    """Build a minimal PDF with Helvetica text runs placed at (x, y).

    Each page is a list of ``(text, x, y)`` runs. Offsets in the xref table
    are computed from the serialized objects.
    """
    objects: Dict[int, bytes] = {
        1: b"<< /Type /Catalog /Pages 2 0 R >>",
        3: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }
    kids: List[int] = []
    next_id = 4
    for runs in pages:
        page_id, content_id = next_id, next_id + 1
        next_id += 2
        kids.append(page_id)
        stream = "".join(
            f"BT /F1 12 Tf {x} {y} Td ({_escape(text)}) Tj ET\n" for text, x, y in runs
        ).encode("latin-1")
        objects[page_id] = (
            "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {content_id} 0 R >>"
        ).encode("ascii")
        objects[content_id] = b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"endstream"
    objects[2] = (
        f"<< /Type /Pages /Kids [{' '.join(f'{kid} 0 R' for kid in kids)}] /Count {len(kids)} >>"
    ).encode("ascii")

    out = bytearray(b"%PDF-1.4\n")
    offsets: Dict[int, int] = {}
    for obj_id in sorted(objects):
        offsets[obj_id] = len(out)
        out += b"%d 0 obj\n" % obj_id + objects[obj_id] + b"\nendobj\n"

    xref_offset = len(out)
    size = max(objects) + 1
    out += b"xref\n0 %d\n" % size
    out += b"0000000000 65535 f \n"
    for obj_id in range(1, size):
        out += b"%010d 00000 n \n" % offsets[obj_id]
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (size, xref_offset)
    return bytes(out)


def build_docx(paragraphs: Sequence[str], table_rows: Sequence[Sequence[str]] = ()) -> bytes:
    """Build a .docx with the given paragraphs followed by an optional table."""
    document = Document()
    for text in paragraphs:
        document.add_paragraph(text)
    if table_rows:
        table = document.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for row, values in zip(table.rows, table_rows):
            for cell, value in zip(row.cells, values):
                cell.text = value
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def resume_pdf() -> bytes:
    """One-page PDF: a name line, a two-column line and a header."""
    return build_pdf([[
        ("Jane Doe", 72, 720),
        ("Skills", 72, 600),
        ("Engineer", 350, 600),
        ("Experience", 72, 560),
    ]])


@pytest.fixture
def resume_docx() -> bytes:
    return build_docx(
        ["Jane Doe", "Experience", "Software Engineer", "Acme Corp | Jan 2020 - Present"],
        table_rows=[["Skills", "Python, Go"]],
    )


SAMPLE_RESUME = """Jane Doe
jane.doe@example.com | 555-123-4567 | Boston, MA
linkedin.com/in/janedoe | github.com/janedoe
Summary
Backend engineer with eight years building data platforms.
Skills
• Python, Go
• PostgreSQL
Experience
Senior Software Engineer
Acme Corp | Jan 2020 - Present
• Led migration to Kubernetes
• Cut p99 latency by 40%
Projects
Resume Parser | Python, Regex
• Extracts structured data
https://github.com/janedoe/parser
Education
Stanford University
Bachelor of Science in Computer Science
2012 - 2016
GPA: 3.85
Relevant Coursework: Algorithms, OS
"""


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def pdf_builder():
    return build_pdf


@pytest.fixture
def docx_builder():
    return build_docx
