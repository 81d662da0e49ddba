"""
Document text extraction.

PDF pages are read with pdfminer.six as positioned text fragments and put
back into reading order by the layout module. Word documents are read with
python-docx, which already yields text in document order.
"""

import io
import unicodedata
from pathlib import Path
from typing import Iterator, List, Optional, Union

from docx import Document
from docx.table import Table
from pdfminer.high_level import extract_pages
from pdfminer.layout import LAParams, LTTextLine

from resume_ingest.config.settings import settings
from resume_ingest.core.exceptions import (
    DocumentExtractionError,
    ExtractionError,
    PDFExtractionError,
    UnsupportedDocumentError,
)
from resume_ingest.utils.logging import get_structured_logger

from .layout import LayoutOptions, reconstruct_document_text
from .models import ResumeDraft, TextFragment
from .parser import parse_resume_text

logger = get_structured_logger(__name__)

PathLike = Union[str, Path]


def _iter_text_lines(layout_object) -> Iterator[LTTextLine]:
    """Yield every text line below a pdfminer layout object."""
    if isinstance(layout_object, LTTextLine):
        yield layout_object
        return
    try:
        children = iter(layout_object)
    except TypeError:
        return
    for child in children:
        yield from _iter_text_lines(child)


def _to_fragment(text_line: LTTextLine) -> TextFragment:
    x0, y0, x1, y1 = text_line.bbox
    # NFKC folds ligature glyphs such as "ﬁ" back into plain letters
    text = unicodedata.normalize("NFKC", text_line.get_text()).strip()
    return TextFragment(text=text, x=x0, y=y0, width=x1 - x0, height=y1 - y0)


def extract_page_fragments(pdf_content: bytes) -> List[List[TextFragment]]:
    """Read positioned text fragments from every page of a PDF.

    Args:
        pdf_content: PDF content as bytes

    Returns:
        List[List[TextFragment]]: One fragment list per page

    Raises:
        PDFExtractionError: If the PDF cannot be parsed
    """
    first_bytes = pdf_content[:10].decode("utf-8", errors="ignore")
    if "%PDF-" not in first_bytes:
        logger.warning("Content doesn't appear to be a PDF", first_bytes=first_bytes)

    laparams = LAParams(
        line_margin=settings.pdf_line_margin,
        word_margin=settings.pdf_word_margin,
        char_margin=settings.pdf_char_margin,
        all_texts=True,
    )
    pages: List[List[TextFragment]] = []
    try:
        for page_layout in extract_pages(io.BytesIO(pdf_content), laparams=laparams):
            pages.append([_to_fragment(line) for line in _iter_text_lines(page_layout)])
    except Exception as e:
        logger.error("Failed to read PDF layout", error=str(e))
        raise PDFExtractionError(str(e), cause=e) from e

    logger.info("Read PDF fragments", pages=len(pages), fragments=sum(len(p) for p in pages))
    return pages


def extract_text_from_pdf(pdf_content: bytes, options: Optional[LayoutOptions] = None) -> str:
    """Extract reading-order text from PDF content.

    Raises:
        PDFExtractionError: If the PDF cannot be parsed
    """
    pages = extract_page_fragments(pdf_content)
    text = reconstruct_document_text(pages, options)
    if len(text.strip()) < 10:
        logger.warning("Extracted very little text", text_length=len(text))
    return text


def _table_lines(table: Table, separator: str) -> Iterator[str]:
    for row in table.rows:
        cells: List[str] = []
        for cell in row.cells:
            value = cell.text.strip()
            # Merged cells repeat across the span
            if value and (not cells or cells[-1] != value):
                cells.append(value)
        if cells:
            yield separator.join(cells)


def extract_text_from_docx(docx_content: bytes) -> str:
    """Extract plain text from a Word (.docx) document.

    Paragraphs and table rows are emitted in document order, one per line.

    Raises:
        DocumentExtractionError: If the document cannot be read
    """
    try:
        document = Document(io.BytesIO(docx_content))
        lines: List[str] = []
        for block in document.iter_inner_content():
            if isinstance(block, Table):
                lines.extend(_table_lines(block, settings.layout_wide_separator))
            else:
                lines.append(block.text)
    except Exception as e:
        logger.error("DOCX extract error", error=str(e))
        raise DocumentExtractionError(
            "Please ensure it is a valid .docx file.", cause=e
        ) from e

    text = "\n".join(lines)
    logger.info("Word text extraction successful", text_length=len(text))
    return text


def extract_text(path: PathLike) -> str:
    """Extract plain text from a resume file, dispatching on its suffix.

    Raises:
        UnsupportedDocumentError: For suffixes other than .pdf, .docx, .txt
        ExtractionError: If the file cannot be read or parsed
    """
    file_path = Path(path)
    suffix = file_path.suffix.lower()
    if suffix not in (".pdf", ".docx", ".txt"):
        raise UnsupportedDocumentError(str(file_path), suffix)

    try:
        content = file_path.read_bytes()
    except OSError as e:
        raise ExtractionError(
            f"Cannot read {file_path}: {e.strerror or e}",
            details={"path": str(file_path)},
            cause=e,
        ) from e

    logger.info("Extracting resume text", path=str(file_path), format=suffix.lstrip("."))
    if suffix == ".pdf":
        return extract_text_from_pdf(content)
    if suffix == ".docx":
        return extract_text_from_docx(content)
    return content.decode("utf-8", errors="replace")


def parse_resume_file(path: PathLike) -> ResumeDraft:
    """Extract a resume file's text and structure it."""
    return parse_resume_text(extract_text(path))
