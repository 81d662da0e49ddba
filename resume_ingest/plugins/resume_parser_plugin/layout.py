"""
Reading-order reconstruction for positioned PDF text.

Groups a page's text fragments into visual lines by vertical position,
orders lines top to bottom and fragments left to right, and joins them
into plain text. Horizontal gaps decide the joiner, so multi-column
layouts come out with a wide separator between columns instead of
running words together.
"""

from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from resume_ingest.config.settings import settings
from resume_ingest.utils.logging import get_structured_logger

from .models import TextFragment

logger = get_structured_logger(__name__)


class LayoutOptions(BaseModel):
    """Thresholds for line clustering and fragment joining (page units)."""

    model_config = ConfigDict(frozen=True)

    y_tolerance: float = Field(5.0, ge=0)
    wide_gap: float = Field(10.0, ge=0)
    space_gap: float = Field(1.0, ge=0)
    wide_separator: str = "   "
    page_separator: str = "\n\n"

    @classmethod
    def from_settings(cls) -> "LayoutOptions":
        return cls(
            y_tolerance=settings.layout_y_tolerance,
            wide_gap=settings.layout_wide_gap,
            space_gap=settings.layout_space_gap,
            wide_separator=settings.layout_wide_separator,
            page_separator=settings.page_separator,
        )


class Line:
    """Fragments judged to share one visual line.

    Membership is append-only. The representative y is the running mean of
    every fragment assigned so far.
    """

    __slots__ = ("fragments", "_y_total")

    def __init__(self, first: TextFragment) -> None:
        self.fragments: List[TextFragment] = [first]
        self._y_total = first.y

    @property
    def mean_y(self) -> float:
        return self._y_total / len(self.fragments)

    @property
    def anchor_y(self) -> float:
        """Baseline of the first fragment assigned to the line."""
        return self.fragments[0].y

    def accepts(self, fragment: TextFragment, tolerance: float) -> bool:
        return abs(fragment.y - self.mean_y) < tolerance

    def add(self, fragment: TextFragment) -> None:
        self.fragments.append(fragment)
        self._y_total += fragment.y

    def ordered(self) -> List[TextFragment]:
        return sorted(self.fragments, key=lambda f: f.x)


def cluster_lines(fragments: Iterable[TextFragment], tolerance: float) -> List[Line]:
    """Greedily bucket fragments into lines, top of page first.

    Fragments are scanned in descending y. Each joins the first open line
    whose mean y lies within ``tolerance``, otherwise it opens a new line.
    """
    lines: List[Line] = []
    for fragment in sorted(fragments, key=lambda f: -f.y):
        for line in lines:
            if line.accepts(fragment, tolerance):
                line.add(fragment)
                break
        else:
            lines.append(Line(fragment))

    # A mean can drift after assignment; order by the first-assigned baseline
    lines.sort(key=lambda line: -line.anchor_y)
    return lines


def join_fragments(fragments: Iterable[TextFragment], options: LayoutOptions) -> str:
    """Join fragments already ordered left to right into one line of text."""
    text = ""
    last_x_end: Optional[float] = None
    for fragment in fragments:
        if last_x_end is not None:
            gap = fragment.x - last_x_end
            if gap > options.wide_gap:
                text += options.wide_separator
            elif gap > options.space_gap or not text.endswith(" "):
                text += " "
        text += fragment.text
        last_x_end = fragment.x_end
    return text.strip()


def reconstruct_page_text(
    fragments: Iterable[TextFragment],
    options: Optional[LayoutOptions] = None,
) -> str:
    """Turn one page's fragments into plain text in reading order.

    Args:
        fragments: Text fragments of a single page, in any order
        options: Clustering and joining thresholds (defaults from settings)

    Returns:
        str: One output line per visual line, joined with ``\\n``. Empty
        when the page has no non-blank fragments.
    """
    options = options or LayoutOptions.from_settings()
    visible = [f for f in fragments if not f.is_blank]
    if not visible:
        return ""

    lines = cluster_lines(visible, options.y_tolerance)
    logger.debug("Clustered page fragments", fragments=len(visible), lines=len(lines))
    return "\n".join(join_fragments(line.ordered(), options) for line in lines)


def reconstruct_document_text(
    pages: Iterable[Iterable[TextFragment]],
    options: Optional[LayoutOptions] = None,
) -> str:
    """Reconstruct every page and join them with the page separator."""
    options = options or LayoutOptions.from_settings()
    return options.page_separator.join(reconstruct_page_text(page, options) for page in pages)
