"""Data model shared by the page planner and the document provider."""

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class SourcePage:
    """A page of a loaded document. ``number`` is 0-based."""
    number: int
    width: float
    height: float


@dataclass(frozen=True)
class SourceDocument:
    """A loaded document and the geometry of each of its pages."""
    name: str
    pages: Tuple[SourcePage, ...]
    # Opaque library object, owned by the caller for one operation
    handle: Any = field(default=None, compare=False, repr=False)

    @property
    def page_count(self) -> int:
        return len(self.pages)


@dataclass(frozen=True)
class Canvas:
    """Fixed output page size in PDF points."""
    width: float
    height: float


@dataclass(frozen=True)
class Placement:
    """Where a scaled source page lands on its canvas."""
    x: float
    y: float
    width: float
    height: float
    scale: float


@dataclass(frozen=True)
class OutputPage:
    """
    One page of the output document.

    Merge pages carry the canvas and the placement rectangle. Split pages
    carry neither and are copied from the source untouched.
    """
    document: SourceDocument
    page: SourcePage
    canvas: Optional[Canvas] = None
    placement: Optional[Placement] = None

    @property
    def is_verbatim(self) -> bool:
        return self.placement is None
