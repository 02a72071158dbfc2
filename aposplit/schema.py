"""
Data models for split runs.
Uses Pydantic for validation and type safety.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DocClass(str, Enum):
    """
    Document classification, decided from the cover page only.
    """
    TRANSCRIPT = "transcript"      # Several pages per student, grouped by student number
    ATTESTATION = "attestation"    # One certificate per page, no grouping


class PageText(BaseModel):
    """Text of a single source page."""
    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    text: str = ""


class StudentInfo(BaseModel):
    """Identity found on one transcript page. Both fields may be missing."""
    name: Optional[str] = None
    student_number: Optional[str] = None


class StudentGroup(BaseModel):
    """
    Pages belonging to one student, in scan order.
    """
    info: StudentInfo
    page_indices: List[int] = []

    def add_page(self, index: int) -> None:
        if self.page_indices and index <= self.page_indices[-1]:
            raise ValueError(
                f"page {index} is out of scan order (last page: {self.page_indices[-1]})"
            )
        self.page_indices.append(index)


class AttestationRecord(BaseModel):
    """Metadata of one attestation page, already sanitized for file names."""
    formation: str
    name: str
    ine: str
    page_index: int

    @property
    def filename(self) -> str:
        return f"{self.formation}-{self.name}-{self.ine}.pdf"


class SaveOutcome(BaseModel):
    """Result of assembling and saving one output document."""
    destination: str
    page_indices: List[int]
    saved: bool
    error: Optional[str] = None
    # True when an earlier document of the same run was written to this destination
    overwrote_previous: bool = False


class FileFailure(BaseModel):
    """A whole source file that could not be split."""
    source_path: str
    error: str


class BatchReport(BaseModel):
    """
    Per-document outcomes of one split run.
    Failures are accumulated here instead of being raised.
    """
    source_path: str
    doc_class: DocClass
    output_dir: str

    groups: List[StudentGroup] = []
    attestations: List[AttestationRecord] = []
    outcomes: List[SaveOutcome] = []

    @property
    def saved_count(self) -> int:
        """Number of distinct files written; overwritten destinations count once."""
        return len({o.destination for o in self.outcomes if o.saved})

    @property
    def overwrite_count(self) -> int:
        return sum(1 for o in self.outcomes if o.saved and o.overwrote_previous)

    @property
    def failure_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.saved)

    @property
    def failures(self) -> List[SaveOutcome]:
        return [o for o in self.outcomes if not o.saved]

    def summary(self) -> dict:
        return {
            "source": self.source_path,
            "mode": self.doc_class.value,
            "output_dir": self.output_dir,
            "saved": self.saved_count,
            "failed": self.failure_count,
            "overwritten": self.overwrite_count,
            "failures": [
                {"destination": o.destination, "error": o.error} for o in self.failures
            ],
        }
