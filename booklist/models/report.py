# booklist/models/report.py
"""
Run-level error reporting.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .book import BookRecord


@dataclass
class RecordFailure:
    """A single record that failed at one pipeline stage"""
    isbn: str
    title: str
    stage: str
    message: str


@dataclass
class RunReport:
    """
    Outcome of one pipeline run.

    Failed records are reported here instead of aborting the run.
    """
    records: List[BookRecord] = field(default_factory=list)
    failures: List[RecordFailure] = field(default_factory=list)
    provider: Optional[str] = None
    output_written: bool = False

    def add_failure(self, record: BookRecord, stage: str, error: Exception) -> None:
        self.failures.append(
            RecordFailure(isbn=record.isbn, title=record.title, stage=stage, message=str(error))
        )

    def failures_for(self, stage: str) -> List[RecordFailure]:
        return [failure for failure in self.failures if failure.stage == stage]

    @property
    def success(self) -> bool:
        return self.output_written and not self.failures

    def summary(self) -> Dict:
        """Get a summary dict for reporting"""
        stages: Dict[str, int] = {}
        for failure in self.failures:
            stages[failure.stage] = stages.get(failure.stage, 0) + 1

        return {
            "records": len(self.records),
            "failures": len(self.failures),
            "failures_by_stage": stages,
            "provider": self.provider,
            "with_cover": sum(1 for record in self.records if record.cover),
            "with_description": sum(1 for record in self.records if record.description),
            "output_written": self.output_written,
        }
