"""Log record and per-run result models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LogRecord:
    application_id: str
    level: str
    timestamp: str
    message: str

    def to_payload(self) -> dict:
        """Map the record onto the collector's wire keys."""
        return {
            "application_id": self.application_id,
            "log_level": self.level,
            "timestamp": self.timestamp,
            "log_message": self.message,
        }

    @classmethod
    def from_payload(cls, payload: dict) -> "LogRecord":
        return cls(
            application_id=payload["application_id"],
            level=payload["log_level"],
            timestamp=payload["timestamp"],
            message=payload["log_message"],
        )


@dataclass
class FileResult:
    """Outcome counters for one processed file."""

    path: str
    uploaded: int = 0
    failed: int = 0
    malformed: int = 0
    error: str | None = None


@dataclass
class RunSummary:
    """Aggregate of every FileResult produced by one directory run."""

    results: list[FileResult] = field(default_factory=list)

    @property
    def files(self) -> int:
        return len(self.results)

    @property
    def uploaded(self) -> int:
        return sum(r.uploaded for r in self.results)

    @property
    def failed(self) -> int:
        return sum(r.failed for r in self.results)

    @property
    def malformed(self) -> int:
        return sum(r.malformed for r in self.results)

    @property
    def file_errors(self) -> int:
        return sum(1 for r in self.results if r.error is not None)

    def add(self, result: FileResult):
        self.results.append(result)
