from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Optional


class VerbosityLevel(IntEnum):
    QUIET = 0
    VERBOSE = 1
    DEBUG = 2


class FindingCategory(Enum):
    """
    Outcome of auditing one service.
    Each value is (label, minimum verbosity at which it is shown, rich style).
    """
    VULNERABLE = ("VULNERABLE", VerbosityLevel.QUIET, "bold red")
    SAFE = ("SAFE", VerbosityLevel.VERBOSE, "green")
    NO_PATH_CONFIGURED = ("NO PATH", VerbosityLevel.VERBOSE, "dim")
    PATH_MISSING = ("MISSING", VerbosityLevel.DEBUG, "yellow")
    LOOKUP_ERROR = ("ACL ERROR", VerbosityLevel.DEBUG, "magenta")

    def __init__(self, label: str, min_verbosity: VerbosityLevel, style: str):
        self.label = label
        self.min_verbosity = min_verbosity
        self.style = style

    def is_shown(self, verbosity: int) -> bool:
        return verbosity >= self.min_verbosity


@dataclass(frozen=True)
class ServiceRecord:
    name: str
    executable_path: Optional[str] = None

    @property
    def has_path(self) -> bool:
        return bool(self.executable_path and self.executable_path.strip())


# LOOKUP_ERROR is a side report, the service itself still ends up SAFE
SERVICE_OUTCOMES = (
    FindingCategory.VULNERABLE,
    FindingCategory.SAFE,
    FindingCategory.NO_PATH_CONFIGURED,
    FindingCategory.PATH_MISSING,
)


@dataclass
class AuditSummary:
    source: Optional[str] = None
    counts: Dict[FindingCategory, int] = field(
        default_factory=lambda: {c: 0 for c in SERVICE_OUTCOMES})

    def record(self, category: FindingCategory):
        self.counts[category] = self.counts.get(category, 0) + 1

    @property
    def total(self) -> int:
        return sum(self.counts.values())
