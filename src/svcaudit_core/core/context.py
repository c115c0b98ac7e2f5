from dataclasses import dataclass, field
from ..config import AuditConfig
from ..models.findings import VerbosityLevel

@dataclass(frozen=True)
class AuditContext:
    verbosity: VerbosityLevel = VerbosityLevel.QUIET
    config: AuditConfig = field(default_factory=AuditConfig)

    @property
    def timeout(self):
        return self.config.command_timeout
