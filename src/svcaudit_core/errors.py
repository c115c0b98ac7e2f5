class SvcAuditError(Exception):
    """Base class for audit errors."""


class SourceUnavailableError(SvcAuditError):
    """The enumeration mechanism behind a service source could not be used."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class AclLookupError(SvcAuditError):
    """icacls could not report the ACL of a path."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ConfigError(SvcAuditError):
    pass
