"""
Everyone-group access check for service executables.

The check shells out to icacls and scans its text output. The match is
deliberately literal: any Everyone entry whose parenthesised flag list
contains an R or a W counts, so "(RX)" matches and "(F)" does not.
"""
import re
import subprocess
from typing import Optional

from .core.context import AuditContext
from .errors import AclLookupError
from .models.findings import FindingCategory
from .output.reporter import ResultReporter

EVERYONE_RW_PATTERN = re.compile(r"Everyone:\(.*(R|W).*\)")


def parse_everyone_rw(acl_text: str) -> bool:
    return EVERYONE_RW_PATTERN.search(acl_text) is not None


def query_acl(path: str, icacls: str = "icacls", timeout: Optional[float] = None) -> str:
    """Returns the raw icacls output for path, raising AclLookupError on any failure."""
    try:
        result = subprocess.run(
            [icacls, path],
            capture_output=True,
            text=True,
            # tools write in the OEM code page, undecodable bytes must not abort the run
            errors="replace",
            check=True,
            timeout=timeout,
        )
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or e.stdout or "").strip() or f"exit status {e.returncode}"
        raise AclLookupError(path, detail) from e
    except subprocess.TimeoutExpired as e:
        raise AclLookupError(path, f"timed out after {e.timeout}s") from e
    except OSError as e:
        raise AclLookupError(path, str(e)) from e
    return result.stdout


class PermissionEvaluator:
    def __init__(self, context: AuditContext, reporter: Optional[ResultReporter] = None):
        self.context = context
        self.reporter = reporter

    def has_everyone_rw(self, path: str, service_name: str = "") -> bool:
        try:
            acl_text = query_acl(path, self.context.config.tools.icacls, self.context.timeout)
        except AclLookupError as e:
            if self.reporter is not None:
                self.reporter.report(service_name or path, f"{path} ({e.reason})",
                                     FindingCategory.LOOKUP_ERROR, self.context.verbosity)
            return False
        return parse_everyone_rw(acl_text)


def has_everyone_rw(path: str, context: AuditContext, reporter: Optional[ResultReporter] = None) -> bool:
    return PermissionEvaluator(context, reporter).has_everyone_rw(path)
