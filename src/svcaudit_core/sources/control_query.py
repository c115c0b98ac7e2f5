import re
import subprocess
from typing import Dict, Iterator, List, Optional
from ..core.base_source import ServiceSource
from ..errors import SourceUnavailableError
from ..models.findings import ServiceRecord

# "        BINARY_PATH_NAME   : C:\Windows\system32\svchost.exe -k netsvcs"
SC_FIELD_PATTERN = re.compile(r'^\s*([A-Z_]+)\s*:(.*)$')


def parse_service_names(sc_query_output: str) -> List[str]:
    """Extracts the SERVICE_NAME values from `sc query` output."""
    names = []
    for line in sc_query_output.splitlines():
        if line.startswith('SERVICE_NAME'):
            name = line.split(':', 1)[1].strip()
            if name:
                names.append(name)
    return names


def parse_service_config(sc_qc_output: str) -> Dict[str, str]:
    """Maps each `KEY : value` field of `sc qc` output to its stripped value."""
    fields = {}
    for line in sc_qc_output.splitlines():
        match = SC_FIELD_PATTERN.match(line)
        if match and match.group(1) not in fields:
            fields[match.group(1)] = match.group(2).strip()
    return fields


def clean_binary_path(raw: Optional[str]) -> Optional[str]:
    """
    Strips whitespace and quoting from a service binary path.
    A leading quoted section is taken as the whole path, dropping arguments after it.
    Returns None when nothing is left.
    """
    if raw is None:
        return None
    path = raw.strip()
    if path.startswith('"'):
        closing = path.find('"', 1)
        path = path[1:closing] if closing != -1 else path[1:]
    path = path.strip().strip('"').strip()
    return path or None


class ControlQuerySource(ServiceSource):
    """
    Secondary source: sc.exe. Lists service names with `sc query`, then reads each
    service's BINARY_PATH_NAME from `sc qc`.
    """

    name = "sc.exe control query"

    def iter_services(self) -> Iterator[ServiceRecord]:
        sc = self.context.config.tools.sc
        listing = self.run_command([sc, "query", "type=", "service", "state=", "all"])
        for service_name in parse_service_names(listing):
            yield self._query_service(sc, service_name)

    def _query_service(self, sc: str, service_name: str) -> ServiceRecord:
        try:
            result = subprocess.run(
                [sc, "qc", service_name],
                capture_output=True,
                text=True,
                # tools write in the OEM code page, undecodable bytes must not abort the run
                errors="replace",
                check=True,
                timeout=self.context.timeout,
            )
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired):
            # one unreadable service config leaves that service without a path
            return ServiceRecord(name=service_name)
        except OSError as e:
            raise SourceUnavailableError(self.name, f"{sc} could not be started: {e}") from e

        fields = parse_service_config(result.stdout)
        return ServiceRecord(
            name=fields.get('DISPLAY_NAME') or service_name,
            executable_path=clean_binary_path(fields.get('BINARY_PATH_NAME')),
        )
