import re
from typing import Iterator
from ..core.base_source import ServiceSource
from ..models.findings import ServiceRecord

COLUMN_GAP = re.compile(r'\s{2,}')


def parse_columnar_services(wmic_output: str) -> Iterator[ServiceRecord]:
    """
    Parses `wmic service get Name,PathName` output.

    Columns are separated by runs of two or more spaces. Everything after the
    first gap is the path, including any command line arguments the service
    was registered with.
    """
    header_seen = False
    for line in wmic_output.splitlines():
        line = line.strip()
        if not line:
            continue
        if not header_seen:
            header_seen = True
            if line.split()[0].lower() == "name":
                continue

        parts = COLUMN_GAP.split(line, maxsplit=1)
        name = parts[0]
        # quotes and arguments are kept, so a quoted PathName ends up as a missing executable
        path = parts[1].strip() if len(parts) > 1 else ""
        yield ServiceRecord(name=name, executable_path=path or None)


class ColumnarQuerySource(ServiceSource):
    """Tertiary source: wmic's columnar service listing."""

    name = "wmic columnar query"

    def iter_services(self) -> Iterator[ServiceRecord]:
        output = self.run_command([self.context.config.tools.wmic, "service", "get", "Name,PathName"])
        yield from parse_columnar_services(output)
