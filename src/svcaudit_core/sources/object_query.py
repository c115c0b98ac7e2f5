from typing import Iterator
import psutil
from ..core.base_source import ServiceSource
from ..errors import SourceUnavailableError
from ..models.findings import ServiceRecord
from .control_query import clean_binary_path

class ObjectQuerySource(ServiceSource):
    """
    Primary source: the service control manager's service objects, read through psutil.
    Each object exposes a structured binary path field.
    """

    name = "service object query"

    def iter_services(self) -> Iterator[ServiceRecord]:
        # psutil only provides the service API on Windows
        service_iter = getattr(psutil, "win_service_iter", None)
        if service_iter is None:
            raise SourceUnavailableError(self.name, "psutil has no Windows service API on this platform")

        try:
            services = service_iter()
        except (psutil.Error, OSError) as e:
            raise SourceUnavailableError(self.name, str(e)) from e

        while True:
            try:
                service = next(services)
            except StopIteration:
                return
            except (psutil.Error, OSError) as e:
                raise SourceUnavailableError(self.name, str(e)) from e
            yield self._to_record(service)

    def _to_record(self, service) -> ServiceRecord:
        name = service.name()
        try:
            display_name = service.display_name() or name
        except (psutil.Error, OSError):
            display_name = name
        try:
            path = clean_binary_path(service.binpath())
        except (psutil.Error, OSError):
            # a single unreadable service config is not a source failure
            path = None
        return ServiceRecord(name=display_name, executable_path=path)
