import subprocess
from abc import ABC, abstractmethod
from typing import Callable, Iterator, List, Optional
from .context import AuditContext
from ..errors import SourceUnavailableError
from ..models.findings import ServiceRecord
from ..output.reporter import ResultReporter

class ServiceSource(ABC):
    """
    Abstract base class for service inventory sources (object query, sc.exe, wmic).
    Responsibility: find *which* services exist and which executable each one launches.
    """

    name = "service source"

    def __init__(self, context: AuditContext, reporter: Optional[ResultReporter] = None):
        self.context = context
        self.reporter = reporter

    @abstractmethod
    def iter_services(self) -> Iterator[ServiceRecord]:
        """
        Yields one ServiceRecord per installed service, as soon as it is resolved.
        Raises SourceUnavailableError when the underlying mechanism cannot be used.
        """
        pass

    def enumerate(self, sink: Callable[[ServiceRecord], None]) -> bool:
        """
        Streams every record into sink.

        Returns:
            False if the enumeration mechanism failed, True otherwise
            (including a complete enumeration that found no services).
        """
        services = self.iter_services()
        while True:
            # Only failures raised by the source count; sink errors are not swallowed here
            try:
                record = next(services)
            except StopIteration:
                return True
            except (SourceUnavailableError, OSError, subprocess.SubprocessError) as e:
                if self.reporter is not None:
                    self.reporter.source_unavailable(self.name, e, self.context.verbosity)
                return False
            sink(record)

    def run_command(self, args: List[str]) -> str:
        """Runs an enumeration command, mapping every failure to SourceUnavailableError."""
        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                # tools write in the OEM code page, undecodable bytes must not abort the run
                errors="replace",
                check=True,
                timeout=self.context.timeout,
            )
        except subprocess.CalledProcessError as e:
            raise SourceUnavailableError(self.name, f"{args[0]} exited with status {e.returncode}") from e
        except subprocess.TimeoutExpired as e:
            raise SourceUnavailableError(self.name, f"{args[0]} timed out after {e.timeout}s") from e
        except OSError as e:
            raise SourceUnavailableError(self.name, f"{args[0]} could not be started: {e}") from e
        return result.stdout
