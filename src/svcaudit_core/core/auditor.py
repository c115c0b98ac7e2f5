import os
from typing import Callable, List, Optional
from .base_source import ServiceSource
from .context import AuditContext
from ..acl import PermissionEvaluator
from ..models.findings import AuditSummary, FindingCategory, ServiceRecord
from ..output.reporter import ResultReporter
from ..sources.columnar_query import ColumnarQuerySource
from ..sources.control_query import ControlQuerySource
from ..sources.object_query import ObjectQuerySource


def default_sources(context: AuditContext, reporter: ResultReporter) -> List[ServiceSource]:
    """Sources in priority order."""
    return [
        ObjectQuerySource(context, reporter),
        ControlQuerySource(context, reporter),
        ColumnarQuerySource(context, reporter),
    ]


class ServiceAuditor:
    """
    Drives the service sources in priority order and audits every service
    of the first one that completes.
    """

    def __init__(
        self,
        context: AuditContext,
        sources: Optional[List[ServiceSource]] = None,
        evaluator: Optional[PermissionEvaluator] = None,
        reporter: Optional[ResultReporter] = None,
        path_exists: Callable[[str], bool] = os.path.exists,
    ):
        self.context = context
        self.reporter = reporter or ResultReporter()
        self.sources = sources if sources is not None else default_sources(context, self.reporter)
        self.evaluator = evaluator or PermissionEvaluator(context, self.reporter)
        self.path_exists = path_exists

    def run(self) -> AuditSummary:
        for source in self.sources:
            # a source that fails part way through does not count towards the summary
            summary = AuditSummary()

            def sink(record: ServiceRecord, summary: AuditSummary = summary):
                self.audit_service(record, summary)

            self.reporter.source_selected(source.name, self.context.verbosity)
            if source.enumerate(sink):
                summary.source = source.name
                self.reporter.summary(summary, self.context.verbosity)
                return summary

        self.reporter.no_source_available()
        return AuditSummary()

    def audit_service(self, record: ServiceRecord, summary: Optional[AuditSummary] = None) -> FindingCategory:
        category = self.classify(record)
        if summary is not None:
            summary.record(category)
        self.reporter.report(record.name, record.executable_path, category, self.context.verbosity)
        return category

    def classify(self, record: ServiceRecord) -> FindingCategory:
        if not record.has_path:
            return FindingCategory.NO_PATH_CONFIGURED
        path = record.executable_path
        if not self.path_exists(path):
            return FindingCategory.PATH_MISSING
        if self.evaluator.has_everyone_rw(path, record.name):
            return FindingCategory.VULNERABLE
        return FindingCategory.SAFE
