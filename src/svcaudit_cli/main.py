import argparse
import sys
from typing import List, Optional
from rich.console import Console

from svcaudit_core.config import load_config
from svcaudit_core.core.auditor import ServiceAuditor
from svcaudit_core.core.context import AuditContext
from svcaudit_core.errors import ConfigError
from svcaudit_core.models.findings import VerbosityLevel
from svcaudit_core.output.reporter import ResultReporter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svcaudit",
        description="""
            SVCAUDIT:
            Audits the installed Windows services for executables that the
            Everyone group can read or write. A service whose binary can be
            replaced runs the replacement under the service account.
        """
    )
    parser.add_argument(
        '-v', '--verbosity',
        type=int,
        choices=[int(level) for level in VerbosityLevel],
        default=int(VerbosityLevel.QUIET),
        help="""
            0 prints only vulnerable services, 1 adds safe services and
            services without a configured path, 2 adds missing executables,
            ACL lookup errors and source diagnostics.
        """
    )
    return parser


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    try:
        config = load_config()
    except ConfigError as e:
        console.print(str(e), style="bold red", markup=False)
        return 2

    context = AuditContext(verbosity=VerbosityLevel(args.verbosity), config=config)
    ServiceAuditor(context, reporter=ResultReporter(console)).run()
    # findings are reported on stdout only, never through the exit status
    return 0


if __name__ == "__main__":
    sys.exit(main())
