import sys

from svcaudit_cli.main import main

sys.exit(main())
