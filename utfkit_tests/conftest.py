import sys

import structlog

# keep stdout clean for doctests and the CLI tests, logs go to stderr like the CLI does
structlog.configure(logger_factory=structlog.PrintLoggerFactory(sys.stderr))
