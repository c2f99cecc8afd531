"""CLI configuration: database URL, display width."""

import os

from fiscal_kernel.db.engine import IN_MEMORY_URL

# Set FISCAL_CLI_DB_URL=sqlite:///fiscal.db to keep statuses between runs.
DB_URL = os.environ.get("FISCAL_CLI_DB_URL", IN_MEMORY_URL)

W = 80
