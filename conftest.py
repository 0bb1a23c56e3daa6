"""Global pytest configuration."""

import os

# Tests run against the in-memory user store unless a fixture binds SQL
os.environ.pop("DATABASE_URL", None)
os.environ["DEFAULT_ORGANIZATION"] = ""
