"""Global test fixtures."""

import os

import logfire

# Set JWT secret before any test modules import Config
# This must happen at module load time, not in a fixture
os.environ.setdefault("SWEEP_AUTH__JWT__SECRET", "test-secret-for-unit-tests-min-32")
os.environ.setdefault("SWEEP_DATABASE__URL", "sqlite+aiosqlite:///:memory:")

# Importing the app module instruments FastAPI; keep logfire local
logfire.configure(send_to_logfire=False, console=False)
