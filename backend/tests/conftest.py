"""Root conftest: shared test configuration."""

import os

# Ensure tests never reach a real database or wait on the simulated processor
os.environ.setdefault("SALESDESK_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SALESDESK_PAYMENT_DELAY_SECONDS", "0")
os.environ.setdefault("SALESDESK_LOG_FORMAT", "text")
