"""Root conftest — shared test configuration."""

import os

# Never hit a real database file or upstream from the test run
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DOG_API_BASE_URL", "https://dog.ceo/api")
os.environ.setdefault("LOG_FORMAT", "text")
