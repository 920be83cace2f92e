"""
Test environment overrides. Runs before any rolegate module is imported,
so cached settings pick these values up.
"""

import os

# In-memory SQLite keeps import of rolegate.core.database free of a Postgres driver.
os.environ.setdefault("DATABASE_URL", "sqlite://")
# Minimum bcrypt cost keeps hashing fast in tests.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
