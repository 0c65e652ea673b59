"""Pytest configuration and fixtures shared across all test modules.

This file is loaded by pytest before any test module. It sets TESTING so a
developer's .env file is not loaded into the settings under test.
"""

import os

# Must run before any import that builds settings
os.environ["TESTING"] = "true"

os.environ.setdefault("CRPT_API_URL", "https://ismp.example.test/api/v3/lk/documents/create")
os.environ.setdefault("CRPT_TIME_UNIT", "seconds")
os.environ.setdefault("CRPT_REQUEST_LIMIT", "10")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
