# tests/conftest.py
import os


def pytest_sessionstart(session):
    # A developer's shell must not change what the tests see.
    for key in list(os.environ):
        if key.startswith("LINEPARSE_"):
            os.environ.pop(key, None)
