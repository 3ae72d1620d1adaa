"""
Application version, kept in one place so the API metadata, the health
endpoint and packaging agree.
"""

import os

APP_VERSION = "1.0.0"

# Stamped by the container build; "dev" for local runs
BUILD_SHA = os.environ.get("BUILD_SHA", "dev")


def get_full_version() -> str:
    """Version string with the short commit appended for non-dev builds."""
    if BUILD_SHA != "dev":
        return f"{APP_VERSION}+{BUILD_SHA[:8]}"
    return APP_VERSION
