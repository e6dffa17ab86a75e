"""Application version source for GET /api/info.

The value is captured from settings when the app is built and never changes
for the lifetime of the process.
"""

from __future__ import annotations


class VersionProvider:
    def __init__(self, version: str | None):
        self._version = version or ""

    def get_version(self) -> str:
        return self._version
