"""Async client for the npm registry.

Looks up the latest published version of a package via the registry's
``/<package>/latest`` document. Used by ``VersionResolver`` to pin every
dependency a scaffold run adds to ``package.json``.

Typical usage::

    client = NpmRegistryClient()
    version = await client.lookup("babel-cli")   # e.g. "6.26.0"
"""

from __future__ import annotations

from typing import Protocol
from urllib.parse import quote

import httpx

from babel_scaffold.config import DEFAULT_REGISTRY_URL
from babel_scaffold.errors import VersionLookupError


class VersionLookup(Protocol):
    """Anything that can map a package name to its current published version."""

    async def lookup(self, package: str) -> str:
        ...


class NpmRegistryClient:
    """Async client for the npm registry REST API.

    Each lookup opens its own ``httpx.AsyncClient`` so lookups issued
    concurrently do not share connection state.
    """

    def __init__(self, base_url: str = DEFAULT_REGISTRY_URL, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our base URL and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers={"Accept": "application/json"},
        )

    @staticmethod
    def _latest_path(package: str) -> str:
        """Registry path of the ``latest`` dist-tag document.

        Scoped names keep their ``@`` but have the ``/`` escaped, as the
        registry expects (``@scope/pkg`` -> ``/@scope%2Fpkg/latest``).
        """
        return f"/{quote(package, safe='@')}/latest"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def lookup(self, package: str) -> str:
        """Return the version string currently tagged ``latest`` for *package*.

        Raises:
            VersionLookupError: If the package is unknown, the registry is
                unreachable or answers with an error, or the response carries
                no version.
        """
        try:
            async with self._client() as client:
                response = await client.get(self._latest_path(package))
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                raise VersionLookupError(package, "package not found in registry") from exc
            raise VersionLookupError(
                package, f"registry returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise VersionLookupError(
                package, f"request to {self.base_url} timed out after {self.timeout}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise VersionLookupError(
                package, f"cannot reach registry at {self.base_url} ({exc})"
            ) from exc
        except ValueError as exc:
            raise VersionLookupError(package, "registry returned invalid JSON") from exc

        version = data.get("version") if isinstance(data, dict) else None
        if not isinstance(version, str) or not version:
            raise VersionLookupError(package, "registry response has no version")
        return version
