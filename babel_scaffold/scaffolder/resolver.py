"""Concurrent version resolution for derived dependencies."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from babel_scaffold.registry_client import VersionLookup

from .models import DependencySpec, ResolvedDependency


class VersionResolver:
    """Turns dependency descriptors into caret version constraints.

    All lookups are started together and awaited as a group. Results keep the
    input order regardless of which lookup finishes first. If any lookup
    fails the whole resolution fails with that lookup's error; there is no
    partial result.
    """

    def __init__(self, lookup: VersionLookup) -> None:
        self.lookup = lookup

    async def _constraint(self, dep: DependencySpec) -> str:
        version = await self.lookup.lookup(dep.name)
        return f"^{version}"

    async def resolve(self, deps: Sequence[DependencySpec]) -> list[str]:
        """Return ``^<version>`` for each of *deps*, in input order."""
        return list(await asyncio.gather(*(self._constraint(dep) for dep in deps)))

    async def resolve_dependencies(
        self, deps: Sequence[DependencySpec]
    ) -> list[ResolvedDependency]:
        """Like :meth:`resolve`, but pairs each constraint with its descriptor."""
        versions = await self.resolve(deps)
        return [
            ResolvedDependency(spec=dep, version=version)
            for dep, version in zip(deps, versions)
        ]
