"""Transform registry: each conversion stage is a plain function registered via decorator.

Usage:
    @transform(id="T1.01", layer=Layer.DECOMPOSE, dependencies=["T0.01"])
    def decompose(ctx: ConvertContext) -> None:
        for pd in ctx.active_polygons():
            pd.pieces = convex_decomposition(pd.polygon)

A new stage is one module under ``engine/layerN`` with the decorator.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from polydisplay.engine.context import ConvertContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    PREPARE = 0
    DECOMPOSE = 1
    CONVERT = 2
    ASSEMBLE = 3


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["ConvertContext"], None]
    dependencies: list[str] = field(default_factory=list)
    tags: set[str] = field(default_factory=set)
    description: str = ""


class TransformRegistry:
    """Registry of conversion stages, keyed by transform id."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        return sorted((s for s in self._transforms.values() if s.layer == layer), key=lambda s: s.id)

    def with_tag(self, tag: str) -> set[str]:
        return {tid for tid, s in self._transforms.items() if tag in s.tags}

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: (s.layer, s.id))

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[TransformSpec]:
        """Dependency-respecting order (Kahn, ties broken by id). None means every transform."""
        pool = self._transforms
        if requested_ids is not None:
            # pull in transitive dependencies
            expanded: set[str] = set()
            stack = list(requested_ids)
            while stack:
                tid = stack.pop()
                if tid in expanded or tid not in pool:
                    continue
                expanded.add(tid)
                stack.extend(pool[tid].dependencies)
            pool = {k: v for k, v in pool.items() if k in expanded}

        in_degree = {tid: sum(1 for dep in spec.dependencies if dep in pool) for tid, spec in pool.items()}
        queue = sorted(tid for tid, d in in_degree.items() if d == 0)
        ordered: list[TransformSpec] = []

        while queue:
            tid = queue.pop(0)
            ordered.append(pool[tid])
            for other_id, other_spec in pool.items():
                if tid in other_spec.dependencies:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        queue.append(other_id)
                        queue.sort()

        if len(ordered) != len(pool):
            missing = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {sorted(missing)}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    tags: set[str] | None = None,
    description: str = "",
    registry: TransformRegistry | None = None,
):
    """Decorator registering a stage function (on the module registry unless one is given)."""

    def decorator(fn: Callable[["ConvertContext"], None]):
        (registry or _registry).register(
            TransformSpec(
                id=id,
                layer=layer,
                fn=fn,
                dependencies=dependencies or [],
                tags=tags or set(),
                description=description,
            )
        )
        return fn

    return decorator
