"""Transform registry for the trajectory pipeline.

Each transform is a plain function over a ``TrajectoryContext``, registered at
import time:

    @transform(id="T1.01", layer=Layer.PATTERNS, dependencies=["T0.02"])
    def pattern_extraction(ctx: TrajectoryContext) -> None:
        ctx.patterns = extract_patterns(ctx.filled)

The pipeline never names transforms directly; it asks the registry for a
dependency-first order.
"""

from __future__ import annotations

import enum
import heapq
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mizlab.engine.context import TrajectoryContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    """Stage of the pipeline: cells, then patterns, then summaries."""

    RASTERIZATION = 0
    PATTERNS = 1
    SUMMARY = 2


@dataclass(frozen=True)
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[[TrajectoryContext], None]
    dependencies: tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", tuple(self.dependencies))

    @property
    def sort_key(self) -> tuple[int, str]:
        return (int(self.layer), self.id)


class TransformRegistry:
    """Transforms keyed by ID."""

    def __init__(self) -> None:
        self._specs: dict[str, TransformSpec] = {}

    @property
    def count(self) -> int:
        return len(self._specs)

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._specs:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._specs[spec.id] = spec
        logger.debug("Registered %s in layer %s", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._specs[transform_id]

    def all(self) -> list[TransformSpec]:
        return sorted(self._specs.values(), key=lambda s: s.sort_key)

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        return [s for s in self.all() if s.layer is layer]

    def resolve_order(self, requested_ids: Iterable[str] | None = None) -> list[TransformSpec]:
        """Requested transforms plus everything they need, dependencies first.

        Kahn's algorithm over the selected transforms. Among the ready ones the
        lowest (layer, id) goes next, so the order is stable. Dependencies on
        unregistered IDs are ignored.

        Raises:
            ValueError: if the selected transforms form a cycle.
        """
        if requested_ids is None:
            selected = set(self._specs)
        else:
            selected = self._with_dependencies(requested_ids)

        pending = {
            tid: {dep for dep in self._specs[tid].dependencies if dep in selected}
            for tid in selected
        }
        ready = [self._specs[tid].sort_key for tid, deps in pending.items() if not deps]
        heapq.heapify(ready)

        ordered: list[TransformSpec] = []
        while ready:
            _, tid = heapq.heappop(ready)
            ordered.append(self._specs[tid])
            for other, deps in pending.items():
                if tid in deps:
                    deps.remove(tid)
                    if not deps:
                        heapq.heappush(ready, self._specs[other].sort_key)

        if len(ordered) != len(selected):
            stuck = sorted(selected - {s.id for s in ordered})
            raise ValueError(f"Circular dependency detected among: {stuck}")
        return ordered

    def _with_dependencies(self, ids: Iterable[str]) -> set[str]:
        found: set[str] = set()

        def visit(tid: str) -> None:
            if tid in found or tid not in self._specs:
                return
            found.add(tid)
            for dep in self._specs[tid].dependencies:
                visit(dep)

        for tid in ids:
            visit(tid)
        return found


_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: Iterable[str] = (),
    description: str = "",
) -> Callable[[Callable[[TrajectoryContext], None]], Callable[[TrajectoryContext], None]]:
    """Register the decorated function with the module-level registry."""

    def decorator(fn: Callable[[TrajectoryContext], None]) -> Callable[[TrajectoryContext], None]:
        _registry.register(
            TransformSpec(
                id=id,
                layer=layer,
                fn=fn,
                dependencies=tuple(dependencies),
                description=description,
            )
        )
        return fn

    return decorator
