"""Pipeline orchestrator — runs transforms in dependency order with adaptive gating."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time
from collections.abc import Generator
from typing import Any

from mizlab.engine.config import PipelineConfig
from mizlab.engine.context import TrajectoryContext
from mizlab.engine.registry import Layer, TransformRegistry, TransformSpec, get_registry

logger = logging.getLogger(__name__)

_LAYER_PACKAGES = ["layer0", "layer1", "layer2"]

OK = "ok"
ERROR = "error"
SKIPPED = "skipped"


class Pipeline:
    """Orchestrates the transform pipeline."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, ctx: TrajectoryContext) -> TrajectoryContext:
        """Run the full pipeline on the given context."""
        start = time.perf_counter()
        ordered, skip_ids = self._plan(ctx)

        logger.info(
            "Pipeline: %d transforms queued (%d gated)",
            len(ordered),
            len(skip_ids),
        )

        for spec in ordered:
            t0 = time.perf_counter()
            if self._run_spec(spec, ctx) == OK:
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms in %.0fms (%d failed, %d skipped)",
            len(ctx.completed_transforms),
            len(ordered),
            total,
            len(ctx.errors),
            len(ctx.skipped_transforms),
        )
        return ctx

    def run_streaming(self, ctx: TrajectoryContext) -> Generator[dict[str, Any], None, None]:
        """Run the pipeline, yielding a progress dict after each transform.

        The caller's ``ctx`` is mutated in-place, so after the generator is
        exhausted the context contains all results (same as ``run()``).
        """
        ordered, _ = self._plan(ctx)
        total = len(ordered)

        for i, spec in enumerate(ordered):
            t0 = time.perf_counter()
            status = self._run_spec(spec, ctx)
            if status == SKIPPED:
                message = f"dependency {ctx.skipped_transforms[spec.id]} did not complete"
            else:
                message = ctx.errors.get(spec.id, "")
            yield {
                "transform_id": spec.id,
                "description": spec.description,
                "layer": spec.layer.name,
                "index": i,
                "total": total,
                "elapsed_ms": round((time.perf_counter() - t0) * 1000, 1),
                "status": status,
                "error": message,
            }

    def run_layer(self, ctx: TrajectoryContext, layer: Layer) -> TrajectoryContext:
        """Run only transforms in a specific layer."""
        for spec in self.registry.get_layer(layer):
            self._run_spec(spec, ctx)
        return ctx

    def _run_spec(self, spec: TransformSpec, ctx: TrajectoryContext) -> str:
        # Downstream of a failure the context holds defaults, not results
        blocked = next(
            (d for d in spec.dependencies if d in ctx.errors or d in ctx.skipped_transforms),
            None,
        )
        if blocked is not None:
            ctx.skipped_transforms[spec.id] = blocked
            logger.info("  %s skipped: %s did not complete", spec.id, blocked)
            return SKIPPED

        ctx.config = self.config
        try:
            spec.fn(ctx)
            ctx.completed_transforms.add(spec.id)
            return OK
        except Exception as e:
            ctx.errors[spec.id] = str(e)
            logger.warning("  %s FAILED: %s", spec.id, e)
            return ERROR

    def _plan(self, ctx: TrajectoryContext) -> tuple[list[TransformSpec], set[str]]:
        skip_ids = self._adaptive_gate(ctx)
        requested = {s.id for s in self.registry.all()} - skip_ids
        return self.registry.resolve_order(requested), skip_ids

    def _adaptive_gate(self, ctx: TrajectoryContext) -> set[str]:
        """Determine which transforms to skip based on trajectory shape.

        - Fewer than two points fill no cells: nothing to render as text.
        Pattern and histogram transforms always run so the histogram is
        present (all zeros) even for degenerate trajectories.
        """
        skip: set[str] = set()
        if ctx.num_segments == 0:
            skip.add("T2.01")  # ASCII grid
        return skip


def register_transforms() -> None:
    """Import all transform modules so @transform decorators fire."""
    for layer_name in _LAYER_PACKAGES:
        package = importlib.import_module(f"mizlab.engine.{layer_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    return Pipeline(config=config)
