"""T1.02 — Pattern Histogram.

Bucket encoded patterns into the 512-bin histogram.
"""

from __future__ import annotations

from mizlab.engine.context import TrajectoryContext
from mizlab.engine.registry import Layer, transform
from mizlab.utils.patterns import pattern_histogram


@transform(
    id="T1.02",
    layer=Layer.PATTERNS,
    dependencies=["T1.01"],
    description="Accumulate patterns into a 512-bin histogram",
)
def histogram_transform(ctx: TrajectoryContext) -> None:
    ctx.histogram = pattern_histogram(ctx.patterns)
