"""T1.01 — Pattern Extraction. ★★★

One 9-bit occupancy pattern per distinct 3×3 window center touching a
filled cell.
"""

from __future__ import annotations

from mizlab.engine.context import TrajectoryContext
from mizlab.engine.registry import Layer, transform
from mizlab.utils.patterns import extract_patterns


@transform(
    id="T1.01",
    layer=Layer.PATTERNS,
    dependencies=["T0.02"],
    description="Extract 3x3 neighborhood patterns over filled cells",
)
def pattern_extraction(ctx: TrajectoryContext) -> None:
    ctx.patterns = extract_patterns(ctx.filled)
