"""T2.02 — Histogram Summary. ★★

Compact description of the pattern histogram: total occurrences, distinct
buckets, most frequent buckets, Shannon entropy in bits, and the bounding
box of the filled cells.
"""

from __future__ import annotations

import numpy as np

from mizlab.engine.context import TrajectoryContext
from mizlab.engine.registry import Layer, transform


def histogram_entropy(histogram: np.ndarray) -> float:
    """Shannon entropy (bits) of the normalized histogram. Empty → 0."""
    total = histogram.sum()
    if total == 0:
        return 0.0
    p = histogram[histogram > 0] / total
    return float(-np.sum(p * np.log2(p)))


@transform(
    id="T2.02",
    layer=Layer.SUMMARY,
    dependencies=["T1.02"],
    description="Summarize the pattern histogram",
)
def histogram_summary(ctx: TrajectoryContext) -> None:
    hist = ctx.histogram
    if hist is None:
        raise ValueError("Histogram not computed")

    nonzero = np.flatnonzero(hist)
    # Most frequent first; ties by bucket index
    order = sorted(nonzero.tolist(), key=lambda b: (-int(hist[b]), b))
    top = order[: ctx.config.top_patterns]

    ctx.features["total_patterns"] = int(hist.sum())
    ctx.features["distinct_patterns"] = int(len(nonzero))
    ctx.features["top_patterns"] = [(int(b), int(hist[b])) for b in top]
    ctx.features["entropy_bits"] = round(histogram_entropy(hist), 4)

    if ctx.filled:
        xs = [x for x, _ in ctx.filled]
        ys = [y for _, y in ctx.filled]
        ctx.features["bbox"] = (min(xs), min(ys), max(xs), max(ys))
    else:
        ctx.features["bbox"] = None
