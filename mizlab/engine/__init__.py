"""mizlab trajectory analysis engine."""

from mizlab.engine.context import TrajectoryContext, build_context
from mizlab.engine.pipeline import Pipeline, create_pipeline, register_transforms
from mizlab.engine.registry import Layer, get_registry, transform

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "TrajectoryContext",
    "build_context",
    "Pipeline",
    "create_pipeline",
    "register_transforms",
]
