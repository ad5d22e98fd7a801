"""
Repository pipeline.

Core Components:
- Action: The primitive actions (create, save, update, delete)
- PipeRegistry: Frozen per-repository pipe configuration
- PipelineBuilder: Assembles the pipe stack for one call
- Pipeline: Runs a payload through the stack and into a destination

Usage:
    from repository_pipes.pipeline import Pipeline, PipelineBuilder, PipeRegistry

    registry = PipeRegistry.from_config(pipes={"save": [Normalize]})
    builder = PipelineBuilder(registry)
    stack = builder.apply_primitives_for("create").build()

    result = Pipeline(stack).run(data, persist)
"""

from .actions import Action, PRIMITIVE_ACTIONS, SAVE_FUNNELLED_ACTIONS
from .registry import PipeRegistry
from .builder import PipelineBuilder
from .executor import Pipeline, resolve_pipe

__all__ = [
    "Action",
    "PRIMITIVE_ACTIONS",
    "SAVE_FUNNELLED_ACTIONS",
    "PipeRegistry",
    "PipelineBuilder",
    "Pipeline",
    "resolve_pipe",
]
