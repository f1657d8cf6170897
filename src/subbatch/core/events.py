"""Pipeline event system for streaming progress to external consumers.

Provides a lightweight callback mechanism that the pipeline emits events through.
Consumers (the CLI progress bar, tests) register a callback to receive
real-time updates without the pipeline depending on any display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

# Milestones in the order a successful file emits them.
STAGES = ("convert", "transcribe", "process", "write", "done")


@dataclass
class PipelineEvent:
    """A progress event emitted while processing one file.

    Attributes:
        stage: Milestone name (convert, transcribe, process, write, done).
        progress: Overall progress for the current file, 0.0 to 1.0.
        message: Human-readable status message.
        data: Optional payload (e.g. output file paths).
    """

    stage: str
    progress: float
    message: str
    data: dict | None = field(default=None)


EventCallback = Callable[[PipelineEvent], None]


def emitter(on_event: EventCallback | None) -> Callable[..., None]:
    """Return an ``emit(stage, progress, message, data=None)`` helper bound to a callback."""

    def emit(stage: str, progress: float, message: str, data: dict | None = None) -> None:
        if on_event:
            on_event(PipelineEvent(stage=stage, progress=progress, message=message, data=data))

    return emit
