from reflection_eval.observability.events import LLMCallEvent, TraceRecord
from reflection_eval.observability.tracing import (
    JsonlTraceSink,
    TraceSink,
    log_trace_best_effort,
)

__all__ = [
    "JsonlTraceSink",
    "LLMCallEvent",
    "TraceRecord",
    "TraceSink",
    "log_trace_best_effort",
]
