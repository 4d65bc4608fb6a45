"""Background puzzle generation: tasks, executors and the event log."""

from . import log
from .executor import Executor, GenerationHandle, SequentialExecutor, ThreadedExecutor, execute
from .pipeline import GeneratedPuzzle, generate_puzzle
from .task import GenerationResult, GenerationTask

__all__ = [
    "Executor",
    "GeneratedPuzzle",
    "GenerationHandle",
    "GenerationResult",
    "GenerationTask",
    "SequentialExecutor",
    "ThreadedExecutor",
    "execute",
    "generate_puzzle",
    "log",
]
