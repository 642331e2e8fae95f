"""Pipeline orchestration: context and errors. The runner lives in ``core.pipeline``."""

from .context import ParseContext
from .exceptions import InputFileError, ParseExecutionError, PipelineError

__all__ = [
    "InputFileError",
    "ParseContext",
    "ParseExecutionError",
    "PipelineError",
]
