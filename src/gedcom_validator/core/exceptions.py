class PipelineError(Exception):
    """Base exception for pipeline failures."""


class InputFileError(PipelineError):
    """Raised when the input file is missing or cannot be read."""


class ParseExecutionError(PipelineError):
    """Raised when the pipeline fails for any other reason."""
