"""Fatal input errors raised by the analysis pipeline."""


class AnalysisError(Exception):
    """Base class for errors that stop an ai-refactor command."""


class ScanError(AnalysisError):
    """The directory to scan does not exist."""


class BacklogNotFoundError(AnalysisError):
    """No task backlog in the analysis directory."""


class TaskNotFoundError(AnalysisError):
    """The requested task id is not in the backlog."""


class ArtifactError(AnalysisError):
    """An analysis artifact exists but cannot be parsed."""
