class ClassificationError(Exception):
    """Raised when the completion call for a classification fails."""


class ClassificationNetworkError(ClassificationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
