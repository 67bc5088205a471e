# salesboard/core/errors.py


class SalesboardError(Exception):
    pass


class FileReadFailure(SalesboardError):
    """Uploaded file is missing, unreadable or not parseable as CSV."""

    def __init__(self, path, reason):
        self.path = str(path)
        super().__init__(f"Could not read {self.path}: {reason}")


class PersistenceFailure(SalesboardError):
    """A batch insert failed and the whole batch was rolled back."""


class NetworkFailure(SalesboardError):
    """Dashboard could not reach the API or the API rejected the request."""
