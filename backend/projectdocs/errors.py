"""Error types raised by the store and the document services.

Store lookups report a missing record with ``None``/``False``; service
operations raise one of the errors below so an invalid operation never
succeeds silently.
"""


class ProjectDocsError(Exception):
    """Base class for all project document errors."""
    pass


class NotFoundError(ProjectDocsError, LookupError):
    """Raised when an id is absent from its collection."""

    def __init__(self, collection: str, record_id: str | None):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record not found: {record_id}")


class ValidationError(ProjectDocsError, ValueError):
    """Raised when a required field is empty or a value is not allowed."""
    pass


class DuplicateIdError(ValidationError):
    """Raised when creating a record whose id already exists."""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} already contains id: {record_id}")


class CycleError(ProjectDocsError):
    """Raised when re-parenting a folder would create a loop."""
    pass


class CrossProjectError(ProjectDocsError):
    """Raised when a folder or file would move across project boundaries."""
    pass


class AccessDeniedError(ProjectDocsError):
    """Raised when a requester may not act on a folder."""
    pass


class ProjectClosedError(ProjectDocsError):
    """Raised when uploading into an ordinary folder of a closed project."""
    pass


class StorageUnavailable(ProjectDocsError):
    """Raised when the backing persistence cannot be read or written."""
    pass
