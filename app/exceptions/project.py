"""Project and project file exceptions."""

from .base import BaseAppException


class ProjectNotFoundError(BaseAppException):
    """Raised when a project is not found."""

    def __init__(self, message: str = "Project not found"):
        super().__init__(message=message, status_code=404, error_code="PROJECT_NOT_FOUND")


class ProjectFileNotFoundError(BaseAppException):
    """Raised when a project file is not found."""

    def __init__(self, message: str = "Project file not found"):
        super().__init__(message=message, status_code=404, error_code="PROJECT_FILE_NOT_FOUND")


class InvalidFileTreeError(BaseAppException):
    """Raised when a change would break the project's directory tree."""

    def __init__(self, message: str = "Invalid file tree operation"):
        super().__init__(message=message, status_code=400, error_code="INVALID_FILE_TREE")


class FileContentNotFoundError(BaseAppException):
    """Raised when a file row exists but no content has been uploaded for it."""

    def __init__(self, message: str = "File content not found"):
        super().__init__(message=message, status_code=404, error_code="FILE_CONTENT_NOT_FOUND")


class ProjectNotEmptyError(BaseAppException):
    """Raised when deleting a project that still has files."""

    def __init__(self, message: str = "Project still contains files"):
        super().__init__(message=message, status_code=409, error_code="PROJECT_NOT_EMPTY")
