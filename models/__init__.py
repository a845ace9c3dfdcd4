"""
Models package initialization.
"""

from .base import Base, BaseModel, IntFlag
from .project import Project
from .project_file import ProjectFile

__all__ = [
    "Base",
    "BaseModel",
    "IntFlag",
    "Project",
    "ProjectFile",
]
