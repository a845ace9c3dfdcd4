"""
Project file table.

Rows form a tree per project: ``parent_directory`` points at another row of
the same table, ``NULL`` meaning the node sits at the project root.
"""

from sqlalchemy import Column, ForeignKey, Integer, String

from .base import BaseModel, IntFlag


class ProjectFile(BaseModel):
    """
    A file or directory node inside a project.
    """

    __tablename__ = "project_files"

    file_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.project_id"), nullable=False, index=True)
    parent_directory = Column(Integer, ForeignKey("project_files.file_id"), nullable=True)
    file_name = Column(String(255), nullable=False)
    is_directory = Column(IntFlag(), nullable=False, default=False)
