"""
Project table.
"""

from sqlalchemy import Column, Integer, String

from .base import BaseModel


class Project(BaseModel):
    """
    A project owned by a single user.
    """

    __tablename__ = "projects"

    project_id = Column(Integer, primary_key=True, autoincrement=True)
    owning_user_id = Column(Integer, nullable=False, index=True)
    project_name = Column(String(255), nullable=False)
