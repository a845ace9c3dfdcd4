# ruff: noqa: F403, F401
"""Schemas package initialization."""

from .base import *
from .project import *
from .project_file import *
