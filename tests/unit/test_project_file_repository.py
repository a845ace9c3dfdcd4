"""
Unit tests for ProjectFileRepository.
"""

from datetime import datetime

import pytest
from sqlalchemy import text

from app.domains.project_file.entity import ProjectFileEntity
from app.domains.project_file.repository import ProjectFileRepository
from app.exceptions.base import ValidationError
from app.shared.pagination import ListOptions


class TestProjectFileRepositoryFind:
    """Test cases for find and hydration."""

    @pytest.mark.asyncio
    async def test_find_existing(self, test_db, test_file, test_directory):
        repository = ProjectFileRepository(test_db)

        result = await repository.find(test_file.file_id)

        assert result.file_id == test_file.file_id
        assert result.file_name == "main.py"
        assert result.parent_directory == test_directory.file_id
        assert result.is_directory is False
        assert result.is_dirty is False

    @pytest.mark.asyncio
    async def test_find_nonexistent_returns_none(self, test_db):
        assert await ProjectFileRepository(test_db).find(404) is None

    @pytest.mark.asyncio
    async def test_is_directory_stored_as_integer(self, test_db, test_directory):
        result = await test_db.execute(
            text("SELECT is_directory FROM project_files WHERE file_id = :id"),
            {"id": test_directory.file_id},
        )

        assert result.scalar() == 1

    @pytest.mark.asyncio
    async def test_is_directory_hydrated_as_bool(self, test_db, test_directory):
        result = await ProjectFileRepository(test_db).find(test_directory.file_id)

        assert result.is_directory is True


class TestProjectFileRepositorySave:
    """Test cases for save."""

    @pytest.mark.asyncio
    async def test_save_new_assigns_identity(self, test_db, test_project):
        repository = ProjectFileRepository(test_db)
        project_file = ProjectFileEntity.new(project_id=test_project.project_id, file_name="README.md")

        await repository.save(project_file)

        assert project_file.file_id is not None
        assert project_file.is_dirty is False

    @pytest.mark.asyncio
    async def test_save_clean_issues_no_statements(self, test_db, test_file, executed_statements):
        executed_statements.clear()

        await ProjectFileRepository(test_db).save(test_file)

        assert executed_statements == []

    @pytest.mark.asyncio
    async def test_move_to_root(self, test_db, test_file):
        repository = ProjectFileRepository(test_db)
        test_file.parent_directory = None

        await repository.save(test_file)

        stored = await repository.find(test_file.file_id)
        assert stored.parent_directory is None


class TestProjectFileRepositoryFindAll:
    """Test cases for find_all."""

    @pytest.fixture
    def make_file(self, test_db, test_project):
        repository = ProjectFileRepository(test_db)

        async def _make(name, is_directory=False, project_id=None, parent=None):
            project_file = ProjectFileEntity.new(
                project_id=project_id or test_project.project_id,
                file_name=name,
                is_directory=is_directory,
                parent_directory=parent,
                creation_date=datetime(2024, 3, 1),
            )
            return await repository.save(project_file)

        return _make

    @pytest.mark.asyncio
    async def test_filter_by_is_directory(self, test_db, make_file):
        await make_file("docs", is_directory=True)
        await make_file("notes.txt")
        await make_file("assets", is_directory=True)

        page = await ProjectFileRepository(test_db).find_all(
            ListOptions(filters={"is_directory": True})
        )

        assert {f.file_name for f in page.items} == {"docs", "assets"}
        assert all(f.is_directory is True for f in page.items)

    @pytest.mark.asyncio
    async def test_filters_are_conjunctive(self, test_db, make_file, test_project_2):
        await make_file("report.txt")
        await make_file("report", is_directory=True)
        await make_file("report.txt", project_id=test_project_2.project_id)

        page = await ProjectFileRepository(test_db).find_all(
            ListOptions(
                filters={
                    "file_name": "report",
                    "is_directory": False,
                    "project_id": test_project_2.project_id,
                }
            )
        )

        assert page.total == 1
        assert page.items[0].project_id == test_project_2.project_id

    @pytest.mark.asyncio
    async def test_filter_by_parent_directory(self, test_db, make_file):
        folder = await make_file("folder", is_directory=True)
        await make_file("inside.txt", parent=folder.file_id)
        await make_file("outside.txt")

        page = await ProjectFileRepository(test_db).find_all(
            ListOptions(filters={"parent_directory": folder.file_id})
        )

        assert [f.file_name for f in page.items] == ["inside.txt"]

    @pytest.mark.asyncio
    async def test_total_independent_of_limit(self, test_db, make_file):
        for i in range(4):
            await make_file(f"file{i}.txt")

        page = await ProjectFileRepository(test_db).find_all(ListOptions(limit=3, offset=2))

        assert len(page.items) == 2
        assert page.total == 4

    @pytest.mark.asyncio
    async def test_zero_limit_returns_only_total(self, test_db, make_file):
        await make_file("a.txt")
        await make_file("b.txt")

        page = await ProjectFileRepository(test_db).find_all(ListOptions(limit=0))

        assert page.items == []
        assert page.total == 2

    @pytest.mark.asyncio
    async def test_sort_by_file_name(self, test_db, make_file):
        await make_file("b.txt")
        await make_file("c.txt")
        await make_file("a.txt")

        page = await ProjectFileRepository(test_db).find_all(ListOptions(sort="file_name"))

        assert [f.file_name for f in page.items] == ["a.txt", "b.txt", "c.txt"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "options",
        [
            {"sort": "1;DROP TABLE project_files"},
            {"sort": "project_id"},
            {"order": "random"},
            {"filters": {"owning_user_id": 1}},
        ],
    )
    async def test_rejected_before_any_sql(self, test_db, executed_statements, options):
        executed_statements.clear()

        with pytest.raises(ValidationError):
            await ProjectFileRepository(test_db).find_all(ListOptions(**options))

        assert executed_statements == []


class TestProjectFileRepositoryOwnership:
    """Test cases for find_owned."""

    @pytest.mark.asyncio
    async def test_owner_can_resolve_file(self, test_db, test_project, test_file):
        result = await ProjectFileRepository(test_db).find_owned(
            test_project.project_id, test_project.owning_user_id, test_file.file_id
        )

        assert result is not None
        assert result.file_id == test_file.file_id

    @pytest.mark.asyncio
    async def test_other_user_gets_none(self, test_db, test_project, test_file):
        result = await ProjectFileRepository(test_db).find_owned(
            test_project.project_id, 999, test_file.file_id
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_wrong_project_gets_none(self, test_db, test_project_2, test_file):
        result = await ProjectFileRepository(test_db).find_owned(
            test_project_2.project_id, test_project_2.owning_user_id, test_file.file_id
        )

        assert result is None


class TestProjectFileRepositoryCounts:
    """Test cases for the tree helper queries."""

    @pytest.mark.asyncio
    async def test_count_children(self, test_db, test_directory, test_file):
        repository = ProjectFileRepository(test_db)

        assert await repository.count_children(test_directory.file_id) == 1
        assert await repository.count_children(test_file.file_id) == 0

    @pytest.mark.asyncio
    async def test_find_children(self, test_db, test_project, test_directory, test_file):
        repository = ProjectFileRepository(test_db)
        second = await repository.save(
            ProjectFileEntity.new(
                project_id=test_project.project_id,
                file_name="util.py",
                parent_directory=test_directory.file_id,
            )
        )

        children = await repository.find_children(test_directory.file_id)

        assert [child.file_id for child in children] == [test_file.file_id, second.file_id]
        assert all(child.is_dirty is False for child in children)
        assert await repository.find_children(test_file.file_id) == []

    @pytest.mark.asyncio
    async def test_count_in_project(self, test_db, test_project, test_project_2, test_file):
        repository = ProjectFileRepository(test_db)

        assert await repository.count_in_project(test_project.project_id) == 2
        assert await repository.count_in_project(test_project_2.project_id) == 0

    @pytest.mark.asyncio
    async def test_delete_nonexistent_returns_false(self, test_db, executed_statements):
        executed_statements.clear()

        assert await ProjectFileRepository(test_db).delete_by_id(31337) is False
        assert not any(sql.startswith("SELECT") for sql in executed_statements)
