# tests/conftest.py
import os

# Set up test environment variables BEFORE any other imports
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DATABASE_URL", os.environ["TEST_DATABASE_URL"])

import io
from datetime import datetime

import pytest
import pytest_asyncio
from botocore.exceptions import ClientError
from botocore.response import StreamingBody
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.dependencies import get_object_store
from app.database import get_db
from app.domains.project.entity import ProjectEntity
from app.domains.project.repository import ProjectRepository
from app.domains.project_file.entity import ProjectFileEntity
from app.domains.project_file.repository import ProjectFileRepository
from app.main import app
from app.services.object_store import ObjectStore
from models import Base

TEST_DATABASE_URL = os.environ["TEST_DATABASE_URL"]


class InMemoryS3Client:
    """Stands in for a boto3 S3 client; keeps objects in a dict."""

    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}

    def put_object(self, Bucket, Key, Body):
        self.objects[(Bucket, Key)] = Body if isinstance(Body, bytes) else Body.encode("utf-8")
        return {"ETag": '"test"'}

    def get_object(self, Bucket, Key):
        try:
            data = self.objects[(Bucket, Key)]
        except KeyError:
            raise ClientError(
                {"Error": {"Code": "NoSuchKey", "Message": "The specified key does not exist."}},
                "GetObject",
            ) from None
        return {"Body": StreamingBody(io.BytesIO(data), len(data))}

    def delete_object(self, Bucket, Key):
        self.objects.pop((Bucket, Key), None)
        return {}


@pytest_asyncio.fixture
async def test_engine():
    """In-memory database shared by every connection of one test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(test_engine):
    """Create a test database session."""
    TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with TestSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


@pytest.fixture
def executed_statements(test_engine):
    """Every SQL statement sent to the database during the test."""
    statements: list[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(test_engine.sync_engine, "before_cursor_execute", record)
    yield statements
    event.remove(test_engine.sync_engine, "before_cursor_execute", record)


@pytest.fixture
def s3_client():
    return InMemoryS3Client()


@pytest.fixture
def object_store(s3_client):
    return ObjectStore("test-bucket", s3_client)


@pytest_asyncio.fixture
async def client(test_db, object_store):
    """Create a test client with database and object store overrides."""
    app.dependency_overrides[get_db] = lambda: test_db
    app.dependency_overrides[get_object_store] = lambda: object_store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# Project fixtures
@pytest_asyncio.fixture
async def test_project(test_db):
    """Create a test project owned by user 1."""
    project = ProjectEntity.new(
        owning_user_id=1,
        project_name="Test Project",
        creation_date=datetime(2024, 1, 1, 12, 0, 0),
    )
    return await ProjectRepository(test_db).save(project)


@pytest_asyncio.fixture
async def test_project_2(test_db):
    """Create a second project owned by user 2."""
    project = ProjectEntity.new(
        owning_user_id=2,
        project_name="Another Project",
        creation_date=datetime(2024, 2, 1, 12, 0, 0),
    )
    return await ProjectRepository(test_db).save(project)


# Project file fixtures
@pytest_asyncio.fixture
async def test_directory(test_db, test_project):
    """Create a root-level directory in the test project."""
    directory = ProjectFileEntity.new(
        project_id=test_project.project_id,
        file_name="src",
        is_directory=True,
        creation_date=datetime(2024, 1, 2, 9, 0, 0),
    )
    return await ProjectFileRepository(test_db).save(directory)


@pytest_asyncio.fixture
async def test_file(test_db, test_project, test_directory):
    """Create a file inside the test directory."""
    project_file = ProjectFileEntity.new(
        project_id=test_project.project_id,
        file_name="main.py",
        parent_directory=test_directory.file_id,
        creation_date=datetime(2024, 1, 3, 9, 0, 0),
    )
    return await ProjectFileRepository(test_db).save(project_file)
