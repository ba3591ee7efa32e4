import sys
import os
from datetime import timedelta
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

os.environ.setdefault("database_url", "sqlite:///:memory:")
os.environ.setdefault("secret_key", "testsecret")

from fastapi.testclient import TestClient
from sqlalchemy import DateTime
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, select

import nexgig.main as main
from nexgig.main import app
from nexgig.core.clock import as_utc, utcnow
from nexgig.database import Database
from nexgig.models.chat import Chat, ChatParticipant, Message
from nexgig.models.job import Job
from nexgig.models.user import User, UserRole
from nexgig.schemas.job import JobCreate
from nexgig.services import chat_service, job_service

PASSWORD = "Secret#123"


def test_every_timestamp_column_is_timezone_aware():
    database = Database("sqlite://", poolclass=StaticPool)
    database.create_all()

    columns = [
        column
        for table in SQLModel.metadata.sorted_tables
        for column in table.columns
        if isinstance(column.type, DateTime)
    ]
    assert {f"{c.table.name}.{c.name}" for c in columns} >= {
        "users.created_at",
        "jobs.created_at",
        "proposals.submitted_at",
        "assignments.assigned_at",
        "chats.updated_at",
        "messages.created_at",
    }
    assert all(column.type.timezone for column in columns)

    assert Message(chat_id=1, sender_id=1, text="x").created_at.tzinfo is not None
    database.dispose()


def test_default_timestamps_are_written_and_read_back():
    database = Database("sqlite://", poolclass=StaticPool)
    database.create_all()
    before = utcnow() - timedelta(seconds=1)

    with Session(database.engine) as session:
        for obj in (
            User(id=1, email="c@example.com", password_hash="x", role=UserRole.client),
            User(id=2, email="f@example.com", password_hash="x", role=UserRole.freelancer),
            Chat(id=1),
            ChatParticipant(chat_id=1, user_id=1),
            ChatParticipant(chat_id=1, user_id=2),
        ):
            session.add(obj)
            session.flush()
        session.commit()

    with database.session() as session:
        job = job_service.create_job(session, 1, JobCreate(title="t", budget=1, description="d"))
        message = chat_service.send_message(session, 1, 2, "hi")

    with Session(database.engine) as session:
        stored_job = session.get(Job, job.id)
        stored_message = session.exec(select(Message)).one()
        chat = session.get(Chat, 1)
        assert before <= as_utc(stored_job.created_at) <= utcnow()
        assert as_utc(stored_message.created_at) == as_utc(message.created_at)
        assert as_utc(chat.updated_at) == as_utc(stored_message.created_at)
    database.dispose()


def test_lifespan_owns_the_database(tmp_path, monkeypatch):
    db_file = tmp_path / "nexgig.db"
    monkeypatch.setattr(main.settings, "database_url", f"sqlite:///{db_file}")
    monkeypatch.setattr(main.settings, "create_tables", True)

    disposed = []
    dispose = Database.dispose

    def tracking_dispose(self):
        disposed.append(self)
        dispose(self)

    monkeypatch.setattr(Database, "dispose", tracking_dispose)
    app.dependency_overrides.clear()

    with TestClient(app) as client:
        database = app.state.database
        assert database.engine.url.database == str(db_file)

        registered = client.post(
            "/auth/register",
            json={"email": "life@example.com", "password": PASSWORD, "role": "client"},
        )
        assert registered.status_code == 200

        login = client.post("/auth/login", json={"email": "life@example.com", "password": PASSWORD})
        headers = {"Authorization": f"Bearer {login.json()['accessToken']}"}
        created = client.post(
            "/jobs/", json={"title": "t", "budget": 5, "description": "d"}, headers=headers
        )
        assert created.status_code == 201
        assert disposed == []

    assert disposed == [database]
    assert db_file.exists()

    # the rows went to the configured file, not to a module-level engine
    reopened = Database(f"sqlite:///{db_file}")
    with reopened.session() as session:
        assert [j.title for j in session.exec(select(Job)).all()] == ["t"]
    reopened.dispose()
