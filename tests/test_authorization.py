import sys
import os
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

os.environ.setdefault("database_url", "sqlite:///:memory:")
os.environ.setdefault("secret_key", "testsecret")

import pytest
from sqlmodel import Session
from sqlalchemy.pool import StaticPool

from nexgig.core.errors import ForbiddenError
from nexgig.database import Database
from nexgig.models.user import User, UserRole
from nexgig.models.job import Job
from nexgig.models.chat import Chat, ChatParticipant
from nexgig.services.authorization import (
    has_role,
    is_chat_participant,
    is_job_owner,
    require_chat_participant,
    require_job_owner,
    require_role,
)


database = Database("sqlite://", poolclass=StaticPool)


@pytest.fixture(autouse=True)
def setup_db():
    database.drop_all()
    database.create_all()
    with Session(database.engine) as session:
        for obj in [
            User(id=1, email="c@example.com", password_hash="x", role=UserRole.client),
            User(id=2, email="f@example.com", password_hash="x", role=UserRole.freelancer),
            Job(id=1, title="owned", budget=1, description="d", client_id=1),
            Job(id=2, title="seed", budget=1, description="d", client_id=None),
            Chat(id=1),
            ChatParticipant(chat_id=1, user_id=2),
        ]:
            session.add(obj)
            session.flush()
        session.commit()


def test_has_role():
    client = User(id=1, email="c@example.com", password_hash="x", role=UserRole.client)
    assert has_role(client, UserRole.client)
    assert not has_role(client, UserRole.freelancer)
    assert not has_role(None, UserRole.client)
    with pytest.raises(ForbiddenError):
        require_role(client, UserRole.freelancer)
    assert require_role(client, UserRole.client) is client


def test_job_ownership():
    with database.session() as session:
        assert is_job_owner(session, 1, 1)
        assert not is_job_owner(session, 2, 1)
        # unowned and missing jobs have no owner
        assert not is_job_owner(session, 1, 2)
        assert not is_job_owner(session, 1, 99)
        with pytest.raises(ForbiddenError):
            require_job_owner(session, 2, 1)
        require_job_owner(session, 1, 1)


def test_chat_membership():
    with database.session() as session:
        assert is_chat_participant(session, 2, 1)
        assert not is_chat_participant(session, 1, 1)
        assert not is_chat_participant(session, 2, 99)
        with pytest.raises(ForbiddenError):
            require_chat_participant(session, 1, 1)
        require_chat_participant(session, 2, 1)
