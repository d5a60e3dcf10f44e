"""Shared fixtures: throwaway SQLite database, recording collaborators, API client."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from hirehive.api.app import app
from hirehive.api.deps import get_notifier
from hirehive.api.limiter import limiter
from hirehive.db import User, build_engine, get_db, init_db
from hirehive.services.notifications import NotificationDispatcher
from hirehive.services.postings import PostingService


class RecordingNotifier:
    """Notifier double that keeps every delivered intent."""

    def __init__(self, fail: bool = False):
        self.sent: list[tuple[list[str], str, dict]] = []
        self.fail = fail

    def notify(self, recipients, template, data):
        if self.fail:
            raise RuntimeError("mail relay unavailable")
        self.sent.append((list(recipients), template, dict(data)))


class RecordingAlert:
    def __init__(self):
        self.calls: list[tuple[str, dict]] = []

    def __call__(self, message, **context):
        self.calls.append((message, context))


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'hirehive.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def dispatcher(notifier):
    return NotificationDispatcher(notifier)


@pytest.fixture
def alert():
    return RecordingAlert()


@pytest.fixture
def service(db, dispatcher, alert):
    return PostingService(db, dispatcher, alert=alert)


@pytest.fixture
def make_employer(db):
    counter = iter(range(1, 10_000))

    def factory(plan_id: str = "buzz", posting_count: int = 0, name: str = "Acme Corp", email: str | None = None):
        n = next(counter)
        employer = User(
            id=f"employer-{n}",
            role="employer",
            name=name,
            email=email if email is not None else f"hr{n}@acme.test",
            plan_id=plan_id,
            posting_count=posting_count,
        )
        db.add(employer)
        db.commit()
        return employer

    return factory


@pytest.fixture
def make_seeker(db):
    counter = iter(range(1, 10_000))

    def factory(skills=("Python", "SQL"), cv_reference: str | None = "cvs/seeker.pdf", name: str | None = None):
        n = next(counter)
        seeker = User(
            id=f"seeker-{n}",
            role="seeker",
            name=name or f"Seeker {n}",
            email=f"seeker{n}@mail.test",
            skills=list(skills),
            cv_reference=cv_reference,
        )
        db.add(seeker)
        db.commit()
        return seeker

    return factory


@pytest.fixture
def client(session_factory, notifier):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    limiter.enabled = False
    yield TestClient(app)
    app.dependency_overrides.clear()
    limiter.enabled = True


def job_payload(**overrides) -> dict:
    payload = {
        "title": "Backend Developer",
        "category": "IT & Tech",
        "location": "Bengaluru",
        "required_skills": ["Python", "Go"],
        "screening_questions": [],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def job_data():
    return job_payload
