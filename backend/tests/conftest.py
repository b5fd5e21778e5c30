import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ableconnect.api.deps import get_mailer, get_storage
from ableconnect.core.security import create_user_token, get_password_hash
from ableconnect.db.base import Base
from ableconnect.db.session import get_db
from ableconnect.main import app
from ableconnect.models import Job, User
from ableconnect.services.email import Mailer
from ableconnect.services.storage import FileStorage


class RecordingMailer(Mailer):
    """Captures outgoing messages; can be told to fail or to blow up."""

    def __init__(self):
        super().__init__(backend="console")
        self.sent = []
        self.fail = False
        self.explode = False

    def send(self, to, subject, html=None, text=None):
        self.sent.append({"to": to, "subject": subject, "html": html, "text": text})
        if self.explode:
            raise RuntimeError("mail provider unreachable")
        return not self.fail


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
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
def mailer():
    return RecordingMailer()


@pytest.fixture
def storage(tmp_path):
    return FileStorage(str(tmp_path / "uploads"), max_size=5 * 1024 * 1024)


@pytest.fixture
def client(session_factory, mailer, storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(role="jobseeker", email=None, username=None, password="secret123", **fields):
        username = username or f"{role}{db.query(User).count() + 1}"
        user = User(
            email=email or f"{username}@example.com",
            username=username,
            name=fields.pop("name", username.title()),
            hashed_password=get_password_hash(password),
            role=role,
            approved=fields.pop("approved", role != "employer"),
            saved_jobs=[],
            applied_jobs=[],
            job_types=[],
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user("admin", username="admin")


@pytest.fixture
def employer(make_user):
    return make_user(
        "employer",
        username="acme",
        company_profile={"name": "Acme Corp", "accommodations": []},
    )


@pytest.fixture
def other_employer(make_user):
    return make_user("employer", username="globex", company_profile={"name": "Globex"})


@pytest.fixture
def jobseeker(make_user):
    return make_user("jobseeker", username="jamie", name="Jamie Doe")


@pytest.fixture
def other_jobseeker(make_user):
    return make_user("jobseeker", username="sam", name="Sam Roe")


def auth(user):
    return {"Authorization": f"Bearer {create_user_token(user.id, user.role)}"}


@pytest.fixture
def job(db, employer):
    job = Job(
        title="Accessibility Tester",
        description="Audit web apps with screen readers",
        location="Remote",
        salary="60000",
        type="Full-time",
        disability_friendly=True,
        company="Acme Corp",
        accessibility=["Screen reader"],
        posted_by=employer.id,
        status="Active",
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


@pytest.fixture
def auth_headers():
    return auth
