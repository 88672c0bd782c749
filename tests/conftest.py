import os
import sys
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault('APP_ENV', 'testing')
os.environ.setdefault('CELERY_TASK_ALWAYS_EAGER', '1')

from models import db
from models.user import User
from app.exceptions import UpstreamError
from app.services import identity
from app.version import API_PREFIX


class FakeMailer:
    """Records outgoing mail; set ``fail`` to simulate a provider outage."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, message):
        if self.fail:
            raise UpstreamError("mail provider unavailable")
        self.sent.append(message)
        return f"fake-{len(self.sent)}"

    def to(self, address):
        return [m for m in self.sent if m.to == address]


@pytest.fixture(scope='session')
def app_instance(tmp_path_factory):
    from app import create_app
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        UPLOAD_FOLDER=str(tmp_path_factory.mktemp("uploads")),
        ADMIN_EMAIL="owner@example.com",
    )
    return app


@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture
def mailer(app, monkeypatch):
    fake = FakeMailer()
    monkeypatch.setattr(app, "mailer", fake, raising=False)
    return fake


def make_login(email, password="correct-horse", role="member", orders_permission=True):
    """Create a credential and, unless ``orders_permission`` is None, a permission record."""
    identity.provision_credential(email, password)
    if orders_permission is not None:
        db.session.add(User(email=email, role=role, orders_permission=orders_permission))
    db.session.commit()
    return email


def bearer(email):
    session = identity.open_session(email)
    return {"Authorization": f"Bearer {session.access_token}"}


@pytest.fixture
def member_headers(app):
    return bearer(make_login("cashier@example.com"))


@pytest.fixture
def admin_headers(app):
    return bearer(make_login("boss@example.com", role="admin"))


@pytest.fixture
def api():
    return API_PREFIX


@pytest.fixture
def login_as(app):
    """Headers for a freshly provisioned user; kwargs go to ``make_login``."""
    def _login(email, **kwargs):
        return bearer(make_login(email, **kwargs))
    return _login
