import pytest

from db import init_db, get_session
from services.groups_service import GroupsService
from tests import factories


@pytest.fixture
def db_url(tmp_path):
    """A fresh SQLite file database per test."""
    return f"sqlite:///{tmp_path / 'stockroom-test.sqlite'}"


@pytest.fixture
def session(db_url):
    """Return an open session bound to a freshly created schema."""
    init_db(db_url)
    s = get_session()
    factories.bind_session(s)
    yield s
    s.close()


@pytest.fixture
def group(session):
    """The group most tests import into."""
    grp = GroupsService.get_or_create(session, "home")
    session.commit()
    return grp


@pytest.fixture
def app(db_url):
    """Flask app wired to the per-test database."""
    from main import create_app

    application = create_app(db_url)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()
