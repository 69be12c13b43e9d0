" PyTest Config. This contains global-level pytest fixtures. "
import os
import os.path

import pytest
from flask import g
from flask.testing import FlaskClient

from models.user import User
from main import create_app, db as db_obj


class SessionUserClient(FlaskClient):
    """Requests share the module's app context, so drop the user
    flask-login cached on g and load it from the session cookie instead,
    as a real request would."""

    def open(self, *args, **kwargs):
        g.pop("_login_user", None)
        return super().open(*args, **kwargs)


@pytest.fixture(scope="module")
def app():
    """Fixture to provide an instance of the app.
    This will also create a Flask app_context and tear it down.

    The database is in-memory SQLite, created and dropped once per module.
    """
    yield from app_factory({})


def app_factory(config_override):
    if "SETTINGS_FILE" not in os.environ:
        root = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..")
        os.environ["SETTINGS_FILE"] = os.path.join(root, "config", "test.cfg")

    app = create_app(config_override=config_override)
    app.test_client_class = SessionUserClient

    with app.app_context():
        db_obj.drop_all()
        db_obj.create_all()

        yield app

        db_obj.session.close()
        db_obj.drop_all()


@pytest.fixture
def client(app):
    "Yield a test HTTP client for the app, with nobody logged in"
    yield app.test_client()


@pytest.fixture(scope="module")
def db(app):
    "Yield the DB object"
    yield db_obj


@pytest.fixture
def request_context(app):
    "Run the test in an app request context"
    with app.test_request_context("/") as c:
        yield c


def get_or_create_user(db, email, name):
    user = User.get_by_email(email)
    if not user:
        user = User(email, name)
        db.session.add(user)
        db.session.commit()
    return user


@pytest.fixture(scope="module")
def user(db):
    "Yield a test user. Note that this user will be identical across all tests in a module."
    yield get_or_create_user(db, "test_user@example.com", "Test User")


@pytest.fixture(scope="module")
def other_user(db):
    "A second speaker who doesn't own the talks created by `user`."
    yield get_or_create_user(db, "other_speaker@example.com", "Other Speaker")

