import pytest

from blog_admin import create_app, db as _db
from blog_admin.models import Post
from config import TestingConfig


@pytest.fixture
def app():
    """Application bound to a fresh in-memory database."""
    app = create_app(config_class=TestingConfig)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def post(db):
    """A stored post with slug 's1'."""
    post = Post(title='First', slug='s1', markdown='# First\n\nHello.')
    db.session.add(post)
    db.session.commit()
    return post
