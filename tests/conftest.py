import pytest
from flask import Flask

from jsonapi_utils import JSONAPIUtils
from jsonapi_utils.paginators import PAGINATORS
from tests.models import Comment, Post, Tagging, User, db


@pytest.fixture(autouse=True)
def _restore_config():
    """init_app and the tests change the JSONAPIUtils class configuration"""
    saved = {name: getattr(JSONAPIUtils, name) for name in dir(JSONAPIUtils) if name.isupper()}
    registered = dict(PAGINATORS)
    yield
    for name, value in saved.items():
        setattr(JSONAPIUtils, name, value)
    PAGINATORS.clear()
    PAGINATORS.update(registered)


@pytest.fixture
def app():
    app = Flask(__name__)
    app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
    db.init_app(app)
    JSONAPIUtils(app)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def seeded(app):
    """
    user 1 has 5 posts with 2 comments each, user 2 has a single post without comments
    """
    alice = User(id=1, name="alice")
    bob = User(id=2, name="bob")
    db.session.add_all([alice, bob])
    for i in range(1, 6):
        post = Post(id=i, title=f"Post {i}", user=alice)
        post.comments = [Comment(body=f"comment {i}.{j}") for j in range(2)]
        db.session.add(post)
    db.session.add(Post(id=6, title="Post 6", user=bob))
    db.session.add_all([Tagging(post_id=1, tag="a"), Tagging(post_id=1, tag="b"), Tagging(post_id=2, tag="a")])
    db.session.commit()
    return {"alice": alice, "bob": bob}


@pytest.fixture
def hash_posts():
    return [
        {"id": 1, "title": "Lorem Ipsum", "body": "Body 4"},
        {"id": 2, "title": "Dolor Sit", "body": "Body 2"},
        {"id": 3, "title": "Dolor Sit", "body": "Body 3"},
        {"id": 4, "title": "Dolor Sit", "body": "Body 1"},
    ]
