import mongomock
import pytest
from bson import ObjectId

from devconnect.core.errors import ForbiddenError, MalformedIdError, NotFoundError
from devconnect.services.post_service import PostService


@pytest.fixture
def store():
    return mongomock.MongoClient()["devconnect_unit"]


@pytest.fixture
def service(store):
    return PostService(posts=store["posts"], users=store["users"])


def _user(store, name):
    return str(store["users"].insert_one({"name": name, "avatar": f"//{name}"}).inserted_id)


@pytest.fixture
def alice(store):
    return _user(store, "Alice")


@pytest.fixture
def bob(store):
    return _user(store, "Bob")


@pytest.fixture
def post(service, alice):
    return service.create_post(alice, "hello")


def test_create_post_snapshots_author(service, store, alice, post):
    assert post["user"] == alice
    assert post["name"] == "Alice"
    assert post["avatar"] == "//Alice"
    assert post["likes"] == [] and post["comments"] == []

    store["users"].update_one({"_id": ObjectId(alice)}, {"$set": {"name": "Alicia"}})
    assert service.get_post(post["_id"])["name"] == "Alice"


def test_create_post_for_missing_user(service):
    with pytest.raises(NotFoundError) as exc:
        service.create_post(str(ObjectId()), "hello")
    assert exc.value.status_code == 400


def test_posts_listed_newest_first(service, alice):
    first = service.create_post(alice, "first")
    second = service.create_post(alice, "second")

    assert [p["_id"] for p in service.list_posts()] == [second["_id"], first["_id"]]


def test_get_post_errors(service):
    with pytest.raises(NotFoundError) as exc:
        service.get_post(str(ObjectId()))
    assert exc.value.status_code == 404

    with pytest.raises(MalformedIdError) as exc:
        service.get_post("123")
    assert exc.value.message == "Post id provided is not valid."


# ============================================================
# Likes
# ============================================================

def test_like_then_unlike(service, alice, post):
    liked = service.add_like(post["_id"], alice)
    assert [like["user"] for like in liked] == [alice]

    unliked = service.add_like(post["_id"], alice)
    assert unliked == []
    assert service.get_post(post["_id"])["likes"] == []


def test_likes_from_different_users_stack_newest_first(service, alice, bob, post):
    service.add_like(post["_id"], alice)
    likes = service.add_like(post["_id"], bob)

    assert [like["user"] for like in likes] == [bob, alice]


def test_unlike_removes_every_duplicate_like(service, store, alice, bob, post):
    store["posts"].update_one({"_id": ObjectId(post["_id"])}, {"$set": {"likes": [
        {"_id": ObjectId(), "user": ObjectId(alice)},
        {"_id": ObjectId(), "user": ObjectId(bob)},
        {"_id": ObjectId(), "user": ObjectId(alice)},
    ]}})

    likes = service.add_like(post["_id"], alice)
    assert [like["user"] for like in likes] == [bob]


def test_like_missing_post(service, alice):
    with pytest.raises(NotFoundError):
        service.add_like(str(ObjectId()), alice)


# ============================================================
# Comments
# ============================================================

def test_comments_are_prepended(service, alice, bob, post):
    service.add_comment(post["_id"], "first!", alice)
    comments = service.add_comment(post["_id"], "second", bob)

    assert [c["text"] for c in comments] == ["second", "first!"]
    assert comments[0]["name"] == "Bob"
    assert comments[0]["user"] == bob
    assert comments[0]["_id"] != comments[1]["_id"]


def test_comment_by_missing_user(service, post):
    with pytest.raises(NotFoundError) as exc:
        service.add_comment(post["_id"], "hi", str(ObjectId()))
    assert exc.value.message == "User not found."


def test_delete_comment_removes_matching_id(service, alice, bob, post):
    service.add_comment(post["_id"], "keep", alice)
    service.add_comment(post["_id"], "drop", alice)
    comments = service.add_comment(post["_id"], "bob's", bob)
    drop_id = comments[1]["_id"]

    remaining = service.delete_comment(post["_id"], drop_id, alice)
    assert [c["text"] for c in remaining] == ["bob's", "keep"]


def test_delete_comment_of_someone_else(service, alice, bob, post):
    comment_id = service.add_comment(post["_id"], "mine", alice)[0]["_id"]

    with pytest.raises(ForbiddenError) as exc:
        service.delete_comment(post["_id"], comment_id, bob)
    assert exc.value.status_code == 401
    assert len(service.get_post(post["_id"])["comments"]) == 1


def test_delete_missing_comment(service, alice, post):
    with pytest.raises(NotFoundError) as exc:
        service.delete_comment(post["_id"], str(ObjectId()), alice)
    assert exc.value.message == "Comment not found."


# ============================================================
# Post deletion
# ============================================================

def test_only_author_can_delete_post(service, store, alice, bob):
    for n in range(3):
        post = service.create_post(alice, f"post {n}")
        for intruder in (bob, str(ObjectId())):
            with pytest.raises(ForbiddenError):
                service.delete_post(post["_id"], intruder)

    assert store["posts"].count_documents({}) == 3


def test_author_deletes_post(service, alice, post):
    service.delete_post(post["_id"], alice)

    with pytest.raises(NotFoundError):
        service.delete_post(post["_id"], alice)
