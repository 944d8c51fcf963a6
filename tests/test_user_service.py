import mongomock
import pytest

from devconnect.core.errors import ConflictError
from devconnect.services.user_service import UserService


@pytest.fixture
def users():
    collection = mongomock.MongoClient()["devconnect_unit"]["users"]
    collection.create_index("email", unique=True)
    return collection


@pytest.fixture
def service(users, tokens):
    return UserService(collection=users, tokens=tokens)


def test_register_issues_token_for_new_account(service, tokens, users):
    token = service.register("Alice", "a@x.com", "secret1")

    stored = users.find_one({"email": "a@x.com"})
    assert tokens.verify(token) == str(stored["_id"])


def test_concurrent_registration_for_same_email_is_a_conflict(service, users, monkeypatch):
    service.register("Alice", "a@x.com", "secret1")
    # The other request passed its existence check before this insert landed
    monkeypatch.setattr(service.collection, "find_one", lambda *args, **kwargs: None)

    with pytest.raises(ConflictError) as excinfo:
        service.register("Alice Again", "a@x.com", "secret2")

    assert excinfo.value.to_public_dict() == {"errors": [{"msg": "User already exists."}]}
    assert users.count_documents({"email": "a@x.com"}) == 1
