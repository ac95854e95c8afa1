import pytest
from sqlalchemy.exc import IntegrityError

from catalog.core.errors import ConstraintViolationError, is_constraint_violation
from catalog.repositories.user_repository import UserRepository


@pytest.fixture
def users(db) -> UserRepository:
    return UserRepository(db)


def test_create_user_assigns_identity(users: UserRepository) -> None:
    user_id = users.create_user('alice', 'alice@example.com', 'Oslo')

    user = users.find_by_id(user_id)
    assert user is not None
    assert (user.username, user.mail, user.address) == ('alice', 'alice@example.com', 'Oslo')


def test_create_user_assigns_distinct_identities(users: UserRepository) -> None:
    first = users.create_user('alice', 'alice@example.com', 'Oslo')
    second = users.create_user('bob', 'bob@example.com', 'Bergen')

    assert first != second
    assert [user.id for user in users.find_all()] == [first, second]


def test_create_user_propagates_duplicate_username(users: UserRepository) -> None:
    users.create_user('alice', 'alice@example.com', 'Oslo')

    with pytest.raises(IntegrityError) as exception_info:
        users.create_user('alice', 'other@example.com', 'Bergen')

    assert is_constraint_violation(exception_info.value)
    assert len(users.find_all()) == 1


@pytest.mark.parametrize(
    ('username', 'mail', 'address'),
    [
        ('   ', 'alice@example.com', 'Oslo'),
        ('alice', 'not-a-mail', 'Oslo'),
        ('alice', 'alice@example.com', ''),
        ('a' * 129, 'alice@example.com', 'Oslo'),
    ],
)
def test_create_user_rejects_invalid_fields(users: UserRepository, username: str, mail: str, address: str) -> None:
    with pytest.raises(ConstraintViolationError):
        users.create_user(username, mail, address)

    assert users.find_all() == []


def test_update_username_returns_false_for_missing_user(users: UserRepository) -> None:
    user_id = users.create_user('alice', 'alice@example.com', 'Oslo')

    assert users.update_username(user_id + 100, 'bob') is False

    user = users.find_by_id(user_id)
    assert (user.username, user.mail, user.address) == ('alice', 'alice@example.com', 'Oslo')


def test_update_username_changes_only_username(users: UserRepository) -> None:
    user_id = users.create_user('alice', 'alice@example.com', 'Oslo')

    assert users.update_username(user_id, 'bob') is True

    user = users.find_by_id(user_id)
    assert (user.username, user.mail, user.address) == ('bob', 'alice@example.com', 'Oslo')


def test_update_returns_false_for_missing_user(users: UserRepository) -> None:
    assert users.update(42, 'bob', 'bob@example.com', 'Bergen') is False
    assert users.find_all() == []


def test_update_replaces_all_fields(users: UserRepository) -> None:
    user_id = users.create_user('alice', 'alice@example.com', 'Oslo')

    assert users.update(user_id, 'bob', 'bob@example.com', 'Bergen') is True

    user = users.find_by_id(user_id)
    assert (user.username, user.mail, user.address) == ('bob', 'bob@example.com', 'Bergen')


def test_update_rolls_back_every_field_on_violation(users: UserRepository) -> None:
    user_id = users.create_user('alice', 'alice@example.com', 'Oslo')

    with pytest.raises(ConstraintViolationError):
        users.update(user_id, 'bob', 'not-a-mail', 'Bergen')

    user = users.find_by_id(user_id)
    assert (user.username, user.mail, user.address) == ('alice', 'alice@example.com', 'Oslo')


def test_update_rolls_back_on_duplicate_username(users: UserRepository) -> None:
    users.create_user('alice', 'alice@example.com', 'Oslo')
    user_id = users.create_user('bob', 'bob@example.com', 'Bergen')

    with pytest.raises(IntegrityError):
        users.update(user_id, 'alice', 'changed@example.com', 'Trondheim')

    user = users.find_by_id(user_id)
    assert (user.username, user.mail, user.address) == ('bob', 'bob@example.com', 'Bergen')


def test_find_all_by_field_returns_exact_matches(users: UserRepository) -> None:
    alice = users.create_user('alice', 'shared@example.com', 'Oslo')
    bob = users.create_user('bob', 'shared@example.com', 'Bergen')

    assert [user.id for user in users.find_all_by_username('alice')] == [alice]
    assert [user.id for user in users.find_all_by_mail('shared@example.com')] == [alice, bob]
    assert [user.id for user in users.find_all_by_address('Bergen')] == [bob]
    assert users.find_all_by_username('ALICE') == []
