"""Store-backed tests for rolegate.services.user_repository."""

import time
import unittest

from store_case import StoreTestCase, as_utc

from rolegate.models import User, UserRole
from rolegate.schemas.user import UserFilter
from rolegate.services import user_repository
from rolegate.services.user_repository import ConflictError


def _fields(
    username: str = "testuser",
    email: str = "test@example.com",
    role: UserRole = UserRole.USER,
    **kwargs: object,
) -> dict[str, object]:
    """Build insert kwargs for a user row."""
    defaults: dict[str, object] = {
        "password_hash": "$2b$04$notarealhashnotarealhashnotarealhashnotarealhashnot",
        "is_active": True,
    }
    defaults.update(kwargs)
    return {"username": username, "email": email, "role": role, **defaults}


class TestInsert(StoreTestCase):
    """insert assigns id and timestamps and enforces uniqueness."""

    def test_insert_populates_id_and_defaults(self) -> None:
        user = user_repository.insert(self.session, **_fields())
        self.assertIsNotNone(user.id)
        self.assertTrue(user.is_active)
        self.assertIsNotNone(user.created_at)
        self.assertIsNotNone(user.updated_at)

    def test_duplicate_email_raises_conflict(self) -> None:
        user_repository.insert(self.session, **_fields())
        with self.assertRaises(ConflictError):
            user_repository.insert(self.session, **_fields(username="other"))
        self.assertEqual(self.session.query(User).count(), 1)

    def test_duplicate_username_raises_conflict(self) -> None:
        user_repository.insert(self.session, **_fields())
        with self.assertRaises(ConflictError):
            user_repository.insert(self.session, **_fields(email="other@example.com"))
        self.assertEqual(self.session.query(User).count(), 1)

    def test_session_usable_after_conflict(self) -> None:
        user_repository.insert(self.session, **_fields())
        with self.assertRaises(ConflictError):
            user_repository.insert(self.session, **_fields(username="other"))
        second = user_repository.insert(
            self.session, **_fields(username="other", email="other@example.com")
        )
        self.assertIsNotNone(second.id)


class TestFind(StoreTestCase):
    """Lookups by id, email, and role."""

    def setUp(self) -> None:
        super().setUp()
        self.admin = user_repository.insert(
            self.session, **_fields("admin", "admin@example.com", UserRole.ADMIN)
        )
        self.reseller = user_repository.insert(
            self.session, **_fields("reseller", "reseller@example.com", UserRole.RESELLER)
        )
        self.inactive_admin = user_repository.insert(
            self.session,
            **_fields("old_admin", "old@example.com", UserRole.ADMIN, is_active=False),
        )

    def test_find_by_id(self) -> None:
        found = user_repository.find_by_id(self.session, self.reseller.id)
        self.assertIsNotNone(found)
        self.assertEqual(found.username, "reseller")
        self.assertIsNone(user_repository.find_by_id(self.session, 9999))

    def test_find_by_email_is_exact_and_case_sensitive(self) -> None:
        self.assertEqual(
            user_repository.find_by_email(self.session, "admin@example.com").id,
            self.admin.id,
        )
        self.assertIsNone(user_repository.find_by_email(self.session, "ADMIN@example.com"))
        self.assertIsNone(user_repository.find_by_email(self.session, "admin@example"))

    def test_find_by_role_includes_inactive(self) -> None:
        admins = user_repository.find_by_role(self.session, UserRole.ADMIN)
        self.assertEqual([u.id for u in admins], [self.admin.id, self.inactive_admin.id])
        self.assertEqual(user_repository.find_by_role(self.session, UserRole.USER), [])


class TestFindAll(StoreTestCase):
    """find_all filters combine with AND; search is case-insensitive over username or email."""

    def setUp(self) -> None:
        super().setUp()
        user_repository.insert(self.session, **_fields("alice", "alice@test.com", UserRole.ADMIN))
        user_repository.insert(
            self.session, **_fields("bob", "bob@test.com", UserRole.USER, is_active=False)
        )
        user_repository.insert(
            self.session, **_fields("carol_test", "carol@other.org", UserRole.RESELLER)
        )
        user_repository.insert(self.session, **_fields("dave", "dave@other.org", UserRole.USER))

    def _usernames(self, user_filter: UserFilter | None) -> list[str]:
        return [u.username for u in user_repository.find_all(self.session, user_filter)]

    def test_no_filter_returns_all(self) -> None:
        self.assertEqual(self._usernames(None), ["alice", "bob", "carol_test", "dave"])
        self.assertEqual(len(self._usernames(UserFilter())), 4)

    def test_role_filter(self) -> None:
        self.assertEqual(self._usernames(UserFilter(role=UserRole.USER)), ["bob", "dave"])

    def test_is_active_filter(self) -> None:
        self.assertEqual(self._usernames(UserFilter(is_active=False)), ["bob"])
        self.assertEqual(
            self._usernames(UserFilter(is_active=True)), ["alice", "carol_test", "dave"]
        )

    def test_search_is_case_insensitive_on_email(self) -> None:
        self.assertEqual(self._usernames(UserFilter(search="TEST.COM")), ["alice", "bob"])

    def test_search_matches_username_or_email(self) -> None:
        self.assertEqual(
            self._usernames(UserFilter(search="test")), ["alice", "bob", "carol_test"]
        )

    def test_filters_combine_with_and(self) -> None:
        self.assertEqual(
            self._usernames(UserFilter(search="test", is_active=True)),
            ["alice", "carol_test"],
        )
        self.assertEqual(
            self._usernames(UserFilter(search="other", role=UserRole.ADMIN)), []
        )


class TestFindAllLiteralSearch(StoreTestCase):
    """LIKE metacharacters in search match themselves, not any character."""

    def setUp(self) -> None:
        super().setUp()
        user_repository.insert(self.session, **_fields("admin_demo", "admin@demo.com"))
        user_repository.insert(self.session, **_fields("adminxdemo", "adminx@demo.com"))
        user_repository.insert(self.session, **_fields("bob", "bob@demo.com"))
        user_repository.insert(self.session, **_fields("back\\slash", "slash@demo.com"))

    def _usernames(self, search: str) -> list[str]:
        users = user_repository.find_all(self.session, UserFilter(search=search))
        return [u.username for u in users]

    def test_underscore_is_literal(self) -> None:
        self.assertEqual(self._usernames("n_d"), ["admin_demo"])

    def test_percent_is_literal(self) -> None:
        self.assertEqual(self._usernames("%"), [])

    def test_backslash_is_literal(self) -> None:
        self.assertEqual(self._usernames("k\\s"), ["back\\slash"])


class TestUpdate(StoreTestCase):
    """update applies only supplied fields and always moves updated_at."""

    def setUp(self) -> None:
        super().setUp()
        self.user = user_repository.insert(self.session, **_fields())
        user_repository.insert(self.session, **_fields("taken", "taken@example.com"))

    def test_missing_user_returns_none(self) -> None:
        self.assertIsNone(user_repository.update(self.session, 9999, {"username": "x_y_z"}))

    def test_applies_given_fields_only(self) -> None:
        before_updated = as_utc(self.user.updated_at)
        time.sleep(0.01)
        updated = user_repository.update(self.session, self.user.id, {"role": UserRole.ADMIN})
        self.assertEqual(updated.role, UserRole.ADMIN)
        self.assertEqual(updated.username, "testuser")
        self.assertEqual(updated.email, "test@example.com")
        self.assertGreater(as_utc(updated.updated_at), before_updated)

    def test_username_collision_raises_conflict(self) -> None:
        with self.assertRaises(ConflictError):
            user_repository.update(self.session, self.user.id, {"username": "taken"})
        self.assertEqual(
            user_repository.find_by_id(self.session, self.user.id).username, "testuser"
        )

    def test_email_collision_raises_conflict(self) -> None:
        with self.assertRaises(ConflictError):
            user_repository.update(self.session, self.user.id, {"email": "taken@example.com"})


class TestDelete(StoreTestCase):
    """delete reports whether a row was removed."""

    def test_delete_existing_and_missing(self) -> None:
        user = user_repository.insert(self.session, **_fields())
        user_id = user.id
        self.assertTrue(user_repository.delete(self.session, user_id))
        self.assertIsNone(user_repository.find_by_id(self.session, user_id))
        self.assertFalse(user_repository.delete(self.session, user_id))


if __name__ == "__main__":
    unittest.main()
