"""
Tests for the password history policy.
"""

import pytest

from shared.config.constants import PASSWORD_HISTORY_SIZE
from shared.security import password_history
from shared.security.password import hash_password
from shared.utils.exceptions import ReusedCredentialError


def plain_equals(raw: str, stored: str) -> bool:
    return raw == stored


class TestInsert:
    """Bounded FIFO insertion."""

    def test_new_history_holds_only_the_initial_entry(self):
        assert password_history.new_history("p1") == ["p1"]

    def test_insert_appends_while_not_full(self):
        assert password_history.insert(["p1"], "p2") == ["p1", "p2"]
        assert password_history.insert(["p1", "p2"], "p3") == ["p1", "p2", "p3"]

    def test_insert_into_full_history_evicts_oldest(self):
        assert password_history.insert(["p1", "p2", "p3"], "p4") == ["p2", "p3", "p4"]

    def test_insert_does_not_mutate_input(self):
        history = ["p1", "p2", "p3"]
        password_history.insert(history, "p4")
        assert history == ["p1", "p2", "p3"]

    def test_history_never_exceeds_size(self):
        history = password_history.new_history("p0")
        for i in range(1, 10):
            history = password_history.insert(history, f"p{i}")
            assert len(history) <= PASSWORD_HISTORY_SIZE
            assert history[-1] == f"p{i}"
        assert history == ["p7", "p8", "p9"]


class TestCheckReuse:
    """Reuse detection."""

    def test_candidate_in_history_is_rejected(self):
        with pytest.raises(ReusedCredentialError):
            password_history.check_reuse(["p1", "p2"], "p1", matches=plain_equals)

    def test_fresh_candidate_is_accepted(self):
        password_history.check_reuse(["p1", "p2"], "p3", matches=plain_equals)

    def test_literal_null_is_not_special(self):
        # History is seeded with the real credential, never a "null" marker
        history = password_history.new_history("p1")
        password_history.check_reuse(history, "null", matches=plain_equals)

    def test_bcrypt_hashes_are_matched_by_verification(self):
        history = [hash_password("first"), hash_password("second")]

        assert password_history.is_reused(history, "first")
        assert password_history.is_reused(history, "second")
        assert not password_history.is_reused(history, "third")

    def test_reuse_error_is_a_400(self):
        with pytest.raises(ReusedCredentialError) as exc_info:
            password_history.check_reuse(["p1"], "p1", matches=plain_equals)
        assert exc_info.value.status_code == 400


class TestRotationScenario:
    """p1 -> p2 -> p3 -> p4, then p2 is refused."""

    def test_four_rotations_then_reuse(self):
        history = password_history.new_history("p1")
        assert history == ["p1"]

        for candidate, expected in [
            ("p2", ["p1", "p2"]),
            ("p3", ["p1", "p2", "p3"]),
            ("p4", ["p2", "p3", "p4"]),
        ]:
            password_history.check_reuse(history, candidate, matches=plain_equals)
            history = password_history.insert(history, candidate)
            assert history == expected

        with pytest.raises(ReusedCredentialError):
            password_history.check_reuse(history, "p2", matches=plain_equals)
        assert history == ["p2", "p3", "p4"]

        # p1 fell out of the window and is allowed again
        password_history.check_reuse(history, "p1", matches=plain_equals)
