"""
Property-based tests with Hypothesis.

Covers the pure policies: history bounds, ownership matching, role parsing
and token subject handling.
"""

import pytest
from hypothesis import given, settings, strategies as st

from market_api.services.permissions import match_member_id
from shared.config.constants import PASSWORD_HISTORY_SIZE, MemberRole
from shared.security import password_history
from shared.security.auth import MemberContext, generate_access_token, verify_access_token
from shared.utils.exceptions import ReusedCredentialError


entries = st.text(min_size=1, max_size=20)
member_ids = st.integers(min_value=1, max_value=2**53)


class TestHistoryProperties:
    """Bounded FIFO history."""

    @given(first=entries, rotations=st.lists(entries, max_size=20))
    @settings(max_examples=100)
    def test_history_is_bounded_and_ends_with_newest(self, first, rotations):
        history = password_history.new_history(first)
        for entry in rotations:
            history = password_history.insert(history, entry)
            # Property: never more than the window, newest entry last
            assert len(history) <= PASSWORD_HISTORY_SIZE
            assert history[-1] == entry

        expected = ([first] + rotations)[-PASSWORD_HISTORY_SIZE:]
        assert history == expected

    @given(history=st.lists(entries, min_size=1, max_size=PASSWORD_HISTORY_SIZE))
    @settings(max_examples=50)
    def test_every_entry_in_history_is_rejected(self, history):
        for entry in history:
            with pytest.raises(ReusedCredentialError):
                password_history.check_reuse(history, entry, matches=lambda a, b: a == b)

    @given(history=st.lists(entries, max_size=PASSWORD_HISTORY_SIZE), candidate=entries)
    @settings(max_examples=50)
    def test_candidate_outside_history_is_accepted(self, history, candidate):
        if candidate in history:
            return
        password_history.check_reuse(history, candidate, matches=lambda a, b: a == b)


class TestOwnershipProperties:
    @given(caller=member_ids, owner=member_ids)
    @settings(max_examples=100)
    def test_match_iff_equal(self, caller, owner):
        ctx = MemberContext(member_id=caller, email="m@x.com")
        assert match_member_id(ctx, owner) is (caller == owner)


class TestRoleProperties:
    @given(role=st.sampled_from(list(MemberRole)), upper=st.booleans())
    def test_parse_is_case_insensitive(self, role, upper):
        raw = role.value.upper() if upper else role.value.lower()
        assert MemberRole.parse(raw) is role


class TestTokenProperties:
    @given(member_id=member_ids)
    @settings(max_examples=30)
    def test_subject_round_trips(self, member_id):
        token = generate_access_token(member_id, "m@x.com")
        assert verify_access_token(token) == member_id
