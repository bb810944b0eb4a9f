"""
Password history policy.

A member's history is an ordered list of at most PASSWORD_HISTORY_SIZE
credential hashes, oldest first. The active password is always the last
entry. A new password is refused if it matches any entry still in the list.

The functions here never mutate their input.
"""

from __future__ import annotations

from typing import Callable, Sequence

from shared.config.constants import PASSWORD_HISTORY_SIZE
from shared.security.password import verify_password
from shared.utils.exceptions import ReusedCredentialError

Matcher = Callable[[str, str], bool]


def new_history(initial_entry: str) -> list[str]:
    """History of a freshly created member: just the initial credential."""
    return [initial_entry]


def is_reused(
    history: Sequence[str],
    candidate: str,
    *,
    matches: Matcher = verify_password,
) -> bool:
    """True if ``candidate`` matches any entry of ``history``."""
    return any(matches(candidate, entry) for entry in history)


def check_reuse(
    history: Sequence[str],
    candidate: str,
    *,
    matches: Matcher = verify_password,
    **log_context,
) -> None:
    """
    Reject a candidate password that appears in the history.

    Args:
        history: Stored hashes, oldest first.
        candidate: Raw password the member wants to switch to.
        matches: ``(raw, stored) -> bool``; bcrypt verification by default.

    Raises:
        ReusedCredentialError: If the candidate matches any entry.
    """
    if is_reused(history, candidate, matches=matches):
        raise ReusedCredentialError(**log_context)


def insert(
    history: Sequence[str],
    entry: str,
    *,
    size: int = PASSWORD_HISTORY_SIZE,
) -> list[str]:
    """
    Append ``entry``, evicting the oldest entries once the history is full.

    Returns:
        A new list whose last element is ``entry`` and whose length is at
        most ``size``.
    """
    updated = list(history)
    while len(updated) >= size:
        updated.pop(0)
    updated.append(entry)
    return updated
