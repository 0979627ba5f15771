"""
tests.test_auth

Default verify function and the `CasUser` identity model.
"""

from __future__ import annotations

from types import MappingProxyType

from cas2_strategy.auth.models import CasUser, default_verify, subject_from


def test_subject_resolution_prefers_uid() -> None:
    assert subject_from({"uid": "alice", "mail": "a@example.com"}) == "alice"
    assert subject_from({"email": "a@example.com"}) == "a@example.com"
    assert subject_from({"uid": ("first", "second")}) == "first"
    assert subject_from({"displayname": "Alice"}) is None


def test_cas_user_values_handles_both_shapes() -> None:
    user = CasUser(subject="alice", attributes={"memberof": ["staff", "admins"], "mail": "a@x"})

    assert user.values("memberof") == ["staff", "admins"]
    assert user.values("mail") == ["a@x"]
    assert user.values("missing") == []


def test_default_verify_builds_user_from_frozen_attributes() -> None:
    calls = []
    attributes = MappingProxyType({"uid": "alice", "memberof": ("staff", "admins")})

    default_verify(attributes, lambda *args: calls.append(args))

    assert calls == [
        (
            None,
            CasUser(subject="alice", attributes={"uid": "alice", "memberof": ["staff", "admins"]}),
            {"message": "Authenticated"},
        )
    ]


def test_default_verify_rejects_attributes_without_subject() -> None:
    calls = []

    default_verify(MappingProxyType({}), lambda *args: calls.append(args))

    assert calls == [(None, False, {"message": "No user identifier in CAS attributes"})]
