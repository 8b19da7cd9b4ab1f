"""Tests for roost.security — page access checks."""

import pytest
from conftest import FakeSecurity

from roost.errors import Forbidden
from roost.http.request import Request
from roost.security import AuthenticationHelper, SecurityService


def _request(user: str | None) -> Request:
    return Request("GET", "/admin", user=user)


class TestAuthenticationHelper:
    def test_fake_satisfies_protocol(self) -> None:
        assert isinstance(FakeSecurity(), SecurityService)

    def test_check_user(self) -> None:
        auth = AuthenticationHelper(FakeSecurity())
        auth.check_user(_request("someone"))
        with pytest.raises(Forbidden):
            auth.check_user(_request(None))

    def test_check_admin(self) -> None:
        auth = AuthenticationHelper(FakeSecurity())
        auth.check_admin(_request("admin"))
        with pytest.raises(Forbidden, match="not authorized"):
            auth.check_admin(_request("someone"))
        with pytest.raises(Forbidden, match="signed in"):
            auth.check_admin(_request(None))

    def test_check_admin_or_group_admin(self) -> None:
        auth = AuthenticationHelper(FakeSecurity())
        auth.check_admin_or_group_admin(_request("admin"))
        auth.check_admin_or_group_admin(_request("group-admin"))
        with pytest.raises(Forbidden):
            auth.check_admin_or_group_admin(_request("someone"))

    def test_security_disabled_allows_everything(self) -> None:
        auth = AuthenticationHelper(FakeSecurity(enabled=False))
        auth.check_user(_request(None))
        auth.check_admin(_request(None))
        auth.check_admin_or_group_admin(_request("someone"))
