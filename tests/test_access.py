"""
Unit tests for role-scoped subject resolution.

Agents always act on themselves; admins and managers act on the requested
user, or on themselves when none is requested.
"""

import pytest

from agent_tracker.errors import AuthorizationError
from agent_tracker.models import User
from agent_tracker.services.access import (
    OFFICE_ROLES,
    Caller,
    can_act_for,
    require_office_role,
    resolve_subject,
)

AGENT = Caller(user_id=7, username="agent7", role="agent")
ADMIN = Caller(user_id=1, username="admin", role="admin")
MANAGER = Caller(user_id=2, username="manager", role="manager")


class TestResolveSubject:
    """Tests for resolve_subject function."""

    def test_agent_without_request_gets_self(self):
        assert resolve_subject(AGENT) == 7

    def test_agent_request_for_other_user_is_ignored(self):
        assert resolve_subject(AGENT, 99) == 7

    def test_admin_gets_requested_user(self):
        assert resolve_subject(ADMIN, 99) == 99

    def test_manager_gets_requested_user(self):
        assert resolve_subject(MANAGER, 42) == 42

    def test_office_without_request_gets_self(self):
        assert resolve_subject(ADMIN) == 1
        assert resolve_subject(MANAGER, None) == 2


class TestOfficeChecks:
    def test_is_office(self):
        assert ADMIN.is_office
        assert MANAGER.is_office
        assert not AGENT.is_office

    def test_office_roles_are_user_roles(self):
        assert set(OFFICE_ROLES) < set(User.ROLES)
        for role in User.ROLES:
            assert Caller(1, "someone", role).is_office == (role in OFFICE_ROLES)

    def test_require_office_role_passes_office(self):
        assert require_office_role(MANAGER) is MANAGER

    def test_require_office_role_rejects_agent(self):
        with pytest.raises(AuthorizationError):
            require_office_role(AGENT)

    def test_can_act_for(self):
        assert can_act_for(AGENT, 7)
        assert not can_act_for(AGENT, 8)
        assert can_act_for(ADMIN, 8)
