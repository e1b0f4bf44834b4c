"""
Unit tests for the contact form inbox and admin/player authentication.
"""

import pytest

from core.domain.models import ContactStatus, UserRole
from core.domain.constants import ADMIN_ONLY_MESSAGE

from tests.conftest import ADMIN_EMAIL, ADMIN_ID, ADMIN_PASSWORD, PLAYER_ACCOUNT_EMAIL, PLAYER_ACCOUNT_ID


class TestContactService:
    async def test_submit_stores_message(self, contact_service, contact_repo) -> None:
        ok, message = await contact_service.submit("Jamie", "jamie@boardfc.co.uk", "Can I join?", subject="Trials")
        assert ok
        assert message == "Thank you for your message! We will get back to you soon."
        stored = list(contact_repo.rows.values())[0]
        assert (stored.subject, stored.status) == ("Trials", ContactStatus.UNREAD)

    @pytest.mark.parametrize(
        "name, email, body",
        [("", "jamie@boardfc.co.uk", "Hi"), ("Jamie", "  ", "Hi"), ("Jamie", "jamie@boardfc.co.uk", "")],
    )
    async def test_required_fields(self, contact_service, contact_repo, name, email, body) -> None:
        ok, message = await contact_service.submit(name, email, body)
        assert not ok
        assert message == "Please fill in all required fields."
        assert contact_repo.rows == {}

    async def test_bad_email(self, contact_service) -> None:
        ok, message = await contact_service.submit("Jamie", "not-an-email", "Hi")
        assert (ok, message) == (False, "Please enter a valid email address.")

    async def test_message_too_long(self, contact_service) -> None:
        ok, message = await contact_service.submit("Jamie", "jamie@boardfc.co.uk", "x" * 5001)
        assert (ok, message) == (False, "Your message is too long.")

    @pytest.mark.parametrize(
        "name, subject, expected",
        [
            ("J" * 201, None, "Please enter a shorter name (200 characters at most)."),
            ("Jamie", "S" * 201, "Please enter a shorter subject (200 characters at most)."),
        ],
    )
    async def test_reports_the_field_that_failed(self, contact_service, contact_repo, name, subject, expected) -> None:
        ok, message = await contact_service.submit(name, "jamie@boardfc.co.uk", "Hi", subject=subject)
        assert (ok, message) == (False, expected)
        assert contact_repo.rows == {}

    async def test_blank_subject_is_none(self, contact_service, contact_repo) -> None:
        await contact_service.submit("Jamie", "jamie@boardfc.co.uk", "Hi", subject="   ")
        assert list(contact_repo.rows.values())[0].subject is None

    async def test_opening_marks_read(self, contact_service, contact_repo) -> None:
        await contact_service.submit("Jamie", "jamie@boardfc.co.uk", "Hi")
        await contact_service.submit("Alex", "alex@boardfc.co.uk", "Hello")
        messages = await contact_service.list_messages()
        assert contact_service.unread_count(messages) == 2

        opened = await contact_service.open_message(messages[0].id)

        assert opened.status == ContactStatus.READ
        assert contact_service.unread_count(await contact_service.list_messages()) == 1


class TestAuthService:
    @pytest.fixture(autouse=True)
    def _accounts(self, site):
        # site registers one admin and one player account
        return site

    async def test_admin_sign_in(self, auth_service) -> None:
        ok, _message, user = await auth_service.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)
        assert ok
        assert user.id == ADMIN_ID

    async def test_wrong_password(self, auth_service) -> None:
        ok, message, user = await auth_service.sign_in(ADMIN_EMAIL, "nope")
        assert (ok, message, user) == (False, "Invalid login credentials", None)

    async def test_non_admin_is_signed_back_out(self, auth_service, auth_provider) -> None:
        ok, message, user = await auth_service.sign_in(PLAYER_ACCOUNT_EMAIL, ADMIN_PASSWORD)
        assert (ok, message, user) == (False, ADMIN_ONLY_MESSAGE, None)
        assert len(auth_provider.signed_out) == 1

    async def test_profile_lookup_failure_is_not_admin(self, auth_service, profile_repo) -> None:
        profile_repo.fail = True
        assert await auth_service.is_admin(ADMIN_ID) is False

    async def test_sign_up_creates_player_profile(self, auth_service, profile_repo) -> None:
        ok, message, user = await auth_service.sign_up(
            "new@boardfc.co.uk", "longpass", "longpass", player_number="7", position="Forward"
        )
        assert ok
        assert message == "Account created. Please check your email for verification."
        profile = profile_repo.rows[user.id]
        assert (profile.role, profile.player_number, profile.position) == (UserRole.PLAYER, "7", "Forward")

    @pytest.mark.parametrize(
        "password, confirm, expected",
        [
            ("longpass", "different", "Passwords do not match"),
            ("short", "short", "Password must be at least 6 characters long"),
        ],
    )
    async def test_sign_up_password_rules(self, auth_service, password, confirm, expected) -> None:
        ok, message, _user = await auth_service.sign_up("new@boardfc.co.uk", password, confirm)
        assert (ok, message) == (False, expected)

    async def test_sign_up_existing_email(self, auth_service) -> None:
        ok, message, _user = await auth_service.sign_up(ADMIN_EMAIL, "longpass", "longpass")
        assert (ok, message) == (False, "Invalid email address or email already in use")

    async def test_promote(self, auth_service, profile_repo) -> None:
        _ok, _msg, user = await auth_service.sign_up("new@boardfc.co.uk", "longpass", "longpass")
        assert await auth_service.promote(user.id)
        assert profile_repo.rows[user.id].role == UserRole.ADMIN
        assert await auth_service.promote("00000000-0000-0000-0000-000000000000") is False

    async def test_verify_admin_with_live_token(self, auth_service) -> None:
        _ok, _msg, user = await auth_service.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)
        assert await auth_service.verify_admin(user.id, user.access_token)

    async def test_verify_admin_rejects_other_users_token(self, auth_service) -> None:
        assert not await auth_service.verify_admin(ADMIN_ID, f"token-{PLAYER_ACCOUNT_ID}")
        assert not await auth_service.verify_admin(ADMIN_ID, "token-revoked")
        assert not await auth_service.verify_admin(ADMIN_ID, None)

    async def test_demotion_is_seen_after_the_role_check_expires(self, auth_service, profile_repo, clock) -> None:
        _ok, _msg, user = await auth_service.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)
        assert await auth_service.verify_admin(user.id, user.access_token)

        await profile_repo.set_role(ADMIN_ID, UserRole.PLAYER)
        clock.advance(61)

        assert not await auth_service.verify_admin(user.id, user.access_token)

    async def test_role_check_errors_propagate(self, auth_service, profile_repo) -> None:
        profile_repo.fail = True
        with pytest.raises(RuntimeError):
            await auth_service.verify_admin(ADMIN_ID, f"token-{ADMIN_ID}")
