import bcrypt
import pytest

from daflash.services.authorization_service import AuthorizationService, hash_password, is_allowed_admin


class TestIsAllowedAdmin:
    def test_empty_email_never_allowed(self):
        assert is_allowed_admin("", ["owner@daflash.com"]) is False
        assert is_allowed_admin(None, []) is False

    def test_empty_list_allows_anyone(self):
        assert is_allowed_admin("anyone@example.com", []) is True

    def test_blank_entries_ignored(self):
        assert is_allowed_admin("anyone@example.com", ["", "  "]) is True

    @pytest.mark.parametrize("email", ["owner@daflash.com", "OWNER@DAFLASH.COM", " Owner@Daflash.com "])
    def test_case_insensitive(self, email):
        assert is_allowed_admin(email, ["Owner@daflash.com"]) is True

    def test_not_listed(self):
        assert is_allowed_admin("intruder@example.com", ["owner@daflash.com"]) is False


class TestAuthorizationService:
    def setup_method(self):
        self.password_hash = bcrypt.hashpw(b"s3cret", bcrypt.gensalt(rounds=4)).decode()
        self.service = AuthorizationService(["owner@daflash.com"], self.password_hash)

    def test_authenticate_success(self):
        assert self.service.authenticate("owner@daflash.com", "s3cret") is True

    def test_wrong_password(self):
        assert self.service.authenticate("owner@daflash.com", "nope") is False

    def test_email_not_allowed(self):
        assert self.service.authenticate("intruder@example.com", "s3cret") is False

    def test_no_hash_configured(self):
        service = AuthorizationService([], "")
        assert service.authenticate("owner@daflash.com", "s3cret") is False

    def test_malformed_hash(self):
        service = AuthorizationService([], "not-a-bcrypt-hash")
        assert service.authenticate("owner@daflash.com", "s3cret") is False

    def test_hash_password_verifies(self):
        hashed = hash_password("pw")
        assert bcrypt.checkpw(b"pw", hashed.encode())

    def test_is_allowed_admin(self):
        assert self.service.is_allowed_admin("OWNER@daflash.com") is True
        assert self.service.is_allowed_admin("other@daflash.com") is False
