# tests/services/test_identity_service.py
import pytest
from unittest.mock import MagicMock, patch
from datetime import datetime, timedelta

from dare_tracker.services.identity_service import IdentityService
from dare_tracker.services.exceptions import *
from dare_tracker.repositories.interfaces import IUserRepository, IRoleRepository
from dare_tracker.database import models
from dare_tracker.utils.passwords import hash_password

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture(autouse=True)
def clear_token_cache():
    """테스트 간에 토큰 캐시가 공유되지 않도록 비웁니다."""
    IdentityService._token_cache.clear()
    yield
    IdentityService._token_cache.clear()

@pytest.fixture
def mock_user_repo() -> MagicMock:
    """IUserRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IUserRepository)

@pytest.fixture
def mock_role_repo() -> MagicMock:
    """IRoleRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IRoleRepository)

@pytest.fixture
def identity_service(mock_user_repo: MagicMock, mock_role_repo: MagicMock) -> IdentityService:
    """테스트에 사용될 IdentityService 인스턴스를 생성하고, 의존성을 주입합니다."""
    return IdentityService(mock_user_repo, mock_role_repo)

# ===================================================================
#  사용자 관리(User Management) 테스트
# ===================================================================
class TestUserManagement:
    @patch('dare_tracker.services.identity_service.hash_password')
    def test_create_user_success(self, mock_hash: MagicMock, identity_service: IdentityService,
                                 mock_user_repo: MagicMock, mock_role_repo: MagicMock):
        """사용자 생성 성공 시 비밀번호가 해시되어 저장되는지 테스트합니다."""
        # === Arrange ===
        mock_hash.return_value = "hashed.salt"
        mock_user_repo.find_by_username.return_value = None
        mock_role_repo.find_by_name.return_value = models.Role(id=4, name="mentor")
        mock_user_repo.create.side_effect = lambda user: user

        # === Act ===
        user = identity_service.create_user("kofi", "secret", "Kofi Mensah", role="mentor", district="Bekwai, Ghana")

        # === Assert ===
        assert user["username"] == "kofi"
        assert user["role"] == "mentor"
        assert user["district"] == "Bekwai"
        created = mock_user_repo.create.call_args.args[0]
        assert created.password_hash == "hashed.salt"
        mock_hash.assert_called_once_with("secret")

    def test_create_user_fails_if_username_exists(self, identity_service: IdentityService, mock_user_repo: MagicMock):
        """중복된 사용자 이름이면 UserCreationError가 발생하는지 테스트합니다."""
        # === Arrange ===
        mock_user_repo.find_by_username.return_value = models.User(id=1, username="kofi")

        # === Act & Assert ===
        with pytest.raises(UserCreationError):
            identity_service.create_user("kofi", "secret", "Kofi Mensah")
        mock_user_repo.create.assert_not_called()

    def test_create_user_fails_with_unknown_role(self, identity_service: IdentityService,
                                                 mock_user_repo: MagicMock, mock_role_repo: MagicMock):
        """존재하지 않는 역할을 할당하면 RoleNotFoundError가 발생하는지 테스트합니다."""
        # === Arrange ===
        mock_user_repo.find_by_username.return_value = None
        mock_role_repo.find_by_name.return_value = None

        # === Act & Assert ===
        with pytest.raises(RoleNotFoundError):
            identity_service.create_user("kofi", "secret", "Kofi Mensah", role="ghost")

    def test_create_user_requires_fields(self, identity_service: IdentityService):
        with pytest.raises(ValueError):
            identity_service.create_user("kofi", "", "Kofi Mensah")

    def test_update_user_rehashes_password(self, identity_service: IdentityService, mock_user_repo: MagicMock):
        """비밀번호 변경 시 새 해시가 저장되는지 테스트합니다."""
        # === Arrange ===
        user = models.User(id=3, username="ama", password_hash="old.salt", full_name="Ama", role="mentee", is_active=True)
        mock_user_repo.find_by_id.return_value = user
        mock_user_repo.update.side_effect = lambda u: u

        # === Act ===
        result = identity_service.update_user(3, password="new-password", full_name="Ama Owusu")

        # === Assert ===
        assert result["full_name"] == "Ama Owusu"
        assert user.password_hash != "old.salt"
        assert "password_hash" not in result

    def test_update_user_rejects_unknown_field(self, identity_service: IdentityService, mock_user_repo: MagicMock):
        mock_user_repo.find_by_id.return_value = models.User(id=3, username="ama", full_name="Ama")

        with pytest.raises(ValueError):
            identity_service.update_user(3, username="renamed")
        mock_user_repo.update.assert_not_called()

    def test_delete_user_not_found(self, identity_service: IdentityService, mock_user_repo: MagicMock):
        """존재하지 않는 사용자를 삭제하면 UserNotFoundError가 발생하는지 테스트합니다."""
        mock_user_repo.find_by_id.return_value = None

        with pytest.raises(UserNotFoundError):
            identity_service.delete_user(99)
        mock_user_repo.delete.assert_not_called()

# ===================================================================
#  인증(Authentication) 및 토큰 테스트
# ===================================================================
class TestAuthentication:
    def test_authenticate_success(self, identity_service: IdentityService, mock_user_repo: MagicMock):
        """사용자 인증 성공 시 토큰과 역할이 반환되는지 테스트합니다."""
        # === Arrange ===
        user = models.User(id=1, username="admin", password_hash=hash_password("admin"), role="admin", is_active=True)
        mock_user_repo.find_by_username.return_value = user

        # === Act ===
        result = identity_service.authenticate("admin", "admin")

        # === Assert ===
        assert "token" in result
        assert "expires_at" in result
        assert result["role"] == "admin"
        assert user.last_login is not None
        mock_user_repo.update.assert_called_once_with(user)

    def test_authenticate_fails_with_wrong_password(self, identity_service: IdentityService, mock_user_repo: MagicMock):
        """잘못된 비밀번호로 인증 실패 시나리오를 테스트합니다."""
        # === Arrange ===
        mock_user_repo.find_by_username.return_value = models.User(
            id=1, username="admin", password_hash=hash_password("admin"), is_active=True
        )

        # === Act & Assert ===
        with pytest.raises(AuthenticationError, match="Invalid username or password"):
            identity_service.authenticate("admin", "wrong")

    def test_authenticate_fails_for_inactive_user(self, identity_service: IdentityService, mock_user_repo: MagicMock):
        mock_user_repo.find_by_username.return_value = models.User(
            id=1, username="ama", password_hash=hash_password("pw"), is_active=False
        )

        with pytest.raises(AuthenticationError, match="inactive"):
            identity_service.authenticate("ama", "pw")

    def test_validate_token_expired(self, identity_service: IdentityService):
        """만료된 토큰은 TokenInvalidError를 발생시키고 캐시에서 제거되는지 테스트합니다."""
        # === Arrange ===
        IdentityService._token_cache["old"] = {"user_id": 1, "expires_at": datetime.now() - timedelta(minutes=1)}

        # === Act & Assert ===
        with pytest.raises(TokenInvalidError, match="expired"):
            identity_service.validate_token("old")
        assert "old" not in IdentityService._token_cache

    def test_get_active_user_reflects_current_role(self, identity_service: IdentityService, mock_user_repo: MagicMock):
        """토큰 발급 후 역할이 바뀌면 현재 DB의 역할이 반환되는지 테스트합니다."""
        # === Arrange ===
        IdentityService._token_cache["tok"] = {"user_id": 7, "expires_at": datetime.now() + timedelta(hours=1)}
        mock_user_repo.find_by_id.return_value = models.User(id=7, username="yaw", role="reviewer", is_active=True)

        # === Act ===
        user = identity_service.get_active_user("tok")

        # === Assert ===
        assert user["id"] == 7
        assert user["role"] == "reviewer"

    def test_get_active_user_rejects_deactivated_user(self, identity_service: IdentityService, mock_user_repo: MagicMock):
        IdentityService._token_cache["tok"] = {"user_id": 7, "expires_at": datetime.now() + timedelta(hours=1)}
        mock_user_repo.find_by_id.return_value = models.User(id=7, username="yaw", role="mentor", is_active=False)

        with pytest.raises(TokenInvalidError):
            identity_service.get_active_user("tok")
        assert "tok" not in IdentityService._token_cache
