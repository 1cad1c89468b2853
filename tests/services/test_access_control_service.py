# tests/services/test_access_control_service.py
import pytest
from unittest.mock import MagicMock, ANY

from dare_tracker.services.access_control_service import AccessControlService, all_permission_pairs
from dare_tracker.services.exceptions import *
from dare_tracker.repositories.interfaces import (
    IRoleRepository, IPermissionRepository, IRolePermissionRepository, IUserRepository
)
from dare_tracker.database import models
from dare_tracker.database.choices import PERMISSION_RESOURCES, PERMISSION_ACTIONS

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_role_repo() -> MagicMock:
    return MagicMock(spec=IRoleRepository)

@pytest.fixture
def mock_permission_repo() -> MagicMock:
    return MagicMock(spec=IPermissionRepository)

@pytest.fixture
def mock_role_permission_repo() -> MagicMock:
    return MagicMock(spec=IRolePermissionRepository)

@pytest.fixture
def mock_user_repo() -> MagicMock:
    return MagicMock(spec=IUserRepository)

@pytest.fixture
def access_service(mock_role_repo, mock_permission_repo, mock_role_permission_repo, mock_user_repo) -> AccessControlService:
    """테스트에 사용될 AccessControlService 인스턴스를 생성하고, 의존성을 주입합니다."""
    return AccessControlService(mock_role_repo, mock_permission_repo, mock_role_permission_repo, mock_user_repo)

# ===================================================================
#  역할 레지스트리(Role Registry) 테스트
# ===================================================================
class TestRoleRegistry:
    def test_create_role_success(self, access_service: AccessControlService, mock_role_repo: MagicMock):
        """역할 생성 성공 시 시스템 역할이 아닌 역할이 만들어지는지 테스트합니다."""
        # === Arrange ===
        mock_role_repo.find_by_name.return_value = None
        mock_role_repo.create.side_effect = lambda role: role

        # === Act ===
        role = access_service.create_role("field_officer", "Field Officer")

        # === Assert ===
        assert role["name"] == "field_officer"
        assert role["display_name"] == "Field Officer"
        assert role["is_system"] is False
        mock_role_repo.create.assert_called_once_with(ANY)

    def test_create_role_duplicate_name(self, access_service: AccessControlService, mock_role_repo: MagicMock):
        """이미 있는 이름으로 역할을 만들면 RoleExistsError가 발생하는지 테스트합니다."""
        mock_role_repo.find_by_name.return_value = models.Role(id=2, name="manager")

        with pytest.raises(RoleExistsError):
            access_service.create_role("manager")
        mock_role_repo.create.assert_not_called()

    def test_update_role_rename_propagates_to_users(self, access_service: AccessControlService,
                                                    mock_role_repo: MagicMock, mock_user_repo: MagicMock):
        """역할 이름을 바꾸면 사용자들의 역할 이름도 함께 바뀌는지 테스트합니다."""
        # === Arrange ===
        role = models.Role(id=6, name="user", is_editable=True, is_system=False)
        mock_role_repo.find_by_id.return_value = role
        mock_role_repo.find_by_name.return_value = None
        mock_role_repo.update.side_effect = lambda r: r
        mock_user_repo.rename_role.return_value = 3

        # === Act ===
        result = access_service.update_role(6, name="staff")

        # === Assert ===
        assert result["name"] == "staff"
        mock_user_repo.rename_role.assert_called_once_with("user", "staff")

    def test_update_role_rename_onto_existing(self, access_service: AccessControlService, mock_role_repo: MagicMock):
        mock_role_repo.find_by_id.return_value = models.Role(id=6, name="user", is_editable=True)
        mock_role_repo.find_by_name.return_value = models.Role(id=2, name="manager")

        with pytest.raises(RoleExistsError):
            access_service.update_role(6, name="manager")
        mock_role_repo.update.assert_not_called()

    def test_update_role_not_editable(self, access_service: AccessControlService, mock_role_repo: MagicMock):
        mock_role_repo.find_by_id.return_value = models.Role(id=9, name="locked", is_editable=False)

        with pytest.raises(SystemRoleError):
            access_service.update_role(9, description="changed")

    def test_admin_role_cannot_be_renamed(self, access_service: AccessControlService, mock_role_repo: MagicMock):
        mock_role_repo.find_by_id.return_value = models.Role(id=1, name="admin", is_editable=True)

        with pytest.raises(SystemRoleError):
            access_service.update_role(1, name="superuser")

    @pytest.mark.parametrize("name", [None, "", "   ", 42])
    def test_update_role_rejects_missing_name(self, access_service: AccessControlService,
                                              mock_role_repo: MagicMock, mock_user_repo: MagicMock, name):
        """이름을 null, 빈 문자열, 문자열이 아닌 값으로 바꾸려 하면 거부되는지 테스트합니다."""
        # === Arrange ===
        mock_role_repo.find_by_id.return_value = models.Role(id=1, name="admin", is_editable=True)

        # === Act & Assert ===
        with pytest.raises(ValueError):
            access_service.update_role(1, name=name)
        mock_role_repo.update.assert_not_called()
        mock_user_repo.rename_role.assert_not_called()

    def test_update_role_strips_name_before_collision_check(self, access_service: AccessControlService,
                                                            mock_role_repo: MagicMock):
        mock_role_repo.find_by_id.return_value = models.Role(id=6, name="user", is_editable=True)
        mock_role_repo.find_by_name.return_value = models.Role(id=2, name="manager")

        with pytest.raises(RoleExistsError):
            access_service.update_role(6, name="  manager  ")
        mock_role_repo.find_by_name.assert_called_once_with("manager")

    def test_update_role_same_name_with_spaces_is_not_a_rename(self, access_service: AccessControlService,
                                                               mock_role_repo: MagicMock, mock_user_repo: MagicMock):
        role = models.Role(id=1, name="admin", is_editable=True)
        mock_role_repo.find_by_id.return_value = role
        mock_role_repo.update.side_effect = lambda r: r

        result = access_service.update_role(1, name=" admin ", description="Full access")

        assert result["name"] == "admin"
        mock_user_repo.rename_role.assert_not_called()

    @pytest.mark.parametrize("value", [False, "false", 0])
    def test_admin_role_cannot_be_deactivated(self, access_service: AccessControlService,
                                              mock_role_repo: MagicMock, value):
        """admin 역할을 비활성화하면 관리자가 스스로 잠기므로 거부되는지 테스트합니다."""
        role = models.Role(id=1, name="admin", is_editable=True, is_active=True)
        mock_role_repo.find_by_id.return_value = role

        with pytest.raises(SystemRoleError):
            access_service.update_role(1, is_active=value)
        assert role.is_active is True
        mock_role_repo.update.assert_not_called()

    def test_other_role_can_be_deactivated(self, access_service: AccessControlService, mock_role_repo: MagicMock):
        mock_role_repo.find_by_id.return_value = models.Role(id=6, name="user", is_editable=True, is_active=True)
        mock_role_repo.update.side_effect = lambda r: r

        result = access_service.update_role(6, is_active="false")

        assert result["is_active"] is False

    @pytest.mark.parametrize("name", ["field officer", "mentor/lead", "rôle", "a.b"])
    def test_role_names_must_fit_url_segment(self, access_service: AccessControlService,
                                             mock_role_repo: MagicMock, name):
        """경로에 쓸 수 없는 문자가 포함된 역할 이름은 생성/수정 모두 거부되는지 테스트합니다."""
        mock_role_repo.find_by_name.return_value = None
        mock_role_repo.find_by_id.return_value = models.Role(id=6, name="user", is_editable=True)

        with pytest.raises(ValueError):
            access_service.create_role(name)
        with pytest.raises(ValueError):
            access_service.update_role(6, name=name)
        mock_role_repo.create.assert_not_called()
        mock_role_repo.update.assert_not_called()

    def test_delete_system_role_forbidden(self, access_service: AccessControlService, mock_role_repo: MagicMock):
        """시스템 역할은 삭제할 수 없는지 테스트합니다."""
        mock_role_repo.find_by_id.return_value = models.Role(id=4, name="mentor", is_system=True)

        with pytest.raises(SystemRoleError):
            access_service.delete_role(4)
        mock_role_repo.delete.assert_not_called()

    def test_delete_role_in_use(self, access_service: AccessControlService,
                                mock_role_repo: MagicMock, mock_user_repo: MagicMock):
        """사용자에게 할당된 역할은 삭제할 수 없는지 테스트합니다."""
        mock_role_repo.find_by_id.return_value = models.Role(id=6, name="user", is_system=False)
        mock_user_repo.count_by_role.return_value = 2

        with pytest.raises(RoleInUseError):
            access_service.delete_role(6)
        mock_role_repo.delete.assert_not_called()

    def test_delete_role_success(self, access_service: AccessControlService,
                                 mock_role_repo: MagicMock, mock_user_repo: MagicMock):
        role = models.Role(id=6, name="user", is_system=False)
        mock_role_repo.find_by_id.return_value = role
        mock_user_repo.count_by_role.return_value = 0

        assert access_service.delete_role(6) is True
        mock_role_repo.delete.assert_called_once_with(role)

# ===================================================================
#  권한 부여/회수 및 검사 테스트
# ===================================================================
class TestPermissions:
    def test_grant_permission_success(self, access_service: AccessControlService,
                                      mock_role_repo: MagicMock, mock_role_permission_repo: MagicMock):
        """새 권한 행이 생성되는지 테스트합니다."""
        # === Arrange ===
        mock_role_repo.find_by_name.return_value = models.Role(id=4, name="mentor")
        mock_role_permission_repo.find.return_value = None
        mock_role_permission_repo.create.return_value = models.RolePermission(
            id=11, role_id=4, resource="youth_profiles", action="edit"
        )

        # === Act ===
        row = access_service.grant_permission("mentor", "youth_profiles", "edit")

        # === Assert ===
        assert row == {"id": 11, "role": "mentor", "resource": "youth_profiles", "action": "edit"}

    def test_grant_duplicate_permission_conflicts(self, access_service: AccessControlService,
                                                  mock_role_repo: MagicMock, mock_role_permission_repo: MagicMock):
        mock_role_repo.find_by_name.return_value = models.Role(id=4, name="mentor")
        mock_role_permission_repo.find.return_value = models.RolePermission(id=11)

        with pytest.raises(RolePermissionExistsError):
            access_service.grant_permission("mentor", "youth_profiles", "view")
        mock_role_permission_repo.create.assert_not_called()

    @pytest.mark.parametrize("resource, action", [("spaceships", "view"), ("youth_profiles", "launch")])
    def test_grant_unknown_pair(self, access_service: AccessControlService, resource, action):
        """알 수 없는 리소스나 동작은 ValueError가 발생하는지 테스트합니다."""
        with pytest.raises(ValueError):
            access_service.grant_permission("mentor", resource, action)

    def test_grant_to_missing_role(self, access_service: AccessControlService, mock_role_repo: MagicMock):
        mock_role_repo.find_by_name.return_value = None

        with pytest.raises(RoleNotFoundError):
            access_service.grant_permission("ghost", "users", "view")

    def test_revoke_missing_permission(self, access_service: AccessControlService,
                                       mock_role_repo: MagicMock, mock_role_permission_repo: MagicMock):
        """없는 권한을 회수하면 RolePermissionNotFoundError가 발생하는지 테스트합니다."""
        mock_role_repo.find_by_name.return_value = models.Role(id=4, name="mentor")
        mock_role_permission_repo.find.return_value = None

        with pytest.raises(RolePermissionNotFoundError):
            access_service.revoke_permission("mentor", "users", "delete")
        mock_role_permission_repo.delete.assert_not_called()

    def test_revoke_permission_deletes_exact_row(self, access_service: AccessControlService,
                                                 mock_role_repo: MagicMock, mock_role_permission_repo: MagicMock):
        row = models.RolePermission(id=11, role_id=4, resource="reports", action="edit")
        mock_role_repo.find_by_name.return_value = models.Role(id=4, name="mentor")
        mock_role_permission_repo.find.return_value = row

        assert access_service.revoke_permission("mentor", "reports", "edit") is True
        mock_role_permission_repo.find.assert_called_once_with(4, "reports", "edit")
        mock_role_permission_repo.delete.assert_called_once_with(row)

    def test_check_permission_denied(self, access_service: AccessControlService, mock_role_permission_repo: MagicMock):
        """권한 행이 없으면 PermissionDeniedError가 발생하는지 테스트합니다."""
        mock_role_permission_repo.exists_for_role_name.return_value = False

        with pytest.raises(PermissionDeniedError, match="You don't have permission to delete users"):
            access_service.check_permission("mentor", "users", "delete")

    def test_admin_has_no_implicit_bypass(self, access_service: AccessControlService, mock_role_permission_repo: MagicMock):
        """admin 역할도 권한 행이 없으면 거부되는지 테스트합니다."""
        mock_role_permission_repo.exists_for_role_name.return_value = False

        assert access_service.has_permission("admin", "system", "manage") is False

    def test_has_permission_without_role(self, access_service: AccessControlService, mock_role_permission_repo: MagicMock):
        assert access_service.has_permission(None, "users", "view") is False
        mock_role_permission_repo.exists_for_role_name.assert_not_called()

    def test_permission_matrix_includes_roles_without_grants(self, access_service: AccessControlService,
                                                             mock_role_repo: MagicMock,
                                                             mock_role_permission_repo: MagicMock):
        # === Arrange ===
        mentor = models.Role(id=4, name="mentor")
        mock_role_repo.list_all.return_value = [mentor, models.Role(id=6, name="user")]
        mock_role_permission_repo.list_all.return_value = [
            models.RolePermission(role=mentor, resource="reports", action="view"),
            models.RolePermission(role=mentor, resource="businesses", action="view"),
        ]

        # === Act ===
        matrix = access_service.permission_matrix()

        # === Assert ===
        assert matrix == {"mentor": ["businesses:view", "reports:view"], "user": []}

# ===================================================================
#  관리자 부트스트랩 테스트
# ===================================================================
class TestAdminBootstrap:
    def test_sync_permission_catalog_creates_missing(self, access_service: AccessControlService,
                                                     mock_permission_repo: MagicMock):
        """카탈로그에 없는 쌍만 생성되는지 테스트합니다."""
        # === Arrange ===
        mock_permission_repo.list_pairs.return_value = {("users", "view"), ("users", "create")}
        mock_permission_repo.create_many.side_effect = lambda pairs: len(pairs)
        total = len(PERMISSION_RESOURCES) * len(PERMISSION_ACTIONS)

        # === Act ===
        result = access_service.sync_permission_catalog()

        # === Assert ===
        assert result == {"created": total - 2, "existing": 2, "total": total}
        created_pairs = mock_permission_repo.create_many.call_args.args[0]
        assert ("users", "view") not in created_pairs

    def test_ensure_admin_role_creates_when_missing(self, access_service: AccessControlService,
                                                    mock_role_repo: MagicMock):
        mock_role_repo.find_by_name.return_value = None
        mock_role_repo.create.side_effect = lambda role: role

        role = access_service.ensure_admin_role()

        assert role.name == "admin"
        assert role.is_system is True
        mock_role_repo.find_by_name.assert_called_once_with("admin", case_insensitive=True)

    def test_ensure_admin_role_normalizes_name(self, access_service: AccessControlService,
                                               mock_role_repo: MagicMock, mock_user_repo: MagicMock):
        """대소문자가 다른 'Admin' 역할이 'admin'으로 정리되는지 테스트합니다."""
        # === Arrange ===
        role = models.Role(id=1, name="Admin", is_editable=False, is_active=True)
        mock_role_repo.find_by_name.return_value = role
        mock_role_repo.update.side_effect = lambda r: r

        # === Act ===
        result = access_service.ensure_admin_role()

        # === Assert ===
        assert result.name == "admin"
        assert result.is_editable is True
        mock_user_repo.rename_role.assert_called_once_with("Admin", "admin")

    def test_reset_admin_permissions_assigns_full_cross_product(self, access_service: AccessControlService,
                                                                mock_role_repo: MagicMock,
                                                                mock_permission_repo: MagicMock,
                                                                mock_role_permission_repo: MagicMock):
        """admin에게 전체 (리소스, 동작) 조합이 다시 부여되는지 테스트합니다."""
        # === Arrange ===
        total = len(PERMISSION_RESOURCES) * len(PERMISSION_ACTIONS)
        mock_role_repo.find_by_name.return_value = models.Role(id=1, name="admin", is_editable=True, is_active=True)
        mock_permission_repo.list_pairs.return_value = all_permission_pairs()
        mock_role_permission_repo.list_by_role.return_value = [models.RolePermission(id=i) for i in range(5)]
        mock_role_permission_repo.replace_for_role.side_effect = lambda role_id, pairs: len(set(pairs))

        # === Act ===
        result = access_service.reset_admin_permissions()

        # === Assert ===
        assert result == {"role_id": 1, "previous_count": 5, "assigned_count": total, "total_permissions": total}
        mock_permission_repo.create_many.assert_not_called()
        mock_role_permission_repo.replace_for_role.assert_called_once_with(1, all_permission_pairs())

    def test_generate_missing_permissions(self, access_service: AccessControlService, mock_role_repo: MagicMock,
                                          mock_permission_repo: MagicMock, mock_role_permission_repo: MagicMock):
        mock_role_repo.find_by_name.return_value = models.Role(id=1, name="admin", is_editable=True, is_active=True)
        mock_permission_repo.list_pairs.return_value = all_permission_pairs() - {("system", "manage")}
        mock_permission_repo.create_many.return_value = 1
        mock_role_permission_repo.add_missing_for_role.return_value = 1

        result = access_service.generate_missing_permissions()

        assert result["created_permissions"] == 1
        assert result["granted_to_admin"] == 1
        mock_role_permission_repo.replace_for_role.assert_not_called()
