# tests/repositories/test_sqlalchemy_permission_repository.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dare_tracker.database.database import Base
from dare_tracker.database import models
from dare_tracker.database.choices import PERMISSION_RESOURCES, PERMISSION_ACTIONS
from dare_tracker.repositories.sqlalchemy import (
    SqlalchemyRoleRepository, SqlalchemyPermissionRepository,
    SqlalchemyRolePermissionRepository, SqlalchemyUserRepository
)
from dare_tracker.services.access_control_service import AccessControlService

TOTAL = len(PERMISSION_RESOURCES) * len(PERMISSION_ACTIONS)

# ===================================================================
#  Fixture 설정 (인메모리 SQLite)
# ===================================================================

@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()
    engine.dispose()

@pytest.fixture
def role_permission_repo(db_session) -> SqlalchemyRolePermissionRepository:
    return SqlalchemyRolePermissionRepository(db_session)

@pytest.fixture
def access_service(db_session) -> AccessControlService:
    return AccessControlService(
        SqlalchemyRoleRepository(db_session), SqlalchemyPermissionRepository(db_session),
        SqlalchemyRolePermissionRepository(db_session), SqlalchemyUserRepository(db_session)
    )

def add_role(db_session, name, **kwargs) -> models.Role:
    role = models.Role(name=name, display_name=name.title(), **kwargs)
    db_session.add(role)
    db_session.commit()
    return role

# ===================================================================
#  역할 권한 리포지토리 테스트
# ===================================================================
class TestRolePermissionRepository:
    def test_exists_for_role_name(self, db_session, role_permission_repo):
        """행이 있을 때만 권한이 있다고 판단하는지 테스트합니다."""
        # === Arrange ===
        mentor = add_role(db_session, "mentor")
        role_permission_repo.create(models.RolePermission(role_id=mentor.id, resource="reports", action="view"))

        # === Act & Assert ===
        assert role_permission_repo.exists_for_role_name("mentor", "reports", "view") is True
        assert role_permission_repo.exists_for_role_name("mentor", "reports", "edit") is False
        assert role_permission_repo.exists_for_role_name("ghost", "reports", "view") is False

    def test_inactive_role_has_no_permissions(self, db_session, role_permission_repo):
        reviewer = add_role(db_session, "reviewer", is_active=False)
        role_permission_repo.create(models.RolePermission(role_id=reviewer.id, resource="reports", action="view"))

        assert role_permission_repo.exists_for_role_name("reviewer", "reports", "view") is False

    def test_replace_for_role_swaps_rows(self, db_session, role_permission_repo):
        # === Arrange ===
        role = add_role(db_session, "manager")
        role_permission_repo.create(models.RolePermission(role_id=role.id, resource="users", action="view"))
        role_permission_repo.create(models.RolePermission(role_id=role.id, resource="users", action="delete"))

        # === Act ===
        count = role_permission_repo.replace_for_role(role.id, [("users", "view"), ("roles", "view")])

        # === Assert ===
        assert count == 2
        pairs = {(row.resource, row.action) for row in role_permission_repo.list_by_role(role.id)}
        assert pairs == {("users", "view"), ("roles", "view")}

    def test_deleting_role_removes_its_rows(self, db_session, role_permission_repo):
        role = add_role(db_session, "temp")
        role_permission_repo.create(models.RolePermission(role_id=role.id, resource="users", action="view"))

        SqlalchemyRoleRepository(db_session).delete(role)

        assert role_permission_repo.list_all() == []

# ===================================================================
#  관리자 권한 재설정 (DB 통합) 테스트
# ===================================================================
class TestResetAdminPermissions:
    def test_reset_is_idempotent(self, db_session, access_service: AccessControlService):
        """두 번 실행해도 admin이 정확히 전체 조합만큼의 행을 가지는지 테스트합니다."""
        # === Act ===
        first = access_service.reset_admin_permissions()
        second = access_service.reset_admin_permissions()

        # === Assert ===
        assert first["assigned_count"] == TOTAL
        assert first["previous_count"] == 0
        assert second["previous_count"] == TOTAL
        assert second["assigned_count"] == TOTAL
        assert db_session.query(models.RolePermission).count() == TOTAL
        assert db_session.query(models.Permission).count() == TOTAL
        assert access_service.has_permission("admin", "system", "manage") is True

    def test_reset_repairs_partial_and_renamed_admin(self, db_session, access_service: AccessControlService):
        """대문자 'Admin' 역할과 일부 권한만 가진 상태가 복구되는지 테스트합니다."""
        # === Arrange ===
        role = add_role(db_session, "Admin", is_system=True, is_editable=False)
        db_session.add(models.User(username="boss", password_hash="x.y", full_name="Boss", role="Admin"))
        db_session.add(models.RolePermission(role_id=role.id, resource="users", action="view"))
        db_session.commit()

        # === Act ===
        result = access_service.reset_admin_permissions()

        # === Assert ===
        assert result["role_id"] == role.id
        assert result["previous_count"] == 1
        assert db_session.query(models.Role).filter(models.Role.name == "admin").one().is_editable is True
        assert db_session.query(models.User).filter(models.User.username == "boss").one().role == "admin"
        assert len(access_service.list_role_permissions("admin")) == TOTAL

    def test_other_roles_untouched(self, db_session, access_service: AccessControlService):
        add_role(db_session, "mentor")
        access_service.sync_permission_catalog()
        access_service.grant_permission("mentor", "reports", "view")

        access_service.reset_admin_permissions()

        assert access_service.permission_matrix()["mentor"] == ["reports:view"]

    def test_generate_missing_adds_only_new_pairs(self, db_session, access_service: AccessControlService):
        access_service.reset_admin_permissions()
        access_service.revoke_permission("admin", "uploads", "delete")

        result = access_service.generate_missing_permissions()

        assert result["created_permissions"] == 0
        assert result["granted_to_admin"] == 1
        assert access_service.has_permission("admin", "uploads", "delete") is True
