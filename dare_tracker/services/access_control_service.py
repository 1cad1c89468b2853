import logging
import re
from itertools import product
from typing import Dict, Any, List, Optional

from dare_tracker.database import models
from dare_tracker.database.choices import ADMIN_ROLE, PERMISSION_ACTIONS, PERMISSION_RESOURCES
from dare_tracker.repositories.interfaces import (
    IRoleRepository, IPermissionRepository, IRolePermissionRepository, IUserRepository
)
from dare_tracker.services.exceptions import (
    RoleNotFoundError, RoleExistsError, RoleInUseError, SystemRoleError,
    RolePermissionExistsError, RolePermissionNotFoundError, PermissionDeniedError
)
from dare_tracker.utils.model_utils import apply_fields, coerce_value, model_to_dict

logger = logging.getLogger(__name__)

ROLE_UPDATABLE_FIELDS = ("name", "display_name", "description", "is_active")
# 역할 이름은 /v1/role-permissions/<role> 경로에 그대로 들어갑니다.
ROLE_NAME_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')


def normalize_role_name(name: Any) -> str:
    """
    역할 이름의 앞뒤 공백을 제거하고 형식을 검증합니다.

    Raises:
        ValueError: 이름이 문자열이 아니거나, 비어 있거나, 허용되지 않는 문자를 포함할 때.
    """
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Role name is required.")
    name = name.strip()
    if not ROLE_NAME_PATTERN.match(name):
        raise ValueError("Role name may only contain letters, digits, '_' and '-'.")
    return name


def all_permission_pairs():
    """알려진 모든 (리소스, 동작) 쌍, 즉 리소스와 동작의 데카르트 곱을 반환합니다."""
    return set(product(PERMISSION_RESOURCES, PERMISSION_ACTIONS))


def _role_to_dict(role: models.Role) -> Dict[str, Any]:
    return model_to_dict(role)


def _role_permission_to_dict(role_name: str, row: models.RolePermission) -> Dict[str, Any]:
    return {"id": row.id, "role": role_name, "resource": row.resource, "action": row.action}


class AccessControlService:
    """
    역할 레지스트리와 (역할, 리소스, 동작) 권한 매트릭스를 관리합니다.

    권한 판정은 단순한 행 존재 여부 검사입니다. 상속이나 와일드카드는 없으며,
    admin 역할도 자신의 권한 행을 통해서만 권한을 가집니다.
    admin의 권한 행은 reset_admin_permissions()가 항상 전체 카탈로그로 맞춰 줍니다.
    """

    def __init__(self, role_repo: IRoleRepository, permission_repo: IPermissionRepository,
                 role_permission_repo: IRolePermissionRepository, user_repo: IUserRepository):
        """
        AccessControlService를 초기화합니다.

        Args:
            role_repo: 역할 데이터에 접근하기 위한 리포지토리.
            permission_repo: (리소스, 동작) 카탈로그에 접근하기 위한 리포지토리.
            role_permission_repo: 역할 권한 행에 접근하기 위한 리포지토리.
            user_repo: 사용자 데이터에 접근하기 위한 리포지토리 (역할 삭제/이름 변경 시 검증용).
        """
        self.role_repo = role_repo
        self.permission_repo = permission_repo
        self.role_permission_repo = role_permission_repo
        self.user_repo = user_repo

    # ------------------------------------------------------------------
    # 역할 레지스트리
    # ------------------------------------------------------------------

    def _get_role_model(self, role_id: int) -> models.Role:
        role = self.role_repo.find_by_id(role_id)
        if not role:
            raise RoleNotFoundError(f"Role with id '{role_id}' not found.")
        return role

    def _get_role_by_name(self, role_name: str) -> models.Role:
        role = self.role_repo.find_by_name(role_name)
        if not role:
            raise RoleNotFoundError(f"Role '{role_name}' not found.")
        return role

    def create_role(self, name: str, display_name: Optional[str] = None,
                    description: Optional[str] = None) -> Dict[str, Any]:
        """
        새로운 역할을 생성합니다. 사용자가 만든 역할은 시스템 역할이 아닙니다.

        Raises:
            ValueError: 이름이 비어 있거나 허용되지 않는 문자를 포함할 때.
            RoleExistsError: 동일한 이름의 역할이 이미 존재할 때.
        """
        name = normalize_role_name(name)
        if self.role_repo.find_by_name(name):
            raise RoleExistsError(f"Role with name '{name}' already exists.")

        role = models.Role(
            name=name,
            display_name=display_name or name,
            description=description,
            is_system=False,
            is_editable=True,
            is_active=True
        )
        return _role_to_dict(self.role_repo.create(role))

    def list_roles(self) -> List[Dict[str, Any]]:
        """모든 역할의 목록을 조회합니다."""
        return [_role_to_dict(r) for r in self.role_repo.list_all()]

    def get_role(self, role_id: int) -> Dict[str, Any]:
        """
        ID로 특정 역할을 조회합니다.

        Raises:
            RoleNotFoundError: 해당 ID의 역할을 찾을 수 없을 때.
        """
        return _role_to_dict(self._get_role_model(role_id))

    def update_role(self, role_id: int, **changes) -> Dict[str, Any]:
        """
        역할 정보를 수정합니다. 이름이 바뀌면 그 역할을 가진 사용자의 역할 이름도 함께 바뀝니다.

        Raises:
            RoleNotFoundError: 해당 ID의 역할을 찾을 수 없을 때.
            SystemRoleError: 수정 불가 역할이거나, admin 역할의 이름을 바꾸거나 비활성화하려 할 때.
            RoleExistsError: 바꾸려는 이름의 역할이 이미 존재할 때.
            ValueError: 이름이 비어 있거나 허용되지 않는 문자를 포함할 때.
        """
        role = self._get_role_model(role_id)
        if not role.is_editable:
            raise SystemRoleError(f"Role '{role.name}' is not editable.")

        old_name = role.name
        new_name = old_name
        if "name" in changes:
            new_name = normalize_role_name(changes["name"])
            changes["name"] = new_name
            if new_name != old_name:
                if old_name == ADMIN_ROLE:
                    raise SystemRoleError("The admin role cannot be renamed.")
                if self.role_repo.find_by_name(new_name):
                    raise RoleExistsError(f"Role with name '{new_name}' already exists.")

        if "is_active" in changes:
            active = coerce_value(models.Role.__table__.c.is_active, changes["is_active"])
            if old_name == ADMIN_ROLE and not active:
                raise SystemRoleError("The admin role cannot be deactivated.")

        apply_fields(role, changes, allowed=ROLE_UPDATABLE_FIELDS)
        updated = self.role_repo.update(role)

        if new_name != old_name:
            moved = self.user_repo.rename_role(old_name, new_name)
            logger.info("Role '%s' renamed to '%s' (%d users updated)", old_name, new_name, moved)
        return _role_to_dict(updated)

    def delete_role(self, role_id: int) -> bool:
        """
        역할과 그 역할의 모든 권한 행을 삭제합니다.

        Raises:
            RoleNotFoundError: 해당 ID의 역할을 찾을 수 없을 때.
            SystemRoleError: 시스템 역할을 삭제하려고 할 때.
            RoleInUseError: 역할이 아직 사용자에게 할당되어 있을 때.
        """
        role = self._get_role_model(role_id)
        if role.is_system:
            raise SystemRoleError(f"Cannot delete system role '{role.name}'.")

        assigned = self.user_repo.count_by_role(role.name)
        if assigned > 0:
            raise RoleInUseError(f"Role '{role.name}' is still assigned to {assigned} user(s).")

        self.role_repo.delete(role)
        logger.info("Role '%s' deleted", role.name)
        return True

    # ------------------------------------------------------------------
    # 권한 저장소
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_pair(resource: str, action: str):
        if resource not in PERMISSION_RESOURCES:
            raise ValueError(f"Unknown resource '{resource}'.")
        if action not in PERMISSION_ACTIONS:
            raise ValueError(f"Unknown action '{action}'.")

    def list_resources_and_actions(self) -> Dict[str, List[str]]:
        """권한 매트릭스를 구성하는 리소스와 동작 목록을 반환합니다."""
        return {"resources": list(PERMISSION_RESOURCES), "actions": list(PERMISSION_ACTIONS)}

    def list_permissions(self) -> List[Dict[str, Any]]:
        """DB 카탈로그에 등록된 모든 (리소스, 동작) 권한을 조회합니다."""
        return [
            {"id": p.id, "resource": p.resource, "action": p.action, "description": p.description}
            for p in self.permission_repo.list_all()
        ]

    def list_role_permissions(self, role_name: str) -> List[Dict[str, Any]]:
        """
        특정 역할이 가진 모든 권한 행을 조회합니다.

        Raises:
            RoleNotFoundError: 해당 이름의 역할을 찾을 수 없을 때.
        """
        role = self._get_role_by_name(role_name)
        return [_role_permission_to_dict(role.name, row) for row in self.role_permission_repo.list_by_role(role.id)]

    def permission_matrix(self) -> Dict[str, List[str]]:
        """
        역할별로 부여된 'resource:action' 목록을 반환합니다.
        권한이 하나도 없는 역할도 빈 목록으로 포함됩니다.
        """
        matrix = {role.name: [] for role in self.role_repo.list_all()}
        for row in self.role_permission_repo.list_all():
            matrix.setdefault(row.role.name, []).append(f"{row.resource}:{row.action}")
        return {name: sorted(grants) for name, grants in matrix.items()}

    def grant_permission(self, role_name: str, resource: str, action: str) -> Dict[str, Any]:
        """
        역할에 (리소스, 동작) 권한을 부여합니다.

        Raises:
            ValueError: 알 수 없는 리소스나 동작일 때.
            RoleNotFoundError: 해당 이름의 역할을 찾을 수 없을 때.
            RolePermissionExistsError: 이미 동일한 권한이 부여되어 있을 때.
        """
        self._validate_pair(resource, action)
        role = self._get_role_by_name(role_name)
        if self.role_permission_repo.find(role.id, resource, action):
            raise RolePermissionExistsError(f"Role '{role_name}' already has permission {resource}:{action}.")

        row = self.role_permission_repo.create(
            models.RolePermission(role_id=role.id, resource=resource, action=action)
        )
        logger.info("Granted %s:%s to role '%s'", resource, action, role_name)
        return _role_permission_to_dict(role.name, row)

    def revoke_permission(self, role_name: str, resource: str, action: str) -> bool:
        """
        역할에서 (리소스, 동작) 권한을 회수합니다.

        Raises:
            RoleNotFoundError: 해당 이름의 역할을 찾을 수 없을 때.
            RolePermissionNotFoundError: 회수할 권한 행이 없을 때.
        """
        role = self._get_role_by_name(role_name)
        row = self.role_permission_repo.find(role.id, resource, action)
        if not row:
            raise RolePermissionNotFoundError(f"Role '{role_name}' does not have permission {resource}:{action}.")
        self.role_permission_repo.delete(row)
        logger.info("Revoked %s:%s from role '%s'", resource, action, role_name)
        return True

    # ------------------------------------------------------------------
    # 권한 검사
    # ------------------------------------------------------------------

    def has_permission(self, role_name: str, resource: str, action: str) -> bool:
        """역할이 존재하고 활성 상태이며 (리소스, 동작) 행을 가지고 있으면 True를 반환합니다."""
        if not role_name:
            return False
        return self.role_permission_repo.exists_for_role_name(role_name, resource, action)

    def check_permission(self, role_name: str, resource: str, action: str) -> None:
        """
        권한이 없으면 예외를 발생시킵니다.

        Raises:
            PermissionDeniedError: 역할에 해당 권한이 없을 때.
        """
        if not self.has_permission(role_name, resource, action):
            logger.info("Role '%s' denied %s:%s", role_name, resource, action)
            raise PermissionDeniedError(f"You don't have permission to {action} {resource}.")

    # ------------------------------------------------------------------
    # 관리자 부트스트랩
    # ------------------------------------------------------------------

    def sync_permission_catalog(self) -> Dict[str, int]:
        """
        알려진 (리소스, 동작) 쌍 중 DB 카탈로그에 없는 것을 추가합니다.

        Returns:
            created(추가된 수), existing(기존 수), total(전체 조합 수)를 담은 딕셔너리.
        """
        expected = all_permission_pairs()
        existing = self.permission_repo.list_pairs()
        missing = expected - existing
        created = self.permission_repo.create_many(sorted(missing)) if missing else 0
        if created:
            logger.info("Created %d missing permissions", created)
        return {"created": created, "existing": len(existing & expected), "total": len(expected)}

    def ensure_admin_role(self) -> models.Role:
        """
        admin 역할이 없으면 시스템 역할로 생성하고, 있으면 수정 가능 상태로 맞춥니다.
        이름 비교는 대소문자를 구분하지 않습니다.
        """
        role = self.role_repo.find_by_name(ADMIN_ROLE, case_insensitive=True)
        if not role:
            logger.info("Admin role doesn't exist. Creating it...")
            return self.role_repo.create(models.Role(
                name=ADMIN_ROLE,
                display_name="Administrator",
                description="System administrator with full access to all features",
                is_system=True,
                is_editable=True,
                is_active=True
            ))
        old_name = role.name
        if old_name != ADMIN_ROLE or not role.is_editable or not role.is_active:
            role.name = ADMIN_ROLE
            role.is_editable = True
            role.is_active = True
            role = self.role_repo.update(role)
            if old_name != ADMIN_ROLE:
                self.user_repo.rename_role(old_name, ADMIN_ROLE)
        return role

    def reset_admin_permissions(self) -> Dict[str, int]:
        """
        admin 역할이 전체 (리소스, 동작) 조합을 갖도록 권한 행을 다시 만듭니다.
        기존 행을 모두 지우고 데카르트 곱 전체를 다시 넣으므로 여러 번 실행해도 결과가 같습니다.

        Returns:
            role_id, previous_count, assigned_count, total_permissions를 담은 딕셔너리.
        """
        role = self.ensure_admin_role()
        catalog = self.sync_permission_catalog()

        previous_count = len(self.role_permission_repo.list_by_role(role.id))
        assigned = self.role_permission_repo.replace_for_role(role.id, all_permission_pairs())

        if assigned == catalog["total"]:
            logger.info("Admin now has %d of %d permissions", assigned, catalog["total"])
        else:
            logger.warning("Admin permission count %d doesn't match expected %d", assigned, catalog["total"])

        return {
            "role_id": role.id,
            "previous_count": previous_count,
            "assigned_count": assigned,
            "total_permissions": catalog["total"],
        }

    def generate_missing_permissions(self) -> Dict[str, int]:
        """
        카탈로그에 없는 권한을 만들고, admin 역할에 빠진 권한만 추가합니다.
        reset_admin_permissions와 달리 기존 행은 건드리지 않습니다.
        """
        role = self.ensure_admin_role()
        catalog = self.sync_permission_catalog()
        added = self.role_permission_repo.add_missing_for_role(role.id, all_permission_pairs())
        return {
            "role_id": role.id,
            "created_permissions": catalog["created"],
            "granted_to_admin": added,
            "total_permissions": catalog["total"],
        }
