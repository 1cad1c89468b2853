from typing import Iterable, List, Optional, Set, Tuple
from sqlalchemy.orm import Session, joinedload
from dare_tracker.database import models
from dare_tracker.repositories.interfaces import IPermissionRepository, IRolePermissionRepository

class SqlalchemyPermissionRepository(IPermissionRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def list_all(self) -> List[models.Permission]:
        return self.db.query(models.Permission).order_by(
            models.Permission.resource.asc(), models.Permission.action.asc()
        ).all()

    def list_pairs(self) -> Set[Tuple[str, str]]:
        rows = self.db.query(models.Permission.resource, models.Permission.action).all()
        return {(resource, action) for resource, action in rows}

    def create_many(self, pairs: Iterable[Tuple[str, str]]) -> int:
        permissions = [
            models.Permission(resource=resource, action=action, description=f"{action} {resource}".replace('_', ' '))
            for resource, action in pairs
        ]
        self.db.add_all(permissions)
        self.db.commit()
        return len(permissions)


class SqlalchemyRolePermissionRepository(IRolePermissionRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def list_by_role(self, role_id: int) -> List[models.RolePermission]:
        return self.db.query(models.RolePermission).filter(
            models.RolePermission.role_id == role_id
        ).order_by(models.RolePermission.resource.asc(), models.RolePermission.action.asc()).all()

    def list_all(self) -> List[models.RolePermission]:
        return self.db.query(models.RolePermission).options(joinedload(models.RolePermission.role)).all()

    def find(self, role_id: int, resource: str, action: str) -> Optional[models.RolePermission]:
        return self.db.query(models.RolePermission).filter(
            models.RolePermission.role_id == role_id,
            models.RolePermission.resource == resource,
            models.RolePermission.action == action
        ).first()

    def exists_for_role_name(self, role_name: str, resource: str, action: str) -> bool:
        query = self.db.query(models.RolePermission.id).join(models.Role).filter(
            models.Role.name == role_name,
            models.Role.is_active.is_(True),
            models.RolePermission.resource == resource,
            models.RolePermission.action == action
        )
        return self.db.query(query.exists()).scalar()

    def create(self, role_permission: models.RolePermission) -> models.RolePermission:
        self.db.add(role_permission)
        self.db.commit()
        self.db.refresh(role_permission)
        return role_permission

    def delete(self, role_permission: models.RolePermission) -> bool:
        if role_permission:
            self.db.delete(role_permission)
            self.db.commit()
            return True
        return False

    def replace_for_role(self, role_id: int, pairs: Iterable[Tuple[str, str]]) -> int:
        rows = [models.RolePermission(role_id=role_id, resource=r, action=a) for r, a in sorted(set(pairs))]
        try:
            for existing in self.list_by_role(role_id):
                self.db.delete(existing)
            # 고유 제약 충돌을 피하려면 삭제가 삽입보다 먼저 반영되어야 합니다.
            self.db.flush()
            self.db.add_all(rows)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.expire_all()
        return len(rows)

    def add_missing_for_role(self, role_id: int, pairs: Iterable[Tuple[str, str]]) -> int:
        existing = {
            (resource, action) for resource, action in self.db.query(
                models.RolePermission.resource, models.RolePermission.action
            ).filter(models.RolePermission.role_id == role_id).all()
        }
        rows = [
            models.RolePermission(role_id=role_id, resource=r, action=a)
            for r, a in sorted(set(pairs) - existing)
        ]
        self.db.add_all(rows)
        self.db.commit()
        return len(rows)
