from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from dare_tracker.database import models
from dare_tracker.repositories.interfaces import IRoleRepository

class SqlalchemyRoleRepository(IRoleRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, role_model: models.Role) -> models.Role:
        self.db.add(role_model)
        self.db.commit()
        self.db.refresh(role_model)
        return role_model

    def find_by_id(self, role_id: int) -> Optional[models.Role]:
        return self.db.query(models.Role).filter(models.Role.id == role_id).first()

    def find_by_name(self, name: str, case_insensitive: bool = False) -> Optional[models.Role]:
        if case_insensitive:
            return self.db.query(models.Role).filter(func.lower(models.Role.name) == name.lower()).first()
        return self.db.query(models.Role).filter(models.Role.name == name).first()

    def list_all(self) -> List[models.Role]:
        return self.db.query(models.Role).order_by(models.Role.name.asc()).all()

    def update(self, role: models.Role) -> models.Role:
        self.db.commit()
        self.db.refresh(role)
        return role

    def delete(self, role: models.Role) -> bool:
        if role:
            self.db.delete(role) # cascade로 role_permissions 행도 함께 삭제
            self.db.commit()
            return True
        return False
