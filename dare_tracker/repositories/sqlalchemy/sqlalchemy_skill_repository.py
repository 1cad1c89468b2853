from typing import Any, Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
from dare_tracker.database import models
from dare_tracker.repositories.interfaces import ISkillRepository, IYouthSkillRepository

class SqlalchemySkillRepository(ISkillRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, skill_model: models.Skill) -> models.Skill:
        self.db.add(skill_model)
        self.db.commit()
        self.db.refresh(skill_model)
        return skill_model

    def find_by_id(self, skill_id: int) -> Optional[models.Skill]:
        return self.db.query(models.Skill).filter(models.Skill.id == skill_id).first()

    def find_by_name(self, name: str) -> Optional[models.Skill]:
        return self.db.query(models.Skill).filter(func.lower(models.Skill.name) == name.lower()).first()

    def list_all(self, active_only: bool = False, category: Optional[str] = None) -> List[models.Skill]:
        query = self.db.query(models.Skill)
        if active_only:
            query = query.filter(models.Skill.is_active.is_(True))
        if category:
            query = query.filter(models.Skill.category == category)
        return query.order_by(models.Skill.name.asc()).all()

    def update(self, skill: models.Skill) -> models.Skill:
        self.db.commit()
        self.db.refresh(skill)
        return skill

    def delete(self, skill: models.Skill) -> bool:
        if skill:
            self.db.delete(skill)
            self.db.commit()
            return True
        return False


class SqlalchemyYouthSkillRepository(IYouthSkillRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find(self, youth_id: int, skill_id: int) -> Optional[models.YouthSkill]:
        return self.db.query(models.YouthSkill).filter(
            models.YouthSkill.youth_id == youth_id,
            models.YouthSkill.skill_id == skill_id
        ).first()

    def list_by_youth(self, youth_id: int) -> List[Dict[str, Any]]:
        associations = self.db.query(models.YouthSkill).options(
            joinedload(models.YouthSkill.skill)
        ).filter(models.YouthSkill.youth_id == youth_id).all()

        skills = []
        for assoc in sorted(associations, key=lambda a: (not a.is_primary, a.skill.name)):
            skills.append({
                "youth_id": assoc.youth_id,
                "skill_id": assoc.skill.id,
                "name": assoc.skill.name,
                "category": assoc.skill.category,
                "proficiency": assoc.proficiency,
                "is_primary": assoc.is_primary,
                "years_of_experience": assoc.years_of_experience,
                "notes": assoc.notes
            })
        return skills

    def save(self, association: models.YouthSkill) -> models.YouthSkill:
        merged = self.db.merge(association) # 이미 있으면 UPDATE, 없으면 INSERT
        self.db.commit()
        return merged

    def delete(self, youth_id: int, skill_id: int) -> bool:
        association = self.find(youth_id, skill_id)
        if association:
            self.db.delete(association)
            self.db.commit()
            return True
        return False

    def clear_primary(self, youth_id: int, exclude_skill_id: Optional[int] = None) -> None:
        query = self.db.query(models.YouthSkill).filter(
            models.YouthSkill.youth_id == youth_id,
            models.YouthSkill.is_primary.is_(True)
        )
        if exclude_skill_id is not None:
            query = query.filter(models.YouthSkill.skill_id != exclude_skill_id)
        for association in query.all():
            association.is_primary = False

    def replace_for_youth(self, youth_id: int, associations: List[models.YouthSkill]) -> int:
        try:
            for existing in self.db.query(models.YouthSkill).filter(models.YouthSkill.youth_id == youth_id).all():
                self.db.delete(existing)
            # 같은 기본 키로 다시 넣으므로 삭제를 먼저 반영합니다.
            self.db.flush()
            self.db.add_all(associations)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return len(associations)
