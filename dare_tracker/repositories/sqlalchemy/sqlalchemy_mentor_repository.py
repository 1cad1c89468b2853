from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session, joinedload
from dare_tracker.database import models
from dare_tracker.repositories.interfaces import IMentorRepository

class SqlalchemyMentorRepository(IMentorRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, mentor_model: models.Mentor) -> models.Mentor:
        self.db.add(mentor_model)
        self.db.commit()
        self.db.refresh(mentor_model)
        return mentor_model

    def find_by_id(self, mentor_id: int) -> Optional[models.Mentor]:
        return self.db.query(models.Mentor).filter(models.Mentor.id == mentor_id).first()

    def find_by_user_id(self, user_id: int) -> Optional[models.Mentor]:
        return self.db.query(models.Mentor).filter(models.Mentor.user_id == user_id).first()

    def list_all(self) -> List[models.Mentor]:
        return self.db.query(models.Mentor).order_by(models.Mentor.name.asc()).all()

    def update(self, mentor: models.Mentor) -> models.Mentor:
        self.db.commit()
        self.db.refresh(mentor)
        return mentor

    def delete(self, mentor: models.Mentor) -> bool:
        if mentor:
            self.db.delete(mentor)
            self.db.commit()
            return True
        return False

    def list_assignments(self, mentor_id: int) -> List[Dict[str, Any]]:
        associations = self.db.query(models.MentorBusinessRelationship).options(
            joinedload(models.MentorBusinessRelationship.business)
        ).filter(models.MentorBusinessRelationship.mentor_id == mentor_id).all()

        assignments = []
        for assoc in associations:
            assignments.append({
                "business_id": assoc.business.id,
                "business_name": assoc.business.business_name,
                "district": assoc.business.district,
                "assigned_date": assoc.assigned_date.isoformat() if assoc.assigned_date else None,
                "is_active": assoc.is_active,
                "mentorship_focus": assoc.mentorship_focus,
                "meeting_frequency": assoc.meeting_frequency,
                "progress_rating": assoc.progress_rating
            })
        return assignments

    def assign_business(self, association: models.MentorBusinessRelationship) -> models.MentorBusinessRelationship:
        merged = self.db.merge(association) # 이미 있으면 UPDATE, 없으면 INSERT
        self.db.commit()
        return merged

    def unassign_business(self, mentor_id: int, business_id: int) -> bool:
        association = self.db.query(models.MentorBusinessRelationship).filter(
            models.MentorBusinessRelationship.mentor_id == mentor_id,
            models.MentorBusinessRelationship.business_id == business_id
        ).first()
        if association:
            self.db.delete(association)
            self.db.commit()
            return True
        return False
