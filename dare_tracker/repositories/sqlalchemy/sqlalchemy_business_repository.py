from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session, joinedload
from dare_tracker.database import models
from dare_tracker.repositories.interfaces import IBusinessRepository

class SqlalchemyBusinessRepository(IBusinessRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, business_model: models.BusinessProfile) -> models.BusinessProfile:
        self.db.add(business_model)
        self.db.commit()
        self.db.refresh(business_model)
        return business_model

    def find_by_id(self, business_id: int) -> Optional[models.BusinessProfile]:
        return self.db.query(models.BusinessProfile).filter(models.BusinessProfile.id == business_id).first()

    def list_all(self, district: Optional[str] = None) -> List[models.BusinessProfile]:
        query = self.db.query(models.BusinessProfile)
        if district:
            query = query.filter(models.BusinessProfile.district == district)
        return query.order_by(models.BusinessProfile.business_name.asc()).all()

    def update(self, business: models.BusinessProfile) -> models.BusinessProfile:
        self.db.commit()
        self.db.refresh(business)
        return business

    def delete(self, business: models.BusinessProfile) -> bool:
        if business:
            self.db.delete(business)
            self.db.commit()
            return True
        return False

    def list_members(self, business_id: int) -> List[Dict[str, Any]]:
        associations = self.db.query(models.BusinessYouthRelationship).options(
            joinedload(models.BusinessYouthRelationship.youth)
        ).filter(models.BusinessYouthRelationship.business_id == business_id).all()

        members = []
        for assoc in associations:
            members.append({
                "youth_id": assoc.youth.id,
                "full_name": assoc.youth.full_name,
                "participant_code": assoc.youth.participant_code,
                "role": assoc.role,
                "join_date": assoc.join_date.isoformat() if assoc.join_date else None,
                "is_active": assoc.is_active
            })
        return members

    def add_member(self, association: models.BusinessYouthRelationship) -> models.BusinessYouthRelationship:
        merged = self.db.merge(association) # 이미 있으면 UPDATE, 없으면 INSERT
        self.db.commit()
        return merged

    def remove_member(self, business_id: int, youth_id: int) -> bool:
        association = self.db.query(models.BusinessYouthRelationship).filter(
            models.BusinessYouthRelationship.business_id == business_id,
            models.BusinessYouthRelationship.youth_id == youth_id
        ).first()
        if association:
            self.db.delete(association)
            self.db.commit()
            return True
        return False
