from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session, joinedload
from dare_tracker.database import models
from dare_tracker.repositories.interfaces import IMakerspaceRepository, IMakerspaceAssignmentRepository

class SqlalchemyMakerspaceRepository(IMakerspaceRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, makerspace_model: models.Makerspace) -> models.Makerspace:
        self.db.add(makerspace_model)
        self.db.commit()
        self.db.refresh(makerspace_model)
        return makerspace_model

    def find_by_id(self, makerspace_id: int) -> Optional[models.Makerspace]:
        return self.db.query(models.Makerspace).filter(models.Makerspace.id == makerspace_id).first()

    def list_all(self, district: Optional[str] = None) -> List[models.Makerspace]:
        query = self.db.query(models.Makerspace)
        if district:
            query = query.filter(models.Makerspace.district == district)
        return query.order_by(models.Makerspace.name.asc()).all()

    def update(self, makerspace: models.Makerspace) -> models.Makerspace:
        self.db.commit()
        self.db.refresh(makerspace)
        return makerspace

    def delete(self, makerspace: models.Makerspace) -> bool:
        if makerspace:
            self.db.delete(makerspace)
            self.db.commit()
            return True
        return False


class SqlalchemyMakerspaceAssignmentRepository(IMakerspaceAssignmentRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, assignment: models.BusinessMakerspaceAssignment) -> models.BusinessMakerspaceAssignment:
        self.db.add(assignment)
        self.db.commit()
        self.db.refresh(assignment)
        return assignment

    def find_by_id(self, assignment_id: int) -> Optional[models.BusinessMakerspaceAssignment]:
        return self.db.query(models.BusinessMakerspaceAssignment).filter(
            models.BusinessMakerspaceAssignment.id == assignment_id
        ).first()

    def find_by_business(self, business_id: int) -> Optional[models.BusinessMakerspaceAssignment]:
        return self.db.query(models.BusinessMakerspaceAssignment).filter(
            models.BusinessMakerspaceAssignment.business_id == business_id
        ).first()

    def list_by_makerspace(self, makerspace_id: int) -> List[Dict[str, Any]]:
        assignments = self.db.query(models.BusinessMakerspaceAssignment).options(
            joinedload(models.BusinessMakerspaceAssignment.business)
        ).filter(models.BusinessMakerspaceAssignment.makerspace_id == makerspace_id).all()

        businesses = []
        for assignment in assignments:
            businesses.append({
                "assignment_id": assignment.id,
                "business_id": assignment.business.id,
                "business_name": assignment.business.business_name,
                "district": assignment.business.district,
                "dare_model": assignment.business.dare_model,
                "assigned_date": assignment.assigned_date.isoformat() if assignment.assigned_date else None,
                "is_active": assignment.is_active,
                "notes": assignment.notes
            })
        return businesses

    def update(self, assignment: models.BusinessMakerspaceAssignment) -> models.BusinessMakerspaceAssignment:
        self.db.commit()
        self.db.refresh(assignment)
        return assignment

    def delete(self, assignment: models.BusinessMakerspaceAssignment) -> bool:
        if assignment:
            self.db.delete(assignment)
            self.db.commit()
            return True
        return False
