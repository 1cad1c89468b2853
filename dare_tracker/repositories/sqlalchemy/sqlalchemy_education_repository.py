from typing import List, Optional
from sqlalchemy.orm import Session
from dare_tracker.database import models
from dare_tracker.repositories.interfaces import IEducationRepository

class SqlalchemyEducationRepository(IEducationRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, education_model: models.Education) -> models.Education:
        self.db.add(education_model)
        self.db.commit()
        self.db.refresh(education_model)
        return education_model

    def find_by_id(self, education_id: int) -> Optional[models.Education]:
        return self.db.query(models.Education).filter(models.Education.id == education_id).first()

    def list_by_youth(self, youth_id: int) -> List[models.Education]:
        return self.db.query(models.Education).filter(
            models.Education.youth_id == youth_id
        ).order_by(models.Education.graduation_year.desc(), models.Education.id.asc()).all()

    def update(self, education: models.Education) -> models.Education:
        self.db.commit()
        self.db.refresh(education)
        return education

    def delete(self, education: models.Education) -> bool:
        if education:
            self.db.delete(education)
            self.db.commit()
            return True
        return False

    def clear_highest_flag(self, youth_id: int, exclude_id: Optional[int] = None) -> None:
        query = self.db.query(models.Education).filter(
            models.Education.youth_id == youth_id,
            models.Education.is_highest_qualification.is_(True)
        )
        if exclude_id is not None:
            query = query.filter(models.Education.id != exclude_id)
        for record in query.all():
            record.is_highest_qualification = False
