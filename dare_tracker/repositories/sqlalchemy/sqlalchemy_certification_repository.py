from typing import List, Optional
from sqlalchemy.orm import Session
from dare_tracker.database import models
from dare_tracker.repositories.interfaces import ICertificationRepository

class SqlalchemyCertificationRepository(ICertificationRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, certification_model: models.Certification) -> models.Certification:
        self.db.add(certification_model)
        self.db.commit()
        self.db.refresh(certification_model)
        return certification_model

    def find_by_id(self, certification_id: int) -> Optional[models.Certification]:
        return self.db.query(models.Certification).filter(models.Certification.id == certification_id).first()

    def list_by_youth(self, youth_id: int) -> List[models.Certification]:
        return self.db.query(models.Certification).filter(
            models.Certification.youth_id == youth_id
        ).order_by(models.Certification.issue_date.desc(), models.Certification.id.asc()).all()

    def update(self, certification: models.Certification) -> models.Certification:
        self.db.commit()
        self.db.refresh(certification)
        return certification

    def delete(self, certification: models.Certification) -> bool:
        if certification:
            self.db.delete(certification)
            self.db.commit()
            return True
        return False

    def replace_for_youth(self, youth_id: int, certifications: List[models.Certification]) -> List[models.Certification]:
        try:
            self.db.query(models.Certification).filter(
                models.Certification.youth_id == youth_id
            ).delete(synchronize_session="fetch")
            self.db.add_all(certifications)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        for certification in certifications:
            self.db.refresh(certification)
        return certifications
