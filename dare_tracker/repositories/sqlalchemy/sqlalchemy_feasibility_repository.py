from typing import List, Optional
from sqlalchemy.orm import Session
from dare_tracker.database import models
from dare_tracker.repositories.interfaces import IFeasibilityAssessmentRepository

class SqlalchemyFeasibilityAssessmentRepository(IFeasibilityAssessmentRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, assessment_model: models.FeasibilityAssessment) -> models.FeasibilityAssessment:
        self.db.add(assessment_model)
        self.db.commit()
        self.db.refresh(assessment_model)
        return assessment_model

    def find_by_id(self, assessment_id: int) -> Optional[models.FeasibilityAssessment]:
        return self.db.query(models.FeasibilityAssessment).filter(
            models.FeasibilityAssessment.id == assessment_id
        ).first()

    def list_all(self, business_id: Optional[int] = None, youth_id: Optional[int] = None,
                 status: Optional[str] = None) -> List[models.FeasibilityAssessment]:
        query = self.db.query(models.FeasibilityAssessment)
        if business_id is not None:
            query = query.filter(models.FeasibilityAssessment.business_id == business_id)
        if youth_id is not None:
            query = query.filter(models.FeasibilityAssessment.youth_id == youth_id)
        if status:
            query = query.filter(models.FeasibilityAssessment.status == status)
        return query.order_by(
            models.FeasibilityAssessment.assessment_date.desc(), models.FeasibilityAssessment.id.desc()
        ).all()

    def update(self, assessment: models.FeasibilityAssessment) -> models.FeasibilityAssessment:
        self.db.commit()
        self.db.refresh(assessment)
        return assessment

    def delete(self, assessment: models.FeasibilityAssessment) -> bool:
        if assessment:
            self.db.delete(assessment)
            self.db.commit()
            return True
        return False
