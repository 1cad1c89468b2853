from typing import List, Optional
from sqlalchemy.orm import Session
from dare_tracker.database import models
from dare_tracker.repositories.interfaces import IYouthProfileRepository

class SqlalchemyYouthProfileRepository(IYouthProfileRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, profile_model: models.YouthProfile) -> models.YouthProfile:
        self.db.add(profile_model)
        self.db.commit()
        self.db.refresh(profile_model)
        return profile_model

    def find_by_id(self, profile_id: int) -> Optional[models.YouthProfile]:
        return self.db.query(models.YouthProfile).filter(models.YouthProfile.id == profile_id).first()

    def find_by_participant_code(self, participant_code: str) -> Optional[models.YouthProfile]:
        return self.db.query(models.YouthProfile).filter(
            models.YouthProfile.participant_code == participant_code
        ).first()

    def list_all(self, district: Optional[str] = None, include_deleted: bool = False) -> List[models.YouthProfile]:
        query = self.db.query(models.YouthProfile)
        if not include_deleted:
            query = query.filter(models.YouthProfile.is_deleted.is_(False))
        if district:
            query = query.filter(models.YouthProfile.district == district)
        return query.order_by(models.YouthProfile.full_name.asc()).all()

    def update(self, profile: models.YouthProfile) -> models.YouthProfile:
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def delete_all(self) -> int:
        # 종속 테이블부터 삭제 (외래 키 제약)
        try:
            self.db.query(models.BusinessYouthRelationship).delete(synchronize_session="fetch")
            self.db.query(models.YouthTraining).delete(synchronize_session="fetch")
            self.db.query(models.Education).delete(synchronize_session="fetch")
            self.db.query(models.Certification).delete(synchronize_session="fetch")
            self.db.query(models.YouthSkill).delete(synchronize_session="fetch")
            # 타당성 평가는 사업체 소속이므로 청년 연결만 끊습니다.
            self.db.query(models.FeasibilityAssessment).filter(
                models.FeasibilityAssessment.youth_id.isnot(None)
            ).update({models.FeasibilityAssessment.youth_id: None}, synchronize_session="fetch")
            deleted = self.db.query(models.YouthProfile).delete(synchronize_session="fetch")
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return deleted
