from typing import List, Optional
from sqlalchemy.orm import Session
from dare_tracker.database import models
from dare_tracker.repositories.interfaces import IBusinessTrackingRepository

class SqlalchemyBusinessTrackingRepository(IBusinessTrackingRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, tracking_model: models.BusinessTracking) -> models.BusinessTracking:
        self.db.add(tracking_model)
        self.db.commit()
        self.db.refresh(tracking_model)
        return tracking_model

    def find_by_id(self, tracking_id: int) -> Optional[models.BusinessTracking]:
        return self.db.query(models.BusinessTracking).filter(models.BusinessTracking.id == tracking_id).first()

    def list_by_business(self, business_id: int) -> List[models.BusinessTracking]:
        return self.db.query(models.BusinessTracking).filter(
            models.BusinessTracking.business_id == business_id
        ).order_by(models.BusinessTracking.tracking_date.desc(), models.BusinessTracking.id.desc()).all()

    def update(self, tracking: models.BusinessTracking) -> models.BusinessTracking:
        self.db.commit()
        self.db.refresh(tracking)
        return tracking

    def delete(self, tracking: models.BusinessTracking) -> bool:
        if tracking:
            self.db.delete(tracking)
            self.db.commit()
            return True
        return False
