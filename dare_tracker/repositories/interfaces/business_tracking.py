from abc import ABC, abstractmethod
from typing import List, Optional
from dare_tracker.database import models

class IBusinessTrackingRepository(ABC):
    @abstractmethod
    def create(self, tracking_model: models.BusinessTracking) -> models.BusinessTracking:
        """사업 추적 기록을 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, tracking_id: int) -> Optional[models.BusinessTracking]:
        """고유 ID로 사업 추적 기록을 조회합니다."""
        pass

    @abstractmethod
    def list_by_business(self, business_id: int) -> List[models.BusinessTracking]:
        """사업체의 추적 기록을 최신순으로 조회합니다."""
        pass

    @abstractmethod
    def update(self, tracking: models.BusinessTracking) -> models.BusinessTracking:
        """변경된 추적 기록을 저장합니다."""
        pass

    @abstractmethod
    def delete(self, tracking: models.BusinessTracking) -> bool:
        """추적 기록을 삭제합니다."""
        pass
