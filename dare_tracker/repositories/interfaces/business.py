from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from dare_tracker.database import models

class IBusinessRepository(ABC):
    @abstractmethod
    def create(self, business_model: models.BusinessProfile) -> models.BusinessProfile:
        """사업체를 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, business_id: int) -> Optional[models.BusinessProfile]:
        """고유 ID로 사업체를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self, district: Optional[str] = None) -> List[models.BusinessProfile]:
        """사업체 목록을 이름순으로 조회합니다."""
        pass

    @abstractmethod
    def update(self, business: models.BusinessProfile) -> models.BusinessProfile:
        """변경된 사업체 정보를 저장합니다."""
        pass

    @abstractmethod
    def delete(self, business: models.BusinessProfile) -> bool:
        """사업체와 종속 관계, 추적 기록을 삭제합니다."""
        pass

    @abstractmethod
    def list_members(self, business_id: int) -> List[Dict[str, Any]]:
        """
        사업체에 소속된 청년과 각자의 역할을 조회합니다.

        Returns:
            (예: [{'youth_id': 3, 'full_name': 'Ama Mensah', 'role': 'Owner', ...}])
        """
        pass

    @abstractmethod
    def add_member(self, association: models.BusinessYouthRelationship) -> models.BusinessYouthRelationship:
        """청년을 사업체에 소속시킵니다. 이미 소속되어 있으면 정보를 갱신합니다."""
        pass

    @abstractmethod
    def remove_member(self, business_id: int, youth_id: int) -> bool:
        """청년의 사업체 소속을 해제합니다. 관계가 없으면 False를 반환합니다."""
        pass
