from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from dare_tracker.database import models

class IMakerspaceRepository(ABC):
    @abstractmethod
    def create(self, makerspace_model: models.Makerspace) -> models.Makerspace:
        """메이커스페이스를 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, makerspace_id: int) -> Optional[models.Makerspace]:
        """고유 ID로 메이커스페이스를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self, district: Optional[str] = None) -> List[models.Makerspace]:
        """메이커스페이스를 이름순으로 조회합니다. district가 주어지면 해당 지역만 조회합니다."""
        pass

    @abstractmethod
    def update(self, makerspace: models.Makerspace) -> models.Makerspace:
        """변경된 메이커스페이스 정보를 저장합니다."""
        pass

    @abstractmethod
    def delete(self, makerspace: models.Makerspace) -> bool:
        """메이커스페이스와 그 사업체 배정을 삭제합니다."""
        pass


class IMakerspaceAssignmentRepository(ABC):
    @abstractmethod
    def create(self, assignment: models.BusinessMakerspaceAssignment) -> models.BusinessMakerspaceAssignment:
        """사업체를 메이커스페이스에 배정합니다."""
        pass

    @abstractmethod
    def find_by_id(self, assignment_id: int) -> Optional[models.BusinessMakerspaceAssignment]:
        """고유 ID로 배정을 조회합니다."""
        pass

    @abstractmethod
    def find_by_business(self, business_id: int) -> Optional[models.BusinessMakerspaceAssignment]:
        """사업체의 배정을 조회합니다. 사업체당 배정은 최대 하나입니다."""
        pass

    @abstractmethod
    def list_by_makerspace(self, makerspace_id: int) -> List[Dict[str, Any]]:
        """
        메이커스페이스에 배정된 사업체 목록을 조회합니다.

        Returns:
            (예: [{'assignment_id': 4, 'business_id': 2, 'business_name': 'Krobo Beads', 'is_active': True, ...}])
        """
        pass

    @abstractmethod
    def update(self, assignment: models.BusinessMakerspaceAssignment) -> models.BusinessMakerspaceAssignment:
        """변경된 배정 정보를 저장합니다."""
        pass

    @abstractmethod
    def delete(self, assignment: models.BusinessMakerspaceAssignment) -> bool:
        """배정을 삭제합니다."""
        pass
