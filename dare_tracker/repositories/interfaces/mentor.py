from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from dare_tracker.database import models

class IMentorRepository(ABC):
    @abstractmethod
    def create(self, mentor_model: models.Mentor) -> models.Mentor:
        """멘토를 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, mentor_id: int) -> Optional[models.Mentor]:
        """고유 ID로 멘토를 조회합니다."""
        pass

    @abstractmethod
    def find_by_user_id(self, user_id: int) -> Optional[models.Mentor]:
        """연결된 사용자 ID로 멘토를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Mentor]:
        """모든 멘토를 이름순으로 조회합니다."""
        pass

    @abstractmethod
    def update(self, mentor: models.Mentor) -> models.Mentor:
        """변경된 멘토 정보를 저장합니다."""
        pass

    @abstractmethod
    def delete(self, mentor: models.Mentor) -> bool:
        """멘토와 그 사업체 배정 관계를 삭제합니다."""
        pass

    @abstractmethod
    def list_assignments(self, mentor_id: int) -> List[Dict[str, Any]]:
        """
        멘토에게 배정된 사업체 목록을 조회합니다.

        Returns:
            (예: [{'business_id': 2, 'business_name': 'Krobo Beads', 'meeting_frequency': 'Monthly', ...}])
        """
        pass

    @abstractmethod
    def assign_business(self, association: models.MentorBusinessRelationship) -> models.MentorBusinessRelationship:
        """멘토에게 사업체를 배정합니다. 이미 배정되어 있으면 정보를 갱신합니다."""
        pass

    @abstractmethod
    def unassign_business(self, mentor_id: int, business_id: int) -> bool:
        """멘토의 사업체 배정을 해제합니다. 관계가 없으면 False를 반환합니다."""
        pass
