from abc import ABC, abstractmethod
from typing import List, Optional
from dare_tracker.database import models

class IYouthProfileRepository(ABC):
    @abstractmethod
    def create(self, profile_model: models.YouthProfile) -> models.YouthProfile:
        """새로운 청년 프로필을 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, profile_id: int) -> Optional[models.YouthProfile]:
        """고유 ID로 청년 프로필을 조회합니다. (삭제 표시된 프로필 포함)"""
        pass

    @abstractmethod
    def find_by_participant_code(self, participant_code: str) -> Optional[models.YouthProfile]:
        """참가자 코드로 청년 프로필을 조회합니다."""
        pass

    @abstractmethod
    def list_all(self, district: Optional[str] = None, include_deleted: bool = False) -> List[models.YouthProfile]:
        """청년 프로필 목록을 이름순으로 조회합니다. district가 주어지면 해당 지역만 조회합니다."""
        pass

    @abstractmethod
    def update(self, profile: models.YouthProfile) -> models.YouthProfile:
        """변경된 프로필을 저장합니다."""
        pass

    @abstractmethod
    def delete_all(self) -> int:
        """모든 청년 프로필과 종속 기록을 삭제하고, 삭제된 프로필 수를 반환합니다."""
        pass
