from abc import ABC, abstractmethod
from typing import List, Optional
from dare_tracker.database import models

class IEducationRepository(ABC):
    @abstractmethod
    def create(self, education_model: models.Education) -> models.Education:
        """학력 기록을 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, education_id: int) -> Optional[models.Education]:
        """고유 ID로 학력 기록을 조회합니다."""
        pass

    @abstractmethod
    def list_by_youth(self, youth_id: int) -> List[models.Education]:
        """특정 청년의 모든 학력 기록을 조회합니다."""
        pass

    @abstractmethod
    def update(self, education: models.Education) -> models.Education:
        """변경된 학력 기록을 저장합니다."""
        pass

    @abstractmethod
    def delete(self, education: models.Education) -> bool:
        """학력 기록을 삭제합니다."""
        pass

    @abstractmethod
    def clear_highest_flag(self, youth_id: int, exclude_id: Optional[int] = None) -> None:
        """청년의 다른 학력 기록에서 최종 학력 표시를 해제합니다. (커밋하지 않음)"""
        pass
