from abc import ABC, abstractmethod
from typing import List, Optional
from dare_tracker.database import models

class ICertificationRepository(ABC):
    @abstractmethod
    def create(self, certification_model: models.Certification) -> models.Certification:
        """자격증 기록을 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, certification_id: int) -> Optional[models.Certification]:
        """고유 ID로 자격증 기록을 조회합니다."""
        pass

    @abstractmethod
    def list_by_youth(self, youth_id: int) -> List[models.Certification]:
        """특정 청년의 자격증을 최근 취득일 순으로 조회합니다."""
        pass

    @abstractmethod
    def update(self, certification: models.Certification) -> models.Certification:
        """변경된 자격증 기록을 저장합니다."""
        pass

    @abstractmethod
    def delete(self, certification: models.Certification) -> bool:
        """자격증 기록을 삭제합니다."""
        pass

    @abstractmethod
    def replace_for_youth(self, youth_id: int, certifications: List[models.Certification]) -> List[models.Certification]:
        """청년의 자격증을 모두 지우고 주어진 목록으로 바꿉니다. 한 트랜잭션으로 처리합니다."""
        pass
