from abc import ABC, abstractmethod
from typing import List, Optional
from dare_tracker.database import models

class IFeasibilityAssessmentRepository(ABC):
    @abstractmethod
    def create(self, assessment_model: models.FeasibilityAssessment) -> models.FeasibilityAssessment:
        """타당성 평가를 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, assessment_id: int) -> Optional[models.FeasibilityAssessment]:
        """고유 ID로 타당성 평가를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self, business_id: Optional[int] = None, youth_id: Optional[int] = None,
                 status: Optional[str] = None) -> List[models.FeasibilityAssessment]:
        """타당성 평가를 최근 평가일 순으로 조회합니다. 주어진 조건으로 걸러냅니다."""
        pass

    @abstractmethod
    def update(self, assessment: models.FeasibilityAssessment) -> models.FeasibilityAssessment:
        """변경된 타당성 평가를 저장합니다."""
        pass

    @abstractmethod
    def delete(self, assessment: models.FeasibilityAssessment) -> bool:
        """타당성 평가를 삭제합니다."""
        pass
