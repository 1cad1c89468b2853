from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from dare_tracker.database import models

class ISkillRepository(ABC):
    @abstractmethod
    def create(self, skill_model: models.Skill) -> models.Skill:
        """기술 항목을 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, skill_id: int) -> Optional[models.Skill]:
        """고유 ID로 기술 항목을 조회합니다."""
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[models.Skill]:
        """이름으로 기술 항목을 조회합니다. (대소문자 구분 없음)"""
        pass

    @abstractmethod
    def list_all(self, active_only: bool = False, category: Optional[str] = None) -> List[models.Skill]:
        """기술 항목을 이름순으로 조회합니다."""
        pass

    @abstractmethod
    def update(self, skill: models.Skill) -> models.Skill:
        """변경된 기술 항목을 저장합니다."""
        pass

    @abstractmethod
    def delete(self, skill: models.Skill) -> bool:
        """기술 항목과 그 항목의 청년 연결을 모두 삭제합니다."""
        pass


class IYouthSkillRepository(ABC):
    @abstractmethod
    def find(self, youth_id: int, skill_id: int) -> Optional[models.YouthSkill]:
        """청년-기술 연결을 조회합니다."""
        pass

    @abstractmethod
    def list_by_youth(self, youth_id: int) -> List[Dict[str, Any]]:
        """
        청년의 기술 목록을 기술 이름과 함께 조회합니다. 주 기술이 먼저 옵니다.

        Returns:
            (예: [{'skill_id': 3, 'name': 'Tailoring', 'proficiency': 'Advanced', 'is_primary': True, ...}])
        """
        pass

    @abstractmethod
    def save(self, association: models.YouthSkill) -> models.YouthSkill:
        """청년-기술 연결을 저장합니다. 이미 있으면 갱신합니다."""
        pass

    @abstractmethod
    def delete(self, youth_id: int, skill_id: int) -> bool:
        """청년-기술 연결을 삭제합니다. 연결이 없으면 False를 반환합니다."""
        pass

    @abstractmethod
    def clear_primary(self, youth_id: int, exclude_skill_id: Optional[int] = None) -> None:
        """청년의 다른 기술에서 주 기술 표시를 해제합니다. (커밋하지 않음)"""
        pass

    @abstractmethod
    def replace_for_youth(self, youth_id: int, associations: List[models.YouthSkill]) -> int:
        """청년의 기술 연결을 모두 주어진 목록으로 바꾸고 저장된 수를 반환합니다."""
        pass
