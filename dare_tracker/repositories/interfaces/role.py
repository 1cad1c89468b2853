from abc import ABC, abstractmethod
from typing import List, Optional
from dare_tracker.database import models

class IRoleRepository(ABC):
    @abstractmethod
    def create(self, role_model: models.Role) -> models.Role:
        """새로운 역할을 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, role_id: int) -> Optional[models.Role]:
        """고유 ID로 특정 역할을 조회합니다."""
        pass

    @abstractmethod
    def find_by_name(self, name: str, case_insensitive: bool = False) -> Optional[models.Role]:
        """이름으로 특정 역할을 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Role]:
        """모든 역할의 목록을 조회합니다."""
        pass

    @abstractmethod
    def update(self, role: models.Role) -> models.Role:
        """변경된 역할 정보를 저장합니다."""
        pass

    @abstractmethod
    def delete(self, role: models.Role) -> bool:
        """역할과 그 역할의 모든 권한 행을 삭제합니다."""
        pass
