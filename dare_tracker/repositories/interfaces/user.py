from abc import ABC, abstractmethod
from typing import List, Optional
from dare_tracker.database import models

class IUserRepository(ABC):
    @abstractmethod
    def create(self, user_model: models.User) -> models.User:
        """새로운 사용자를 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[models.User]:
        """고유 ID로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[models.User]:
        """사용자 이름으로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.User]:
        """모든 사용자의 목록을 조회합니다."""
        pass

    @abstractmethod
    def update(self, user: models.User) -> models.User:
        """변경된 사용자 정보를 저장합니다."""
        pass

    @abstractmethod
    def delete(self, user: models.User) -> bool:
        """특정 사용자를 데이터베이스에서 삭제합니다."""
        pass

    @abstractmethod
    def count_by_role(self, role_name: str) -> int:
        """특정 역할이 할당된 사용자 수를 반환합니다."""
        pass

    @abstractmethod
    def rename_role(self, old_name: str, new_name: str) -> int:
        """old_name 역할을 가진 모든 사용자의 역할을 new_name으로 바꾸고, 변경된 수를 반환합니다."""
        pass
