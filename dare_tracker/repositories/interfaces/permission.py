from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Set, Tuple
from dare_tracker.database import models

class IPermissionRepository(ABC):
    """시스템이 알고 있는 (리소스, 동작) 쌍의 카탈로그에 접근합니다."""

    @abstractmethod
    def list_all(self) -> List[models.Permission]:
        """카탈로그의 모든 권한을 리소스, 동작 순으로 조회합니다."""
        pass

    @abstractmethod
    def list_pairs(self) -> Set[Tuple[str, str]]:
        """카탈로그의 모든 (리소스, 동작) 쌍을 집합으로 반환합니다."""
        pass

    @abstractmethod
    def create_many(self, pairs: Iterable[Tuple[str, str]]) -> int:
        """여러 (리소스, 동작) 쌍을 카탈로그에 추가하고, 추가된 수를 반환합니다."""
        pass


class IRolePermissionRepository(ABC):
    """(역할, 리소스, 동작) 권한 부여 행에 접근합니다."""

    @abstractmethod
    def list_by_role(self, role_id: int) -> List[models.RolePermission]:
        """특정 역할의 모든 권한 행을 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.RolePermission]:
        """모든 역할의 권한 행을 조회합니다."""
        pass

    @abstractmethod
    def find(self, role_id: int, resource: str, action: str) -> Optional[models.RolePermission]:
        """특정 (역할, 리소스, 동작) 행을 조회합니다."""
        pass

    @abstractmethod
    def exists_for_role_name(self, role_name: str, resource: str, action: str) -> bool:
        """
        역할 이름으로 권한 행의 존재 여부를 확인합니다.
        역할이 비활성화되어 있으면 False를 반환합니다.
        """
        pass

    @abstractmethod
    def create(self, role_permission: models.RolePermission) -> models.RolePermission:
        """권한 행을 추가합니다."""
        pass

    @abstractmethod
    def delete(self, role_permission: models.RolePermission) -> bool:
        """권한 행을 삭제합니다."""
        pass

    @abstractmethod
    def replace_for_role(self, role_id: int, pairs: Iterable[Tuple[str, str]]) -> int:
        """
        역할의 모든 권한 행을 삭제한 뒤 주어진 쌍으로 다시 채웁니다.
        삭제와 삽입은 하나의 트랜잭션으로 처리됩니다.

        Returns:
            새로 삽입된 행의 수.
        """
        pass

    @abstractmethod
    def add_missing_for_role(self, role_id: int, pairs: Iterable[Tuple[str, str]]) -> int:
        """역할에 없는 쌍만 추가하고, 추가된 행의 수를 반환합니다."""
        pass
