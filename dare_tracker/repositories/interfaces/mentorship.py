from abc import ABC, abstractmethod
from typing import List, Optional
from dare_tracker.database import models

class IMentorshipMessageRepository(ABC):
    @abstractmethod
    def create(self, message_model: models.MentorshipMessage) -> models.MentorshipMessage:
        """멘토링 메시지를 저장합니다."""
        pass

    @abstractmethod
    def find_by_id(self, message_id: int) -> Optional[models.MentorshipMessage]:
        """고유 ID로 메시지를 조회합니다."""
        pass

    @abstractmethod
    def list_messages(self, mentor_id: Optional[int] = None,
                      business_id: Optional[int] = None) -> List[models.MentorshipMessage]:
        """메시지를 오래된 순으로 조회합니다. 멘토나 사업체로 걸러낼 수 있습니다."""
        pass

    @abstractmethod
    def update(self, message: models.MentorshipMessage) -> models.MentorshipMessage:
        """변경된 메시지를 저장합니다."""
        pass


class IBusinessAdviceRepository(ABC):
    @abstractmethod
    def create(self, advice_model: models.BusinessAdvice) -> models.BusinessAdvice:
        """사업 조언을 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, advice_id: int) -> Optional[models.BusinessAdvice]:
        """고유 ID로 사업 조언을 조회합니다."""
        pass

    @abstractmethod
    def list_advice(self, mentor_id: Optional[int] = None,
                    business_id: Optional[int] = None) -> List[models.BusinessAdvice]:
        """사업 조언을 최근 순으로 조회합니다. 멘토나 사업체로 걸러낼 수 있습니다."""
        pass

    @abstractmethod
    def update(self, advice: models.BusinessAdvice) -> models.BusinessAdvice:
        """변경된 사업 조언을 저장합니다."""
        pass

    @abstractmethod
    def delete(self, advice: models.BusinessAdvice) -> bool:
        """사업 조언을 삭제합니다."""
        pass
