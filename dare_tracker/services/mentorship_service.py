from typing import Dict, Any, List, Optional

from dare_tracker.database import models
from dare_tracker.database.choices import ADVICE_CATEGORIES, MESSAGE_SENDERS, ADVICE_STATUSES, ADVICE_PRIORITIES
from dare_tracker.repositories.interfaces import (
    IMentorshipMessageRepository, IBusinessAdviceRepository, IMentorRepository, IBusinessRepository
)
from dare_tracker.services.exceptions import (
    MentorshipMessageNotFoundError, BusinessAdviceNotFoundError, MentorNotFoundError, BusinessNotFoundError
)
from dare_tracker.utils.model_utils import apply_fields, model_to_dict
from dare_tracker.utils.validation import require_choice

ADVICE_UPDATABLE_FIELDS = ("advice_content", "category", "follow_up_notes", "implementation_status", "priority")


def _require_text(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field} is required.")
    return value.strip()


class MentorshipService:
    """멘토와 사업체 사이의 메시지, 그리고 멘토가 남긴 사업 조언을 관리합니다."""

    def __init__(self, message_repo: IMentorshipMessageRepository, advice_repo: IBusinessAdviceRepository,
                 mentor_repo: IMentorRepository, business_repo: IBusinessRepository):
        self.message_repo = message_repo
        self.advice_repo = advice_repo
        self.mentor_repo = mentor_repo
        self.business_repo = business_repo

    def _require_pair(self, mentor_id: int, business_id: int):
        if not self.mentor_repo.find_by_id(mentor_id):
            raise MentorNotFoundError(f"Mentor with id '{mentor_id}' not found.")
        if not self.business_repo.find_by_id(business_id):
            raise BusinessNotFoundError(f"Business with id '{business_id}' not found.")

    # --- 멘토링 메시지 ---

    def send_message(self, mentor_id: int, business_id: int, message: str, sender: str,
                     category: Optional[str] = None) -> Dict[str, Any]:
        """
        멘토와 사업체 사이의 메시지를 기록합니다.

        Raises:
            MentorNotFoundError: 멘토가 없을 때.
            BusinessNotFoundError: 사업체가 없을 때.
            ValueError: 메시지가 비었거나 발신자, 분류 값이 올바르지 않을 때.
        """
        message = _require_text("message", message)
        if require_choice("sender", sender, MESSAGE_SENDERS) is None:
            raise ValueError("sender is required.")
        category = require_choice("category", category, ADVICE_CATEGORIES)
        self._require_pair(mentor_id, business_id)

        record = models.MentorshipMessage(
            mentor_id=mentor_id, business_id=business_id, message=message,
            sender=sender, category=category, is_read=False
        )
        return model_to_dict(self.message_repo.create(record))

    def list_messages(self, mentor_id: Optional[int] = None, business_id: Optional[int] = None) -> List[Dict[str, Any]]:
        return [model_to_dict(m) for m in self.message_repo.list_messages(mentor_id=mentor_id, business_id=business_id)]

    def mark_message_read(self, message_id: int) -> Dict[str, Any]:
        message = self.message_repo.find_by_id(message_id)
        if not message:
            raise MentorshipMessageNotFoundError(f"Mentorship message with id '{message_id}' not found.")
        message.is_read = True
        return model_to_dict(self.message_repo.update(message))

    # --- 사업 조언 ---

    def _get_advice_model(self, advice_id: int) -> models.BusinessAdvice:
        advice = self.advice_repo.find_by_id(advice_id)
        if not advice:
            raise BusinessAdviceNotFoundError(f"Business advice with id '{advice_id}' not found.")
        return advice

    @staticmethod
    def _clean_advice(data: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(data)
        if "advice_content" in data:
            data["advice_content"] = _require_text("advice_content", data["advice_content"])
        if "category" in data:
            if require_choice("category", data["category"], ADVICE_CATEGORIES) is None:
                raise ValueError("category is required.")
        for field, choices in (("implementation_status", ADVICE_STATUSES), ("priority", ADVICE_PRIORITIES)):
            if field in data:
                data[field] = require_choice(field, data[field], choices)
                if data[field] is None:
                    raise ValueError(f"{field} cannot be empty.")
        return data

    def create_advice(self, mentor_id: int, business_id: int, created_by: Optional[int] = None,
                      **data) -> Dict[str, Any]:
        """
        멘토의 사업 조언을 기록합니다. 이행 상태는 pending, 우선순위는 medium이 기본입니다.

        Raises:
            ValueError: 조언 내용이나 분류가 없거나 값이 올바르지 않을 때.
        """
        data.setdefault("advice_content", None)
        data.setdefault("category", None)
        data = self._clean_advice(data)
        self._require_pair(mentor_id, business_id)

        advice = models.BusinessAdvice(mentor_id=mentor_id, business_id=business_id, created_by=created_by)
        apply_fields(advice, data, allowed=ADVICE_UPDATABLE_FIELDS)
        advice.implementation_status = advice.implementation_status or "pending"
        advice.priority = advice.priority or "medium"
        return model_to_dict(self.advice_repo.create(advice))

    def list_advice(self, mentor_id: Optional[int] = None, business_id: Optional[int] = None) -> List[Dict[str, Any]]:
        return [model_to_dict(a) for a in self.advice_repo.list_advice(mentor_id=mentor_id, business_id=business_id)]

    def get_advice(self, advice_id: int) -> Dict[str, Any]:
        return model_to_dict(self._get_advice_model(advice_id))

    def update_advice(self, advice_id: int, updated_by: Optional[int] = None, **changes) -> Dict[str, Any]:
        advice = self._get_advice_model(advice_id)
        changes = self._clean_advice(changes)
        apply_fields(advice, changes, allowed=ADVICE_UPDATABLE_FIELDS)
        advice.updated_by = updated_by
        return model_to_dict(self.advice_repo.update(advice))

    def delete_advice(self, advice_id: int) -> bool:
        advice = self._get_advice_model(advice_id)
        self.advice_repo.delete(advice)
        return True
