from datetime import date
from typing import Dict, Any, List, Optional

from dare_tracker.database import models
from dare_tracker.database.choices import MENTORSHIP_FOCUSES, MEETING_FREQUENCIES
from dare_tracker.repositories.interfaces import IMentorRepository, IUserRepository, IBusinessRepository
from dare_tracker.services.exceptions import (
    MentorNotFoundError, UserNotFoundError, BusinessNotFoundError, MembershipNotFoundError
)
from dare_tracker.utils.model_utils import apply_fields, model_to_dict
from dare_tracker.utils.validation import normalize_district, require_choice, require_rating

MENTOR_UPDATABLE_FIELDS = ("name", "phone", "email", "assigned_districts", "specialization", "bio", "is_active")


def normalize_districts(districts) -> List[str]:
    """담당 지역 목록을 정규화하고 중복을 제거합니다. (입력 순서 유지)"""
    if districts is None:
        return []
    if isinstance(districts, str):
        districts = [districts]
    result = []
    for value in districts:
        district = normalize_district(value)
        if district and district not in result:
            result.append(district)
    return result


class MentorService:
    """멘토 정보와 멘토-사업체 배정을 관리합니다."""

    def __init__(self, mentor_repo: IMentorRepository, user_repo: IUserRepository, business_repo: IBusinessRepository):
        self.mentor_repo = mentor_repo
        self.user_repo = user_repo
        self.business_repo = business_repo

    def _get_mentor_model(self, mentor_id: int) -> models.Mentor:
        mentor = self.mentor_repo.find_by_id(mentor_id)
        if not mentor:
            raise MentorNotFoundError(f"Mentor with id '{mentor_id}' not found.")
        return mentor

    def _require_business(self, business_id: int):
        if not self.business_repo.find_by_id(business_id):
            raise BusinessNotFoundError(f"Business with id '{business_id}' not found.")

    def create_mentor(self, user_id: int, name: str, assigned_districts=None, **data) -> Dict[str, Any]:
        """
        멘토를 생성합니다. 멘토는 반드시 기존 사용자 계정과 연결되어야 합니다.

        Raises:
            ValueError: 이름이 없거나, 사용자에게 이미 멘토 프로필이 있거나, 지역이 올바르지 않을 때.
            UserNotFoundError: 연결할 사용자가 없을 때.
        """
        if not name:
            raise ValueError("Mentor name is required.")
        if not self.user_repo.find_by_id(user_id):
            raise UserNotFoundError(f"User with id '{user_id}' not found.")
        if self.mentor_repo.find_by_user_id(user_id):
            raise ValueError(f"User '{user_id}' already has a mentor profile.")

        mentor = models.Mentor(user_id=user_id, name=name, assigned_districts=normalize_districts(assigned_districts))
        apply_fields(mentor, data, allowed=("phone", "email", "specialization", "bio", "is_active"))
        return model_to_dict(self.mentor_repo.create(mentor))

    def list_mentors(self, district: Optional[str] = None) -> List[Dict[str, Any]]:
        """멘토 목록을 조회합니다. district가 주어지면 그 지역을 담당하는 멘토만 반환합니다."""
        district = normalize_district(district)
        mentors = self.mentor_repo.list_all()
        if district:
            mentors = [m for m in mentors if district in (m.assigned_districts or [])]
        return [model_to_dict(m) for m in mentors]

    def get_mentor(self, mentor_id: int) -> Dict[str, Any]:
        mentor = self._get_mentor_model(mentor_id)
        result = model_to_dict(mentor)
        result["businesses"] = self.mentor_repo.list_assignments(mentor_id)
        return result

    def update_mentor(self, mentor_id: int, **changes) -> Dict[str, Any]:
        mentor = self._get_mentor_model(mentor_id)
        if "assigned_districts" in changes:
            changes["assigned_districts"] = normalize_districts(changes["assigned_districts"])
        if "name" in changes and not changes["name"]:
            raise ValueError("Mentor name cannot be empty.")
        apply_fields(mentor, changes, allowed=MENTOR_UPDATABLE_FIELDS)
        return model_to_dict(self.mentor_repo.update(mentor))

    def delete_mentor(self, mentor_id: int) -> bool:
        """멘토와 그 멘토의 모든 사업체 배정을 삭제합니다."""
        mentor = self._get_mentor_model(mentor_id)
        self.mentor_repo.delete(mentor)
        return True

    # --- 멘토-사업체 배정 ---

    def assign_business(self, mentor_id: int, business_id: int, mentorship_focus: Optional[str] = None,
                        meeting_frequency: Optional[str] = None, progress_rating: Optional[int] = None,
                        mentorship_progress: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        멘토에게 사업체를 배정합니다. 이미 배정되어 있으면 배정 정보를 갱신합니다.

        Returns:
            갱신된 배정 목록.

        Raises:
            MentorNotFoundError: 멘토가 없을 때.
            BusinessNotFoundError: 사업체가 없을 때.
            ValueError: 중점 분야, 면담 주기, 평가 점수 값이 올바르지 않을 때.
        """
        self._get_mentor_model(mentor_id)
        self._require_business(business_id)

        association = models.MentorBusinessRelationship(
            mentor_id=mentor_id,
            business_id=business_id,
            assigned_date=date.today(),
            is_active=True,
            mentorship_focus=require_choice("mentorship_focus", mentorship_focus, MENTORSHIP_FOCUSES),
            meeting_frequency=require_choice("meeting_frequency", meeting_frequency, MEETING_FREQUENCIES) or "Monthly",
            progress_rating=require_rating("progress_rating", progress_rating),
            mentorship_progress=mentorship_progress
        )
        self.mentor_repo.assign_business(association)
        return self.mentor_repo.list_assignments(mentor_id)

    def list_assignments(self, mentor_id: int) -> List[Dict[str, Any]]:
        self._get_mentor_model(mentor_id)
        return self.mentor_repo.list_assignments(mentor_id)

    def unassign_business(self, mentor_id: int, business_id: int) -> bool:
        """
        Raises:
            MentorNotFoundError: 멘토가 없을 때.
            MembershipNotFoundError: 멘토에게 해당 사업체가 배정되어 있지 않을 때.
        """
        self._get_mentor_model(mentor_id)
        if not self.mentor_repo.unassign_business(mentor_id, business_id):
            raise MembershipNotFoundError(f"Business '{business_id}' is not assigned to mentor '{mentor_id}'.")
        return True
