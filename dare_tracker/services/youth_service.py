import logging
from typing import Dict, Any, List, Optional

from dare_tracker.database import models
from dare_tracker.database.choices import DARE_MODELS, QUALIFICATION_STATUSES
from dare_tracker.repositories.interfaces import IYouthProfileRepository, IEducationRepository
from dare_tracker.services.exceptions import (
    YouthProfileNotFoundError, YouthProfileCreationError, EducationNotFoundError
)
from dare_tracker.utils.model_utils import apply_fields, model_to_dict
from dare_tracker.utils.validation import normalize_district, validate_choices

logger = logging.getLogger(__name__)

PROFILE_CHOICE_FIELDS = {"dare_model": DARE_MODELS}
EDUCATION_CHOICE_FIELDS = {"qualification_status": QUALIFICATION_STATUSES}

# 클라이언트가 직접 설정할 수 없는 프로필 필드
PROFILE_READ_ONLY_FIELDS = {"id", "is_deleted", "created_at", "updated_at"}


def build_full_name(data: Dict[str, Any]) -> Optional[str]:
    """full_name이 없으면 first/middle/last 이름을 이어 붙여 만듭니다."""
    if data.get("full_name"):
        return data["full_name"].strip()
    parts = [data.get("first_name"), data.get("middle_name"), data.get("last_name")]
    joined = " ".join(p.strip() for p in parts if p and p.strip())
    return joined or None


class YouthService:
    """청년 프로필과 학력 기록 관리 서비스를 제공합니다."""

    def __init__(self, profile_repo: IYouthProfileRepository, education_repo: IEducationRepository):
        """
        YouthService를 초기화합니다.

        Args:
            profile_repo: 청년 프로필에 접근하기 위한 리포지토리.
            education_repo: 학력 기록에 접근하기 위한 리포지토리.
        """
        self.profile_repo = profile_repo
        self.education_repo = education_repo

    def _profile_fields(self):
        return {c.name for c in models.YouthProfile.__table__.columns} - PROFILE_READ_ONLY_FIELDS

    def get_profile_model(self, profile_id: int) -> models.YouthProfile:
        """
        삭제되지 않은 청년 프로필 모델을 조회합니다. 다른 서비스에서 존재 확인용으로도 사용합니다.

        Raises:
            YouthProfileNotFoundError: 프로필이 없거나 삭제 표시되었을 때.
        """
        profile = self.profile_repo.find_by_id(profile_id)
        if not profile or profile.is_deleted:
            raise YouthProfileNotFoundError(f"Youth profile with id '{profile_id}' not found.")
        return profile

    # ------------------------------------------------------------------
    # 청년 프로필
    # ------------------------------------------------------------------

    def create_profile(self, **data) -> Dict[str, Any]:
        """
        새로운 청년 프로필을 생성합니다.

        Raises:
            ValueError: 이름이 없거나, 열거형 필드 값이 올바르지 않을 때.
            YouthProfileCreationError: 참가자 코드가 이미 존재할 때.
        """
        data = validate_choices(data, PROFILE_CHOICE_FIELDS)
        full_name = build_full_name(data)
        if not full_name:
            raise ValueError("full_name (or first_name/last_name) is required.")
        data["full_name"] = full_name

        participant_code = data.get("participant_code")
        if participant_code and self.profile_repo.find_by_participant_code(participant_code):
            raise YouthProfileCreationError(f"Participant code '{participant_code}' already exists.")

        profile = apply_fields(models.YouthProfile(), data, allowed=self._profile_fields())
        created = self.profile_repo.create(profile)
        return model_to_dict(created)

    def list_profiles(self, district: Optional[str] = None) -> List[Dict[str, Any]]:
        """삭제되지 않은 청년 프로필 목록을 조회합니다."""
        district = normalize_district(district)
        return [model_to_dict(p) for p in self.profile_repo.list_all(district=district)]

    def get_profile(self, profile_id: int) -> Dict[str, Any]:
        """
        ID로 청년 프로필을 조회합니다. 학력과 훈련 기록 수를 함께 반환합니다.

        Raises:
            YouthProfileNotFoundError: 프로필이 없거나 삭제 표시되었을 때.
        """
        profile = self.get_profile_model(profile_id)
        result = model_to_dict(profile)
        result["education_count"] = len(profile.education_records)
        result["training_count"] = len(profile.training_records)
        return result

    def update_profile(self, profile_id: int, **changes) -> Dict[str, Any]:
        """
        청년 프로필을 부분 수정합니다.

        Raises:
            YouthProfileNotFoundError: 프로필이 없거나 삭제 표시되었을 때.
            YouthProfileCreationError: 바꾸려는 참가자 코드가 다른 프로필에 이미 있을 때.
            ValueError: 수정할 수 없는 필드나 올바르지 않은 값이 포함되었을 때.
        """
        profile = self.get_profile_model(profile_id)
        changes = validate_choices(changes, PROFILE_CHOICE_FIELDS)

        code = changes.get("participant_code")
        if code and code != profile.participant_code:
            existing = self.profile_repo.find_by_participant_code(code)
            if existing and existing.id != profile.id:
                raise YouthProfileCreationError(f"Participant code '{code}' already exists.")

        if "full_name" in changes and not changes["full_name"]:
            raise ValueError("full_name cannot be empty.")

        apply_fields(profile, changes, allowed=self._profile_fields())
        return model_to_dict(self.profile_repo.update(profile))

    def delete_profile(self, profile_id: int) -> bool:
        """
        청년 프로필을 삭제 표시합니다. 기록은 보고서용으로 DB에 남습니다.

        Raises:
            YouthProfileNotFoundError: 프로필이 없거나 이미 삭제 표시되었을 때.
        """
        profile = self.get_profile_model(profile_id)
        profile.is_deleted = True
        self.profile_repo.update(profile)
        logger.info("Youth profile %s marked as deleted", profile_id)
        return True

    # ------------------------------------------------------------------
    # 학력 기록
    # ------------------------------------------------------------------

    def _get_education_model(self, education_id: int) -> models.Education:
        record = self.education_repo.find_by_id(education_id)
        if not record:
            raise EducationNotFoundError(f"Education record with id '{education_id}' not found.")
        return record

    def add_education(self, youth_id: int, **data) -> Dict[str, Any]:
        """
        청년에게 학력 기록을 추가합니다.
        최종 학력으로 표시하면 같은 청년의 다른 기록에서는 표시가 해제됩니다.

        Raises:
            YouthProfileNotFoundError: 청년 프로필이 없을 때.
            ValueError: qualification_type/qualification_name이 없거나 상태 값이 올바르지 않을 때.
        """
        self.get_profile_model(youth_id)
        data = validate_choices(data, EDUCATION_CHOICE_FIELDS)
        if not data.get("qualification_type") or not data.get("qualification_name"):
            raise ValueError("qualification_type and qualification_name are required.")
        data.pop("youth_id", None)

        record = apply_fields(models.Education(youth_id=youth_id), data)
        if record.is_highest_qualification:
            self.education_repo.clear_highest_flag(youth_id)
        return model_to_dict(self.education_repo.create(record))

    def list_education(self, youth_id: int) -> List[Dict[str, Any]]:
        """청년의 모든 학력 기록을 조회합니다."""
        self.get_profile_model(youth_id)
        return [model_to_dict(r) for r in self.education_repo.list_by_youth(youth_id)]

    def update_education(self, education_id: int, **changes) -> Dict[str, Any]:
        """
        학력 기록을 수정합니다.

        Raises:
            EducationNotFoundError: 학력 기록이 없을 때.
        """
        record = self._get_education_model(education_id)
        changes = validate_choices(changes, EDUCATION_CHOICE_FIELDS)
        changes.pop("youth_id", None)
        apply_fields(record, changes)
        if record.is_highest_qualification:
            self.education_repo.clear_highest_flag(record.youth_id, exclude_id=record.id)
        return model_to_dict(self.education_repo.update(record))

    def delete_education(self, education_id: int) -> bool:
        """
        학력 기록을 삭제합니다.

        Raises:
            EducationNotFoundError: 학력 기록이 없을 때.
        """
        record = self._get_education_model(education_id)
        self.education_repo.delete(record)
        return True
