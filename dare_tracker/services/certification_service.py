from typing import Dict, Any, List

from dare_tracker.database import models
from dare_tracker.repositories.interfaces import ICertificationRepository, IYouthProfileRepository
from dare_tracker.services.exceptions import CertificationNotFoundError, YouthProfileNotFoundError
from dare_tracker.utils.model_utils import apply_fields, model_to_dict

CERTIFICATION_FIELDS = (
    "certification_name", "issuing_organization", "issue_date", "expiry_date",
    "credential_id", "credential_url", "skills",
)


def normalize_skill_names(skills) -> List[str]:
    """쉼표로 구분된 문자열이나 목록을 공백 없는 기술 이름 목록으로 바꿉니다."""
    if skills is None or skills == "":
        return []
    if isinstance(skills, str):
        skills = skills.split(",")
    if not isinstance(skills, (list, tuple)):
        raise ValueError("skills must be a list of names.")
    names = []
    for name in skills:
        if not isinstance(name, str):
            raise ValueError("skills must be a list of names.")
        if name.strip() and name.strip() not in names:
            names.append(name.strip())
    return names


class CertificationService:
    """청년의 자격증 기록을 관리합니다."""

    def __init__(self, certification_repo: ICertificationRepository, profile_repo: IYouthProfileRepository):
        self.certification_repo = certification_repo
        self.profile_repo = profile_repo

    def _require_youth(self, youth_id: int):
        profile = self.profile_repo.find_by_id(youth_id)
        if not profile or profile.is_deleted:
            raise YouthProfileNotFoundError(f"Youth profile with id '{youth_id}' not found.")

    def _get_certification_model(self, certification_id: int) -> models.Certification:
        certification = self.certification_repo.find_by_id(certification_id)
        if not certification:
            raise CertificationNotFoundError(f"Certification with id '{certification_id}' not found.")
        return certification

    @staticmethod
    def _apply(certification: models.Certification, data: Dict[str, Any]) -> models.Certification:
        data = dict(data)
        if "skills" in data:
            data["skills"] = normalize_skill_names(data["skills"])
        apply_fields(certification, data, allowed=CERTIFICATION_FIELDS)
        if not certification.certification_name or not str(certification.certification_name).strip():
            raise ValueError("certification_name is required.")
        if certification.issue_date and certification.expiry_date and certification.expiry_date < certification.issue_date:
            raise ValueError("expiry_date cannot be before issue_date.")
        if certification.skills is None:
            certification.skills = []
        return certification

    def create_certification(self, youth_id: int, **data) -> Dict[str, Any]:
        """
        청년에게 자격증 기록을 추가합니다.

        Raises:
            YouthProfileNotFoundError: 청년 프로필이 없을 때.
            ValueError: 자격증 이름이 없거나 만료일이 발급일보다 앞설 때.
        """
        self._require_youth(youth_id)
        data.pop("youth_id", None)
        certification = self._apply(models.Certification(youth_id=youth_id), data)
        return model_to_dict(self.certification_repo.create(certification))

    def list_certifications(self, youth_id: int) -> List[Dict[str, Any]]:
        self._require_youth(youth_id)
        return [model_to_dict(c) for c in self.certification_repo.list_by_youth(youth_id)]

    def get_certification(self, certification_id: int) -> Dict[str, Any]:
        return model_to_dict(self._get_certification_model(certification_id))

    def update_certification(self, certification_id: int, **changes) -> Dict[str, Any]:
        certification = self._get_certification_model(certification_id)
        # 복사본으로 먼저 검증합니다. 실패하면 원본은 바뀌지 않습니다.
        current = {name: getattr(certification, name) for name in CERTIFICATION_FIELDS}
        self._apply(models.Certification(**current), changes)
        self._apply(certification, changes)
        return model_to_dict(self.certification_repo.update(certification))

    def delete_certification(self, certification_id: int) -> bool:
        certification = self._get_certification_model(certification_id)
        self.certification_repo.delete(certification)
        return True

    def replace_certifications(self, youth_id: int, records) -> List[Dict[str, Any]]:
        """
        청년의 자격증 목록을 통째로 바꿉니다. 한 건이라도 올바르지 않으면 아무것도 바뀌지 않습니다.

        Raises:
            YouthProfileNotFoundError: 청년 프로필이 없을 때.
            ValueError: records가 목록이 아니거나 항목 중 하나가 올바르지 않을 때.
        """
        self._require_youth(youth_id)
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise ValueError("certifications must be a list of objects.")

        certifications = []
        for record in records:
            record = {k: v for k, v in record.items() if k not in ("id", "youth_id")}
            certifications.append(self._apply(models.Certification(youth_id=youth_id), record))
        saved = self.certification_repo.replace_for_youth(youth_id, certifications)
        return [model_to_dict(c) for c in saved]
