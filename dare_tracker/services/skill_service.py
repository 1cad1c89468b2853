import logging
from typing import Dict, Any, List, Optional

from dare_tracker.database import models
from dare_tracker.database.choices import SKILL_PROFICIENCIES
from dare_tracker.repositories.interfaces import ISkillRepository, IYouthSkillRepository, IYouthProfileRepository
from dare_tracker.services.exceptions import SkillNotFoundError, SkillExistsError, YouthProfileNotFoundError
from dare_tracker.utils.model_utils import apply_fields, coerce_value, model_to_dict
from dare_tracker.utils.validation import require_choice, require_range

logger = logging.getLogger(__name__)

SKILL_FIELDS = ("name", "description", "category", "is_active")
YOUTH_SKILL_FIELDS = ("proficiency", "is_primary", "years_of_experience", "notes")


def _clean_skill_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Skill name is required.")
    return name.strip()


class SkillService:
    """
    기술 항목 카탈로그와 청년별 기술(숙련도, 경력, 주 기술)을 관리합니다.
    청년당 주 기술은 하나뿐이며, 새 주 기술을 지정하면 이전 표시는 해제됩니다.
    """

    def __init__(self, skill_repo: ISkillRepository, youth_skill_repo: IYouthSkillRepository,
                 profile_repo: IYouthProfileRepository):
        """
        SkillService를 초기화합니다.

        Args:
            skill_repo: 기술 항목 카탈로그 리포지토리.
            youth_skill_repo: 청년-기술 연결 리포지토리.
            profile_repo: 청년 존재 확인에 사용하는 리포지토리.
        """
        self.skill_repo = skill_repo
        self.youth_skill_repo = youth_skill_repo
        self.profile_repo = profile_repo

    def _require_youth(self, youth_id: int):
        profile = self.profile_repo.find_by_id(youth_id)
        if not profile or profile.is_deleted:
            raise YouthProfileNotFoundError(f"Youth profile with id '{youth_id}' not found.")

    def _get_skill_model(self, skill_id: int) -> models.Skill:
        skill = self.skill_repo.find_by_id(skill_id)
        if not skill:
            raise SkillNotFoundError(f"Skill with id '{skill_id}' not found.")
        return skill

    # ------------------------------------------------------------------
    # 기술 항목 카탈로그
    # ------------------------------------------------------------------

    def create_skill(self, **data) -> Dict[str, Any]:
        """
        기술 항목을 생성합니다.

        Raises:
            ValueError: 이름이 없을 때.
            SkillExistsError: 같은 이름(대소문자 무시)의 항목이 이미 있을 때.
        """
        data["name"] = _clean_skill_name(data.get("name"))
        if self.skill_repo.find_by_name(data["name"]):
            raise SkillExistsError(f"Skill '{data['name']}' already exists.")
        skill = apply_fields(models.Skill(), data, allowed=SKILL_FIELDS)
        if skill.is_active is None:
            skill.is_active = True
        return model_to_dict(self.skill_repo.create(skill))

    def list_skills(self, active_only: bool = False, category: Optional[str] = None) -> List[Dict[str, Any]]:
        return [model_to_dict(s) for s in self.skill_repo.list_all(active_only=active_only, category=category)]

    def get_skill(self, skill_id: int) -> Dict[str, Any]:
        skill = self._get_skill_model(skill_id)
        result = model_to_dict(skill)
        result["youth_count"] = len(skill.youth_associations)
        return result

    def update_skill(self, skill_id: int, **changes) -> Dict[str, Any]:
        skill = self._get_skill_model(skill_id)
        if "name" in changes:
            changes["name"] = _clean_skill_name(changes["name"])
            existing = self.skill_repo.find_by_name(changes["name"])
            if existing and existing.id != skill.id:
                raise SkillExistsError(f"Skill '{changes['name']}' already exists.")
        apply_fields(skill, changes, allowed=SKILL_FIELDS)
        return model_to_dict(self.skill_repo.update(skill))

    def delete_skill(self, skill_id: int) -> bool:
        """기술 항목을 삭제합니다. 이 항목을 가진 청년들의 연결도 함께 삭제됩니다."""
        skill = self._get_skill_model(skill_id)
        name = skill.name
        self.skill_repo.delete(skill)
        logger.info("Skill '%s' deleted", name)
        return True

    # ------------------------------------------------------------------
    # 청년 기술
    # ------------------------------------------------------------------

    @staticmethod
    def _apply_youth_skill(association: models.YouthSkill, data: Dict[str, Any]) -> models.YouthSkill:
        data = dict(data)
        if "proficiency" in data:
            data["proficiency"] = require_choice("proficiency", data["proficiency"], SKILL_PROFICIENCIES)
        if "years_of_experience" in data:
            data["years_of_experience"] = require_range("years_of_experience", data["years_of_experience"], 0)
        apply_fields(association, data, allowed=YOUTH_SKILL_FIELDS)
        association.proficiency = association.proficiency or "Intermediate"
        association.is_primary = bool(association.is_primary)
        if association.years_of_experience is None:
            association.years_of_experience = 0
        return association

    def add_youth_skill(self, youth_id: int, skill_id: int, **data) -> List[Dict[str, Any]]:
        """
        청년에게 기술을 추가합니다. 이미 가진 기술이면 숙련도 등 정보를 갱신합니다.

        Returns:
            갱신된 청년의 기술 목록.

        Raises:
            YouthProfileNotFoundError: 청년 프로필이 없을 때.
            SkillNotFoundError: 기술 항목이 없을 때.
            ValueError: 숙련도나 경력 값이 올바르지 않을 때.
        """
        self._require_youth(youth_id)
        self._get_skill_model(skill_id)

        association = self._apply_youth_skill(models.YouthSkill(youth_id=youth_id, skill_id=skill_id), data)
        if association.is_primary:
            self.youth_skill_repo.clear_primary(youth_id, exclude_skill_id=skill_id)
        self.youth_skill_repo.save(association)
        return self.youth_skill_repo.list_by_youth(youth_id)

    def list_youth_skills(self, youth_id: int) -> List[Dict[str, Any]]:
        self._require_youth(youth_id)
        return self.youth_skill_repo.list_by_youth(youth_id)

    def update_youth_skill(self, youth_id: int, skill_id: int, **changes) -> List[Dict[str, Any]]:
        """
        Raises:
            SkillNotFoundError: 청년에게 해당 기술이 없을 때.
        """
        self._require_youth(youth_id)
        association = self.youth_skill_repo.find(youth_id, skill_id)
        if not association:
            raise SkillNotFoundError(f"Youth '{youth_id}' does not have skill '{skill_id}'.")

        is_primary = changes.get("is_primary")
        if is_primary is not None:
            is_primary = coerce_value(models.YouthSkill.__table__.c.is_primary, is_primary)
        current = {name: getattr(association, name) for name in YOUTH_SKILL_FIELDS}
        self._apply_youth_skill(models.YouthSkill(**current), changes)

        if is_primary:
            self.youth_skill_repo.clear_primary(youth_id, exclude_skill_id=skill_id)
        self._apply_youth_skill(association, changes)
        self.youth_skill_repo.save(association)
        return self.youth_skill_repo.list_by_youth(youth_id)

    def remove_youth_skill(self, youth_id: int, skill_id: int) -> bool:
        self._require_youth(youth_id)
        if not self.youth_skill_repo.delete(youth_id, skill_id):
            raise SkillNotFoundError(f"Youth '{youth_id}' does not have skill '{skill_id}'.")
        return True

    def replace_youth_skills(self, youth_id: int, records) -> List[Dict[str, Any]]:
        """
        청년의 기술 목록을 통째로 바꿉니다.

        Raises:
            ValueError: 목록 형식이 아니거나, skill_id가 없거나 중복되거나, 주 기술이 둘 이상일 때.
            SkillNotFoundError: 없는 기술 항목이 포함되었을 때.
        """
        self._require_youth(youth_id)
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise ValueError("skills must be a list of objects.")

        associations, seen = [], set()
        for record in records:
            record = dict(record)
            record.pop("youth_id", None)
            skill_id = record.pop("skill_id", None)
            if skill_id is None:
                raise ValueError("skill_id is required for every skill.")
            skill_id = int(skill_id)
            if skill_id in seen:
                raise ValueError(f"Skill '{skill_id}' is listed more than once.")
            seen.add(skill_id)
            self._get_skill_model(skill_id)
            associations.append(self._apply_youth_skill(models.YouthSkill(youth_id=youth_id, skill_id=skill_id), record))

        if sum(1 for a in associations if a.is_primary) > 1:
            raise ValueError("Only one skill can be primary.")
        self.youth_skill_repo.replace_for_youth(youth_id, associations)
        return self.youth_skill_repo.list_by_youth(youth_id)
