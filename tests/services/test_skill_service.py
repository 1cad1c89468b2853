# tests/services/test_skill_service.py
import pytest
from unittest.mock import MagicMock

from dare_tracker.services.skill_service import SkillService
from dare_tracker.services.exceptions import *
from dare_tracker.repositories.interfaces import ISkillRepository, IYouthSkillRepository, IYouthProfileRepository
from dare_tracker.database import models

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_skill_repo() -> MagicMock:
    repo = MagicMock(spec=ISkillRepository)
    repo.find_by_id.side_effect = lambda skill_id: models.Skill(id=skill_id, name=f"Skill {skill_id}")
    return repo

@pytest.fixture
def mock_youth_skill_repo() -> MagicMock:
    repo = MagicMock(spec=IYouthSkillRepository)
    repo.list_by_youth.return_value = []
    return repo

@pytest.fixture
def mock_profile_repo() -> MagicMock:
    repo = MagicMock(spec=IYouthProfileRepository)
    repo.find_by_id.return_value = models.YouthProfile(id=1, full_name="Kofi Boateng", is_deleted=False)
    return repo

@pytest.fixture
def skill_service(mock_skill_repo, mock_youth_skill_repo, mock_profile_repo) -> SkillService:
    return SkillService(mock_skill_repo, mock_youth_skill_repo, mock_profile_repo)

# ===================================================================
#  기술 항목 카탈로그 테스트
# ===================================================================
class TestSkillCatalog:
    def test_create_skill_success(self, skill_service: SkillService, mock_skill_repo: MagicMock):
        # === Arrange ===
        mock_skill_repo.find_by_name.return_value = None
        mock_skill_repo.create.side_effect = lambda s: s

        # === Act ===
        skill = skill_service.create_skill(name="  Soap Making ", category="Manufacturing")

        # === Assert ===
        assert skill["name"] == "Soap Making"
        assert skill["is_active"] is True

    def test_duplicate_skill_name_conflicts(self, skill_service: SkillService, mock_skill_repo: MagicMock):
        mock_skill_repo.find_by_name.return_value = models.Skill(id=2, name="soap making")

        with pytest.raises(SkillExistsError):
            skill_service.create_skill(name="Soap Making")
        mock_skill_repo.create.assert_not_called()

    @pytest.mark.parametrize("name", [None, "", "  ", 7])
    def test_skill_name_required(self, skill_service: SkillService, name):
        with pytest.raises(ValueError):
            skill_service.create_skill(name=name)

    def test_rename_to_own_name_is_allowed(self, skill_service: SkillService, mock_skill_repo: MagicMock):
        """자기 자신과 이름이 같은 것은 중복이 아닙니다."""
        skill = models.Skill(id=4, name="Welding")
        mock_skill_repo.find_by_id.side_effect = None
        mock_skill_repo.find_by_id.return_value = skill
        mock_skill_repo.find_by_name.return_value = skill
        mock_skill_repo.update.side_effect = lambda s: s

        result = skill_service.update_skill(4, name="welding")

        assert result["name"] == "welding"

    def test_get_missing_skill(self, skill_service: SkillService, mock_skill_repo: MagicMock):
        mock_skill_repo.find_by_id.side_effect = None
        mock_skill_repo.find_by_id.return_value = None

        with pytest.raises(SkillNotFoundError):
            skill_service.get_skill(9)

# ===================================================================
#  청년 기술 테스트
# ===================================================================
class TestYouthSkills:
    def test_add_skill_applies_defaults(self, skill_service: SkillService, mock_youth_skill_repo: MagicMock):
        skill_service.add_youth_skill(1, 3)

        saved = mock_youth_skill_repo.save.call_args[0][0]
        assert (saved.youth_id, saved.skill_id) == (1, 3)
        assert saved.proficiency == "Intermediate"
        assert saved.is_primary is False
        assert saved.years_of_experience == 0
        mock_youth_skill_repo.clear_primary.assert_not_called()

    def test_new_primary_clears_previous(self, skill_service: SkillService, mock_youth_skill_repo: MagicMock):
        skill_service.add_youth_skill(1, 3, is_primary=True, proficiency="Advanced")

        mock_youth_skill_repo.clear_primary.assert_called_once_with(1, exclude_skill_id=3)

    @pytest.mark.parametrize("data", [
        {"proficiency": "Master"},
        {"years_of_experience": -1},
        {"years_of_experience": "many"},
    ])
    def test_invalid_youth_skill_values(self, skill_service: SkillService, mock_youth_skill_repo: MagicMock, data):
        with pytest.raises(ValueError):
            skill_service.add_youth_skill(1, 3, **data)
        mock_youth_skill_repo.save.assert_not_called()

    def test_update_missing_youth_skill(self, skill_service: SkillService, mock_youth_skill_repo: MagicMock):
        mock_youth_skill_repo.find.return_value = None

        with pytest.raises(SkillNotFoundError):
            skill_service.update_youth_skill(1, 3, proficiency="Expert")

    def test_update_with_string_primary_flag(self, skill_service: SkillService, mock_youth_skill_repo: MagicMock):
        association = models.YouthSkill(youth_id=1, skill_id=3, proficiency="Beginner",
                                        is_primary=False, years_of_experience=1)
        mock_youth_skill_repo.find.return_value = association

        skill_service.update_youth_skill(1, 3, is_primary="true")

        mock_youth_skill_repo.clear_primary.assert_called_once_with(1, exclude_skill_id=3)
        assert association.is_primary is True

    def test_remove_missing_youth_skill(self, skill_service: SkillService, mock_youth_skill_repo: MagicMock):
        mock_youth_skill_repo.delete.return_value = False

        with pytest.raises(SkillNotFoundError):
            skill_service.remove_youth_skill(1, 3)

    def test_replace_youth_skills(self, skill_service: SkillService, mock_youth_skill_repo: MagicMock):
        skill_service.replace_youth_skills(1, [
            {"skill_id": 2, "is_primary": True},
            {"skill_id": "5", "proficiency": "Expert", "years_of_experience": 4},
        ])

        associations = mock_youth_skill_repo.replace_for_youth.call_args[0][1]
        assert [a.skill_id for a in associations] == [2, 5]
        assert associations[1].proficiency == "Expert"

    @pytest.mark.parametrize("records", [
        [{"skill_id": 2}, {"skill_id": 2}],
        [{"proficiency": "Expert"}],
        [{"skill_id": 2, "is_primary": True}, {"skill_id": 3, "is_primary": True}],
        "Welding",
    ])
    def test_replace_rejects_bad_lists(self, skill_service: SkillService, mock_youth_skill_repo: MagicMock, records):
        with pytest.raises(ValueError):
            skill_service.replace_youth_skills(1, records)
        mock_youth_skill_repo.replace_for_youth.assert_not_called()
