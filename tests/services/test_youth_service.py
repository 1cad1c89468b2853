# tests/services/test_youth_service.py
import pytest
from unittest.mock import MagicMock

from dare_tracker.services.youth_service import YouthService, build_full_name
from dare_tracker.services.exceptions import *
from dare_tracker.repositories.interfaces import IYouthProfileRepository, IEducationRepository
from dare_tracker.database import models

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_profile_repo() -> MagicMock:
    return MagicMock(spec=IYouthProfileRepository)

@pytest.fixture
def mock_education_repo() -> MagicMock:
    return MagicMock(spec=IEducationRepository)

@pytest.fixture
def youth_service(mock_profile_repo: MagicMock, mock_education_repo: MagicMock) -> YouthService:
    return YouthService(mock_profile_repo, mock_education_repo)

def make_profile(**kwargs) -> models.YouthProfile:
    values = {"id": 1, "full_name": "Akosua Boateng", "is_deleted": False}
    values.update(kwargs)
    return models.YouthProfile(**values)

# ===================================================================
#  청년 프로필 테스트
# ===================================================================
class TestYouthProfiles:
    def test_build_full_name_from_parts(self):
        assert build_full_name({"first_name": "Akosua", "middle_name": " ", "last_name": "Boateng"}) == "Akosua Boateng"
        assert build_full_name({"full_name": "  Kwame Nkrumah "}) == "Kwame Nkrumah"
        assert build_full_name({}) is None

    def test_create_profile_success(self, youth_service: YouthService, mock_profile_repo: MagicMock):
        """이름 조각으로 full_name이 만들어지고 지역이 정규화되는지 테스트합니다."""
        # === Arrange ===
        mock_profile_repo.find_by_participant_code.return_value = None
        mock_profile_repo.create.side_effect = lambda p: p

        # === Act ===
        profile = youth_service.create_profile(
            participant_code="BK-001", first_name="Akosua", last_name="Boateng",
            district="Bekwai, Ghana", dare_model="Madam Anchor", children_count="2"
        )

        # === Assert ===
        assert profile["full_name"] == "Akosua Boateng"
        assert profile["district"] == "Bekwai"
        assert profile["children_count"] == 2
        mock_profile_repo.find_by_participant_code.assert_called_once_with("BK-001")

    def test_create_profile_duplicate_code(self, youth_service: YouthService, mock_profile_repo: MagicMock):
        """참가자 코드가 중복되면 YouthProfileCreationError가 발생하는지 테스트합니다."""
        mock_profile_repo.find_by_participant_code.return_value = make_profile(participant_code="BK-001")

        with pytest.raises(YouthProfileCreationError):
            youth_service.create_profile(participant_code="BK-001", full_name="Someone Else")
        mock_profile_repo.create.assert_not_called()

    def test_create_profile_requires_name(self, youth_service: YouthService, mock_profile_repo: MagicMock):
        with pytest.raises(ValueError):
            youth_service.create_profile(participant_code="BK-002")
        mock_profile_repo.create.assert_not_called()

    @pytest.mark.parametrize("field, value", [("district", "Accra"), ("dare_model", "Franchise")])
    def test_create_profile_invalid_choice(self, youth_service: YouthService, field, value):
        with pytest.raises(ValueError):
            youth_service.create_profile(full_name="Ama", **{field: value})

    def test_create_profile_rejects_read_only_field(self, youth_service: YouthService, mock_profile_repo: MagicMock):
        mock_profile_repo.find_by_participant_code.return_value = None

        with pytest.raises(ValueError):
            youth_service.create_profile(full_name="Ama", is_deleted=True)

    def test_get_deleted_profile_not_found(self, youth_service: YouthService, mock_profile_repo: MagicMock):
        """삭제 표시된 프로필은 조회되지 않는지 테스트합니다."""
        mock_profile_repo.find_by_id.return_value = make_profile(is_deleted=True)

        with pytest.raises(YouthProfileNotFoundError):
            youth_service.get_profile(1)

    def test_get_profile_includes_counts(self, youth_service: YouthService, mock_profile_repo: MagicMock):
        profile = make_profile()
        profile.education_records = [models.Education(id=1), models.Education(id=2)]
        mock_profile_repo.find_by_id.return_value = profile

        result = youth_service.get_profile(1)

        assert result["education_count"] == 2
        assert result["training_count"] == 0

    def test_update_profile_code_conflict(self, youth_service: YouthService, mock_profile_repo: MagicMock):
        mock_profile_repo.find_by_id.return_value = make_profile(id=1, participant_code="BK-001")
        mock_profile_repo.find_by_participant_code.return_value = make_profile(id=2, participant_code="BK-002")

        with pytest.raises(YouthProfileCreationError):
            youth_service.update_profile(1, participant_code="BK-002")
        mock_profile_repo.update.assert_not_called()

    def test_delete_profile_is_soft(self, youth_service: YouthService, mock_profile_repo: MagicMock):
        """삭제는 is_deleted 표시만 하는지 테스트합니다."""
        # === Arrange ===
        profile = make_profile()
        mock_profile_repo.find_by_id.return_value = profile

        # === Act ===
        youth_service.delete_profile(1)

        # === Assert ===
        assert profile.is_deleted is True
        mock_profile_repo.update.assert_called_once_with(profile)

    def test_list_profiles_normalizes_district(self, youth_service: YouthService, mock_profile_repo: MagicMock):
        mock_profile_repo.list_all.return_value = [make_profile()]

        result = youth_service.list_profiles(district="Gushegu, Ghana")

        assert len(result) == 1
        mock_profile_repo.list_all.assert_called_once_with(district="Gushegu")

# ===================================================================
#  학력 기록 테스트
# ===================================================================
class TestEducation:
    def test_add_highest_qualification_clears_others(self, youth_service: YouthService,
                                                     mock_profile_repo: MagicMock, mock_education_repo: MagicMock):
        """최종 학력으로 추가하면 기존 최종 학력 표시가 해제되는지 테스트합니다."""
        # === Arrange ===
        mock_profile_repo.find_by_id.return_value = make_profile(id=5)
        mock_education_repo.create.side_effect = lambda r: r

        # === Act ===
        record = youth_service.add_education(
            5, qualification_type="Certificate", qualification_name="Tailoring",
            is_highest_qualification=True, qualification_status="Completed"
        )

        # === Assert ===
        assert record["youth_id"] == 5
        mock_education_repo.clear_highest_flag.assert_called_once_with(5)

    def test_add_education_requires_qualification(self, youth_service: YouthService,
                                                  mock_profile_repo: MagicMock, mock_education_repo: MagicMock):
        mock_profile_repo.find_by_id.return_value = make_profile(id=5)

        with pytest.raises(ValueError):
            youth_service.add_education(5, qualification_type="Certificate")
        mock_education_repo.create.assert_not_called()

    def test_update_education_keeps_single_highest(self, youth_service: YouthService, mock_education_repo: MagicMock):
        record = models.Education(id=8, youth_id=5, qualification_type="WASSCE", qualification_name="General Arts")
        mock_education_repo.find_by_id.return_value = record
        mock_education_repo.update.side_effect = lambda r: r

        youth_service.update_education(8, is_highest_qualification="true")

        assert record.is_highest_qualification is True
        mock_education_repo.clear_highest_flag.assert_called_once_with(5, exclude_id=8)

    def test_delete_missing_education(self, youth_service: YouthService, mock_education_repo: MagicMock):
        mock_education_repo.find_by_id.return_value = None

        with pytest.raises(EducationNotFoundError):
            youth_service.delete_education(8)
