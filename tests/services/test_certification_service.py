# tests/services/test_certification_service.py
import pytest
from datetime import date
from unittest.mock import MagicMock

from dare_tracker.services.certification_service import CertificationService, normalize_skill_names
from dare_tracker.services.exceptions import *
from dare_tracker.repositories.interfaces import ICertificationRepository, IYouthProfileRepository
from dare_tracker.database import models

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_certification_repo() -> MagicMock:
    return MagicMock(spec=ICertificationRepository)

@pytest.fixture
def mock_profile_repo() -> MagicMock:
    repo = MagicMock(spec=IYouthProfileRepository)
    repo.find_by_id.return_value = models.YouthProfile(id=1, full_name="Ama Mensah", is_deleted=False)
    return repo

@pytest.fixture
def certification_service(mock_certification_repo, mock_profile_repo) -> CertificationService:
    return CertificationService(mock_certification_repo, mock_profile_repo)

# ===================================================================
#  자격증 등록 및 수정 테스트
# ===================================================================
class TestCertifications:
    def test_normalize_skill_names(self):
        assert normalize_skill_names("Tailoring, Dyeing , ,Tailoring") == ["Tailoring", "Dyeing"]
        assert normalize_skill_names(None) == []
        with pytest.raises(ValueError):
            normalize_skill_names([1, 2])

    def test_create_certification_success(self, certification_service: CertificationService,
                                          mock_certification_repo: MagicMock):
        # === Arrange ===
        mock_certification_repo.create.side_effect = lambda c: c

        # === Act ===
        record = certification_service.create_certification(
            1, certification_name="NVTI Grade II", issue_date="2024-03-01", skills="Welding"
        )

        # === Assert ===
        assert record["youth_id"] == 1
        assert record["issue_date"] == "2024-03-01"
        assert record["skills"] == ["Welding"]

    def test_create_certification_requires_name(self, certification_service: CertificationService,
                                                mock_certification_repo: MagicMock):
        with pytest.raises(ValueError):
            certification_service.create_certification(1, certification_name="   ")
        mock_certification_repo.create.assert_not_called()

    def test_expiry_before_issue_rejected(self, certification_service: CertificationService):
        with pytest.raises(ValueError):
            certification_service.create_certification(
                1, certification_name="First Aid", issue_date="2024-05-01", expiry_date="2023-05-01"
            )

    def test_deleted_youth_has_no_certifications(self, certification_service: CertificationService,
                                                 mock_profile_repo: MagicMock):
        mock_profile_repo.find_by_id.return_value = models.YouthProfile(id=1, is_deleted=True)

        with pytest.raises(YouthProfileNotFoundError):
            certification_service.list_certifications(1)

    def test_failed_update_leaves_record_untouched(self, certification_service: CertificationService,
                                                   mock_certification_repo: MagicMock):
        """검증에 실패한 수정은 기존 기록을 바꾸지 않습니다."""
        existing = models.Certification(
            id=3, youth_id=1, certification_name="First Aid", issue_date=date(2024, 1, 1), skills=[]
        )
        mock_certification_repo.find_by_id.return_value = existing

        with pytest.raises(ValueError):
            certification_service.update_certification(3, certification_name="CPR", expiry_date="2023-01-01")

        assert existing.certification_name == "First Aid"
        assert existing.expiry_date is None
        mock_certification_repo.update.assert_not_called()

    def test_get_missing_certification(self, certification_service: CertificationService,
                                       mock_certification_repo: MagicMock):
        mock_certification_repo.find_by_id.return_value = None

        with pytest.raises(CertificationNotFoundError):
            certification_service.get_certification(99)

# ===================================================================
#  자격증 일괄 교체 테스트
# ===================================================================
class TestReplaceCertifications:
    def test_replace_drops_client_ids(self, certification_service: CertificationService,
                                      mock_certification_repo: MagicMock):
        mock_certification_repo.replace_for_youth.side_effect = lambda youth_id, records: records

        result = certification_service.replace_certifications(1, [
            {"id": 40, "youth_id": 7, "certification_name": "Hairdressing"},
            {"certification_name": "Bookkeeping", "skills": ["Accounts"]},
        ])

        assert [r["certification_name"] for r in result] == ["Hairdressing", "Bookkeeping"]
        assert all(r["youth_id"] == 1 and r["id"] is None for r in result)

    def test_one_invalid_record_rejects_the_batch(self, certification_service: CertificationService,
                                                  mock_certification_repo: MagicMock):
        with pytest.raises(ValueError):
            certification_service.replace_certifications(1, [
                {"certification_name": "Hairdressing"},
                {"issuing_organization": "NVTI"},
            ])
        mock_certification_repo.replace_for_youth.assert_not_called()

    @pytest.mark.parametrize("records", [None, "Hairdressing", [1, 2]])
    def test_records_must_be_list_of_objects(self, certification_service: CertificationService, records):
        with pytest.raises(ValueError):
            certification_service.replace_certifications(1, records)
