# tests/services/test_makerspace_service.py
import pytest
from datetime import date
from unittest.mock import MagicMock

from dare_tracker.services.makerspace_service import MakerspaceService
from dare_tracker.services.exceptions import *
from dare_tracker.repositories.interfaces import (
    IMakerspaceRepository, IMakerspaceAssignmentRepository, IBusinessRepository
)
from dare_tracker.database import models

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_makerspace_repo() -> MagicMock:
    repo = MagicMock(spec=IMakerspaceRepository)
    repo.find_by_id.side_effect = lambda makerspace_id: models.Makerspace(
        id=makerspace_id, name=f"Hub {makerspace_id}", address="Main Street", district="Bekwai"
    )
    return repo

@pytest.fixture
def mock_assignment_repo() -> MagicMock:
    return MagicMock(spec=IMakerspaceAssignmentRepository)

@pytest.fixture
def mock_business_repo() -> MagicMock:
    repo = MagicMock(spec=IBusinessRepository)
    repo.find_by_id.return_value = models.BusinessProfile(id=10, business_name="Kente Weavers")
    return repo

@pytest.fixture
def makerspace_service(mock_makerspace_repo, mock_assignment_repo, mock_business_repo) -> MakerspaceService:
    return MakerspaceService(mock_makerspace_repo, mock_assignment_repo, mock_business_repo)

# ===================================================================
#  메이커스페이스 관리 테스트
# ===================================================================
class TestMakerspaces:
    def test_create_makerspace_success(self, makerspace_service: MakerspaceService,
                                       mock_makerspace_repo: MagicMock):
        # === Arrange ===
        mock_makerspace_repo.create.side_effect = lambda m: m

        # === Act ===
        result = makerspace_service.create_makerspace(
            name=" Bekwai Hub ", address="Station Road", district="Bekwai, Ghana"
        )

        # === Assert ===
        assert result["name"] == "Bekwai Hub"
        assert result["district"] == "Bekwai"
        assert result["status"] == "Active"
        assert (result["resource_count"], result["member_count"]) == (0, 0)

    @pytest.mark.parametrize("data", [
        {"name": "Hb", "address": "Station Road", "district": "Bekwai"},
        {"name": "Bekwai Hub", "address": "Rd", "district": "Bekwai"},
        {"name": "Bekwai Hub", "address": "Station Road"},
        {"name": "Bekwai Hub", "address": "Station Road", "district": "Accra"},
        {"name": "Bekwai Hub", "address": "Station Road", "district": "Bekwai", "status": "Closed"},
        {"name": "Bekwai Hub", "address": "Station Road", "district": "Bekwai", "member_count": -3},
    ])
    def test_create_makerspace_validation(self, makerspace_service: MakerspaceService,
                                          mock_makerspace_repo: MagicMock, data):
        with pytest.raises(ValueError):
            makerspace_service.create_makerspace(**data)
        mock_makerspace_repo.create.assert_not_called()

    def test_update_cannot_clear_district(self, makerspace_service: MakerspaceService,
                                          mock_makerspace_repo: MagicMock):
        makerspace = models.Makerspace(id=1, name="Bekwai Hub", address="Station Road", district="Bekwai")
        mock_makerspace_repo.find_by_id.side_effect = None
        mock_makerspace_repo.find_by_id.return_value = makerspace

        with pytest.raises(ValueError):
            makerspace_service.update_makerspace(1, district=None)
        assert makerspace.district == "Bekwai"

    def test_get_makerspace_includes_businesses(self, makerspace_service: MakerspaceService,
                                                mock_assignment_repo: MagicMock):
        mock_assignment_repo.list_by_makerspace.return_value = [{"business_id": 10, "business_name": "Kente Weavers"}]

        result = makerspace_service.get_makerspace(1)

        assert result["businesses"][0]["business_id"] == 10

    def test_get_missing_makerspace(self, makerspace_service: MakerspaceService, mock_makerspace_repo: MagicMock):
        mock_makerspace_repo.find_by_id.side_effect = None
        mock_makerspace_repo.find_by_id.return_value = None

        with pytest.raises(MakerspaceNotFoundError):
            makerspace_service.get_makerspace(5)

# ===================================================================
#  사업체 배정 테스트
# ===================================================================
class TestMakerspaceAssignments:
    def test_assign_business(self, makerspace_service: MakerspaceService, mock_assignment_repo: MagicMock):
        mock_assignment_repo.find_by_business.return_value = None
        mock_assignment_repo.create.side_effect = lambda a: a

        result = makerspace_service.assign_business(10, 2, assigned_by=1, notes="Shares sewing machines")

        assert result["makerspace_id"] == 2
        assert result["makerspace_name"] == "Hub 2"
        assert result["assigned_date"] == date.today().isoformat()
        assert result["is_active"] is True

    def test_business_holds_one_makerspace(self, makerspace_service: MakerspaceService,
                                           mock_assignment_repo: MagicMock):
        """이미 배정된 사업체는 다른 메이커스페이스에 다시 배정할 수 없습니다."""
        mock_assignment_repo.find_by_business.return_value = models.BusinessMakerspaceAssignment(
            id=4, business_id=10, makerspace_id=1
        )

        with pytest.raises(ValueError, match="Hub 1"):
            makerspace_service.assign_business(10, 2)
        mock_assignment_repo.create.assert_not_called()

    def test_assign_unknown_business(self, makerspace_service: MakerspaceService, mock_business_repo: MagicMock):
        mock_business_repo.find_by_id.return_value = None

        with pytest.raises(BusinessNotFoundError):
            makerspace_service.assign_business(99, 2)

    def test_list_business_assignments_empty(self, makerspace_service: MakerspaceService,
                                             mock_assignment_repo: MagicMock):
        mock_assignment_repo.find_by_business.return_value = None

        assert makerspace_service.list_business_assignments(10) == []

    def test_move_assignment_to_missing_makerspace(self, makerspace_service: MakerspaceService,
                                                   mock_makerspace_repo: MagicMock,
                                                   mock_assignment_repo: MagicMock):
        assignment = models.BusinessMakerspaceAssignment(id=4, business_id=10, makerspace_id=1)
        mock_assignment_repo.find_by_id.return_value = assignment
        mock_makerspace_repo.find_by_id.side_effect = None
        mock_makerspace_repo.find_by_id.return_value = None

        with pytest.raises(MakerspaceNotFoundError):
            makerspace_service.update_assignment(4, makerspace_id=7)
        assert assignment.makerspace_id == 1

    def test_remove_missing_assignment(self, makerspace_service: MakerspaceService, mock_assignment_repo: MagicMock):
        mock_assignment_repo.find_by_id.return_value = None

        with pytest.raises(MakerspaceAssignmentNotFoundError):
            makerspace_service.remove_assignment(4)
