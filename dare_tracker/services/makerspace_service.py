import logging
from datetime import date
from typing import Dict, Any, List, Optional

from dare_tracker.database import models
from dare_tracker.database.choices import MAKERSPACE_STATUSES
from dare_tracker.repositories.interfaces import (
    IMakerspaceRepository, IMakerspaceAssignmentRepository, IBusinessRepository
)
from dare_tracker.services.exceptions import (
    MakerspaceNotFoundError, MakerspaceAssignmentNotFoundError, BusinessNotFoundError
)
from dare_tracker.utils.model_utils import apply_fields, model_to_dict
from dare_tracker.utils.validation import normalize_district, require_range, validate_choices

logger = logging.getLogger(__name__)

MAKERSPACE_CHOICE_FIELDS = {"status": MAKERSPACE_STATUSES}
MAKERSPACE_FIELDS = (
    "name", "description", "address", "coordinates", "district", "contact_phone", "contact_email",
    "contact_person", "operating_hours", "open_date", "resource_count", "member_count", "facilities", "status",
)
ASSIGNMENT_UPDATABLE_FIELDS = ("makerspace_id", "notes", "is_active")


class MakerspaceService:
    """메이커스페이스와 사업체의 메이커스페이스 배정을 관리합니다."""

    def __init__(self, makerspace_repo: IMakerspaceRepository, assignment_repo: IMakerspaceAssignmentRepository,
                 business_repo: IBusinessRepository):
        self.makerspace_repo = makerspace_repo
        self.assignment_repo = assignment_repo
        self.business_repo = business_repo

    def _get_makerspace_model(self, makerspace_id: int) -> models.Makerspace:
        makerspace = self.makerspace_repo.find_by_id(makerspace_id)
        if not makerspace:
            raise MakerspaceNotFoundError(f"Makerspace with id '{makerspace_id}' not found.")
        return makerspace

    def _get_business_model(self, business_id: int) -> models.BusinessProfile:
        business = self.business_repo.find_by_id(business_id)
        if not business:
            raise BusinessNotFoundError(f"Business with id '{business_id}' not found.")
        return business

    def _get_assignment_model(self, assignment_id: int) -> models.BusinessMakerspaceAssignment:
        assignment = self.assignment_repo.find_by_id(assignment_id)
        if not assignment:
            raise MakerspaceAssignmentNotFoundError(f"Makerspace assignment with id '{assignment_id}' not found.")
        return assignment

    @staticmethod
    def _clean(data: Dict[str, Any]) -> Dict[str, Any]:
        data = validate_choices(data, MAKERSPACE_CHOICE_FIELDS)
        for field in ("name", "address"):
            if field in data and isinstance(data[field], str):
                data[field] = data[field].strip()
        for field in ("resource_count", "member_count"):
            if field in data:
                data[field] = require_range(field, data[field], 0)
        return data

    @staticmethod
    def _check_required(makerspace: models.Makerspace):
        if not isinstance(makerspace.name, str) or len(makerspace.name) < 3:
            raise ValueError("Makerspace name must be at least 3 characters.")
        if not isinstance(makerspace.address, str) or len(makerspace.address) < 5:
            raise ValueError("Makerspace address must be at least 5 characters.")
        if not makerspace.district:
            raise ValueError("District is required.")

    # ------------------------------------------------------------------
    # 메이커스페이스
    # ------------------------------------------------------------------

    def create_makerspace(self, **data) -> Dict[str, Any]:
        """
        메이커스페이스를 생성합니다.

        Raises:
            ValueError: 이름(3자 이상), 주소(5자 이상), 지역이 올바르지 않을 때.
        """
        data = self._clean(data)
        makerspace = apply_fields(models.Makerspace(), data, allowed=MAKERSPACE_FIELDS)
        self._check_required(makerspace)
        makerspace.status = makerspace.status or "Active"
        makerspace.resource_count = makerspace.resource_count or 0
        makerspace.member_count = makerspace.member_count or 0
        created = self.makerspace_repo.create(makerspace)
        logger.info("Makerspace '%s' created in %s", created.name, created.district)
        return model_to_dict(created)

    def list_makerspaces(self, district: Optional[str] = None) -> List[Dict[str, Any]]:
        district = normalize_district(district)
        return [model_to_dict(m) for m in self.makerspace_repo.list_all(district=district)]

    def get_makerspace(self, makerspace_id: int) -> Dict[str, Any]:
        """메이커스페이스와 배정된 사업체 목록을 함께 조회합니다."""
        makerspace = self._get_makerspace_model(makerspace_id)
        result = model_to_dict(makerspace)
        result["businesses"] = self.assignment_repo.list_by_makerspace(makerspace_id)
        return result

    def update_makerspace(self, makerspace_id: int, **changes) -> Dict[str, Any]:
        makerspace = self._get_makerspace_model(makerspace_id)
        changes = self._clean(changes)
        current = {name: getattr(makerspace, name) for name in MAKERSPACE_FIELDS}
        self._check_required(apply_fields(models.Makerspace(**current), changes, allowed=MAKERSPACE_FIELDS))
        apply_fields(makerspace, changes, allowed=MAKERSPACE_FIELDS)
        return model_to_dict(self.makerspace_repo.update(makerspace))

    def delete_makerspace(self, makerspace_id: int) -> bool:
        """메이커스페이스와 그 사업체 배정을 모두 삭제합니다."""
        makerspace = self._get_makerspace_model(makerspace_id)
        self.makerspace_repo.delete(makerspace)
        return True

    # ------------------------------------------------------------------
    # 사업체-메이커스페이스 배정
    # ------------------------------------------------------------------

    def _assignment_to_dict(self, assignment: models.BusinessMakerspaceAssignment) -> Dict[str, Any]:
        result = model_to_dict(assignment)
        makerspace = self.makerspace_repo.find_by_id(assignment.makerspace_id)
        result["makerspace_name"] = makerspace.name if makerspace else None
        return result

    def assign_business(self, business_id: int, makerspace_id: int, assigned_by: Optional[int] = None,
                        notes: Optional[str] = None) -> Dict[str, Any]:
        """
        사업체를 메이커스페이스에 배정합니다. 사업체는 하나의 메이커스페이스에만 배정될 수 있습니다.

        Raises:
            BusinessNotFoundError: 사업체가 없을 때.
            MakerspaceNotFoundError: 메이커스페이스가 없을 때.
            ValueError: 사업체가 이미 배정되어 있을 때.
        """
        self._get_business_model(business_id)
        self._get_makerspace_model(makerspace_id)

        existing = self.assignment_repo.find_by_business(business_id)
        if existing:
            current = self.makerspace_repo.find_by_id(existing.makerspace_id)
            name = f" ({current.name})" if current else ""
            raise ValueError(
                f"This business is already assigned to a makerspace{name}. "
                "Each business can only be assigned to one makerspace."
            )

        assignment = models.BusinessMakerspaceAssignment(
            business_id=business_id,
            makerspace_id=makerspace_id,
            assigned_date=date.today(),
            assigned_by=assigned_by,
            notes=notes,
            is_active=True
        )
        created = self.assignment_repo.create(assignment)
        logger.info("Business %s assigned to makerspace %s", business_id, makerspace_id)
        return self._assignment_to_dict(created)

    def list_business_assignments(self, business_id: int) -> List[Dict[str, Any]]:
        """사업체의 메이커스페이스 배정 목록을 조회합니다. (최대 1건)"""
        self._get_business_model(business_id)
        assignment = self.assignment_repo.find_by_business(business_id)
        return [self._assignment_to_dict(assignment)] if assignment else []

    def list_makerspace_businesses(self, makerspace_id: int) -> List[Dict[str, Any]]:
        self._get_makerspace_model(makerspace_id)
        return self.assignment_repo.list_by_makerspace(makerspace_id)

    def update_assignment(self, assignment_id: int, **changes) -> Dict[str, Any]:
        """
        배정 정보를 수정합니다. makerspace_id를 바꾸면 다른 메이커스페이스로 옮깁니다.

        Raises:
            MakerspaceAssignmentNotFoundError: 배정이 없을 때.
            MakerspaceNotFoundError: 옮길 메이커스페이스가 없을 때.
        """
        assignment = self._get_assignment_model(assignment_id)
        if changes.get("makerspace_id") is not None:
            changes["makerspace_id"] = int(changes["makerspace_id"])
            self._get_makerspace_model(changes["makerspace_id"])
        elif "makerspace_id" in changes:
            raise ValueError("makerspace_id cannot be empty.")
        apply_fields(assignment, changes, allowed=ASSIGNMENT_UPDATABLE_FIELDS)
        return self._assignment_to_dict(self.assignment_repo.update(assignment))

    def remove_assignment(self, assignment_id: int) -> bool:
        assignment = self._get_assignment_model(assignment_id)
        self.assignment_repo.delete(assignment)
        return True
