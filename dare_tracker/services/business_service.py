import logging
from datetime import date, datetime
from typing import Dict, Any, List, Optional

from dare_tracker.database import models
from dare_tracker.database.choices import (
    DARE_MODELS, REGISTRATION_STATUSES, BUSINESS_SECTORS, ENTERPRISE_TYPES,
    ENTERPRISE_SIZES, PAYMENT_STRUCTURES, TRACKING_PERIODS
)
from dare_tracker.repositories.interfaces import (
    IBusinessRepository, IBusinessTrackingRepository, IYouthProfileRepository
)
from dare_tracker.services.exceptions import (
    BusinessNotFoundError, BusinessTrackingNotFoundError, YouthProfileNotFoundError,
    MembershipNotFoundError
)
from dare_tracker.utils.model_utils import apply_fields, model_to_dict
from dare_tracker.utils.validation import normalize_district, require_rating, validate_choices

logger = logging.getLogger(__name__)

BUSINESS_CHOICE_FIELDS = {
    "dare_model": DARE_MODELS,
    "registration_status": REGISTRATION_STATUSES,
    "sector": BUSINESS_SECTORS,
    "enterprise_type": ENTERPRISE_TYPES,
    "enterprise_size": ENTERPRISE_SIZES,
    "payment_structure": PAYMENT_STRUCTURES,
}

TRACKING_CHOICE_FIELDS = {"tracking_period": TRACKING_PERIODS}

# 추적 기록에서 클라이언트가 직접 설정할 수 있는 필드
TRACKING_FIELDS = (
    "mentor_id", "tracking_date", "tracking_period",
    "projected_revenue", "actual_revenue", "actual_expenditure", "actual_profit",
    "projected_employees", "actual_employees", "new_employees", "client_count",
    "mentor_feedback", "business_insights", "performance_rating",
)


def derive_tracking_dates(tracking_date: date) -> Dict[str, Any]:
    """추적 일자로부터 추적 월(해당 월 1일)과 연도를 계산합니다."""
    return {"tracking_month": tracking_date.replace(day=1), "tracking_year": tracking_date.year}


class BusinessService:
    """사업체 프로필, 청년 구성원, 성과 추적 기록을 관리합니다."""

    def __init__(self, business_repo: IBusinessRepository, tracking_repo: IBusinessTrackingRepository,
                 profile_repo: IYouthProfileRepository):
        """
        BusinessService를 초기화합니다.

        Args:
            business_repo: 사업체와 구성원 관계에 접근하기 위한 리포지토리.
            tracking_repo: 사업 추적 기록에 접근하기 위한 리포지토리.
            profile_repo: 청년 프로필 리포지토리 (구성원 추가 시 검증용).
        """
        self.business_repo = business_repo
        self.tracking_repo = tracking_repo
        self.profile_repo = profile_repo

    def get_business_model(self, business_id: int) -> models.BusinessProfile:
        """
        Raises:
            BusinessNotFoundError: 해당 ID의 사업체를 찾을 수 없을 때.
        """
        business = self.business_repo.find_by_id(business_id)
        if not business:
            raise BusinessNotFoundError(f"Business with id '{business_id}' not found.")
        return business

    # ------------------------------------------------------------------
    # 사업체 프로필
    # ------------------------------------------------------------------

    def create_business(self, **data) -> Dict[str, Any]:
        """
        사업체를 생성합니다.

        Raises:
            ValueError: 사업체 이름이 없거나 열거형 필드 값이 올바르지 않을 때.
        """
        data = validate_choices(data, BUSINESS_CHOICE_FIELDS)
        if not data.get("business_name"):
            raise ValueError("business_name is required.")
        business = apply_fields(models.BusinessProfile(), data)
        created = self.business_repo.create(business)
        logger.info("Business '%s' created", created.business_name)
        return model_to_dict(created)

    def list_businesses(self, district: Optional[str] = None) -> List[Dict[str, Any]]:
        district = normalize_district(district)
        return [model_to_dict(b) for b in self.business_repo.list_all(district=district)]

    def get_business(self, business_id: int) -> Dict[str, Any]:
        """사업체 정보를 구성원 수, 배정된 멘토 수와 함께 조회합니다."""
        business = self.get_business_model(business_id)
        result = model_to_dict(business)
        result["member_count"] = len(business.youth_associations)
        result["mentor_count"] = len(business.mentor_associations)
        return result

    def update_business(self, business_id: int, **changes) -> Dict[str, Any]:
        business = self.get_business_model(business_id)
        changes = validate_choices(changes, BUSINESS_CHOICE_FIELDS)
        if "business_name" in changes and not changes["business_name"]:
            raise ValueError("business_name cannot be empty.")
        apply_fields(business, changes)
        return model_to_dict(self.business_repo.update(business))

    def delete_business(self, business_id: int) -> bool:
        """사업체와 구성원 관계, 멘토 배정, 추적 기록을 모두 삭제합니다."""
        business = self.get_business_model(business_id)
        self.business_repo.delete(business)
        logger.info("Business %s deleted", business_id)
        return True

    # ------------------------------------------------------------------
    # 청년 구성원
    # ------------------------------------------------------------------

    def add_member(self, business_id: int, youth_id: int, role: str = "Member",
                   join_date: Optional[str] = None, is_active: bool = True) -> List[Dict[str, Any]]:
        """
        청년을 사업체 구성원으로 추가합니다. 이미 구성원이면 역할과 가입일을 갱신합니다.

        Returns:
            갱신된 구성원 목록.

        Raises:
            BusinessNotFoundError: 사업체가 없을 때.
            YouthProfileNotFoundError: 청년 프로필이 없거나 삭제되었을 때.
        """
        self.get_business_model(business_id)
        youth = self.profile_repo.find_by_id(youth_id)
        if not youth or youth.is_deleted:
            raise YouthProfileNotFoundError(f"Youth profile with id '{youth_id}' not found.")

        association = models.BusinessYouthRelationship(
            business_id=business_id,
            youth_id=youth_id,
            role=role or "Member",
            join_date=date.fromisoformat(join_date) if join_date else date.today(),
            is_active=is_active
        )
        self.business_repo.add_member(association)
        return self.business_repo.list_members(business_id)

    def list_members(self, business_id: int) -> List[Dict[str, Any]]:
        self.get_business_model(business_id)
        return self.business_repo.list_members(business_id)

    def remove_member(self, business_id: int, youth_id: int) -> bool:
        """
        Raises:
            BusinessNotFoundError: 사업체가 없을 때.
            MembershipNotFoundError: 청년이 사업체 구성원이 아닐 때.
        """
        self.get_business_model(business_id)
        if not self.business_repo.remove_member(business_id, youth_id):
            raise MembershipNotFoundError(f"Youth '{youth_id}' is not a member of business '{business_id}'.")
        return True

    # ------------------------------------------------------------------
    # 사업 추적 기록
    # ------------------------------------------------------------------

    def _get_tracking_model(self, tracking_id: int) -> models.BusinessTracking:
        record = self.tracking_repo.find_by_id(tracking_id)
        if not record:
            raise BusinessTrackingNotFoundError(f"Business tracking record with id '{tracking_id}' not found.")
        return record

    @staticmethod
    def _clean_tracking(data: Dict[str, Any]) -> Dict[str, Any]:
        data = validate_choices(data, TRACKING_CHOICE_FIELDS)
        if "performance_rating" in data:
            data["performance_rating"] = require_rating("performance_rating", data["performance_rating"])
        return data

    @staticmethod
    def _derive_profit(record: models.BusinessTracking, explicit_profit: bool):
        if not explicit_profit and record.actual_revenue is not None and record.actual_expenditure is not None:
            record.actual_profit = record.actual_revenue - record.actual_expenditure

    def create_tracking(self, business_id: int, recorded_by: int, **data) -> Dict[str, Any]:
        """
        사업체의 성과 추적 기록을 생성합니다.
        tracking_date가 없으면 오늘 날짜를 사용하고, 추적 월/연도는 날짜로부터 계산합니다.
        actual_profit이 없고 매출과 지출이 모두 있으면 그 차이로 계산합니다.

        Raises:
            BusinessNotFoundError: 사업체가 없을 때.
            ValueError: 기간이나 평가 점수 값이 올바르지 않을 때.
        """
        self.get_business_model(business_id)
        data = self._clean_tracking(data)

        record = apply_fields(models.BusinessTracking(), data, allowed=TRACKING_FIELDS)
        record.business_id = business_id
        record.recorded_by = recorded_by
        record.tracking_date = record.tracking_date or date.today()
        record.tracking_period = record.tracking_period or "monthly"
        for name, value in derive_tracking_dates(record.tracking_date).items():
            setattr(record, name, value)
        self._derive_profit(record, explicit_profit=data.get("actual_profit") is not None)

        return model_to_dict(self.tracking_repo.create(record))

    def list_tracking(self, business_id: int) -> List[Dict[str, Any]]:
        self.get_business_model(business_id)
        return [model_to_dict(r) for r in self.tracking_repo.list_by_business(business_id)]

    def update_tracking(self, tracking_id: int, **changes) -> Dict[str, Any]:
        """
        추적 기록을 수정합니다. 수정된 기록은 다시 검증이 필요하므로 검증 상태가 해제됩니다.

        Raises:
            BusinessTrackingNotFoundError: 기록이 없을 때.
        """
        record = self._get_tracking_model(tracking_id)
        changes = self._clean_tracking(changes)
        if "tracking_date" in changes and not changes["tracking_date"]:
            raise ValueError("tracking_date cannot be empty.")
        apply_fields(record, changes, allowed=TRACKING_FIELDS)
        if "tracking_date" in changes:
            for name, value in derive_tracking_dates(record.tracking_date).items():
                setattr(record, name, value)
        self._derive_profit(record, explicit_profit=changes.get("actual_profit") is not None)

        record.is_verified = False
        record.verified_by = None
        record.verification_date = None
        return model_to_dict(self.tracking_repo.update(record))

    def verify_tracking(self, tracking_id: int, verified_by: int) -> Dict[str, Any]:
        """추적 기록을 검증 완료로 표시합니다."""
        record = self._get_tracking_model(tracking_id)
        record.is_verified = True
        record.verified_by = verified_by
        record.verification_date = datetime.now()
        return model_to_dict(self.tracking_repo.update(record))

    def delete_tracking(self, tracking_id: int) -> bool:
        record = self._get_tracking_model(tracking_id)
        self.tracking_repo.delete(record)
        return True
