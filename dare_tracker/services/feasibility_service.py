import logging
from datetime import date, datetime
from typing import Dict, Any, List, Optional

from dare_tracker.database import models
from dare_tracker.database.choices import ASSESSMENT_STATUSES
from dare_tracker.repositories.interfaces import (
    IFeasibilityAssessmentRepository, IBusinessRepository, IYouthProfileRepository
)
from dare_tracker.services.exceptions import (
    FeasibilityAssessmentNotFoundError, BusinessNotFoundError, YouthProfileNotFoundError
)
from dare_tracker.utils.model_utils import apply_fields, model_to_dict
from dare_tracker.utils.validation import require_choice, require_range

logger = logging.getLogger(__name__)

ASSESSMENT_FIELDS = (
    "youth_id", "assessment_date", "status", "overall_feasibility_percentage",
    "business_location", "location_description", "has_structure", "structure_description",
    "equipment", "equipment_cost", "supplies_description", "monthly_supplies_cost",
    "target_customers", "marketing_plan", "delivery_plan", "monthly_livelihood_expenses",
    "expected_price", "expected_monthly_revenue", "expected_monthly_expenditure", "expected_monthly_savings",
    "is_plan_feasible", "plan_adjustments", "seed_capital_needed", "seed_capital_usage",
    "risk_factors", "growth_opportunities", "recommendations", "recommended_actions",
)
REVIEW_FIELDS = (
    "review_comments", "recommendations", "overall_feasibility_percentage",
    "risk_factors", "growth_opportunities", "recommended_actions",
)
# 금액 필드는 음수가 될 수 없습니다. (월 저축액은 적자일 수 있으므로 제외)
AMOUNT_FIELDS = (
    "equipment_cost", "monthly_supplies_cost", "monthly_livelihood_expenses", "expected_price",
    "expected_monthly_revenue", "expected_monthly_expenditure", "seed_capital_needed",
)


class FeasibilityService:
    """
    사업체의 타당성 평가를 관리합니다.
    평가는 Draft에서 시작하여 제출(Completed)과 검토(Reviewed)를 거치며,
    검토가 끝난 평가는 더 이상 수정하거나 다시 제출할 수 없습니다.
    """

    def __init__(self, assessment_repo: IFeasibilityAssessmentRepository, business_repo: IBusinessRepository,
                 profile_repo: IYouthProfileRepository):
        self.assessment_repo = assessment_repo
        self.business_repo = business_repo
        self.profile_repo = profile_repo

    def _get_assessment_model(self, assessment_id: int) -> models.FeasibilityAssessment:
        assessment = self.assessment_repo.find_by_id(assessment_id)
        if not assessment:
            raise FeasibilityAssessmentNotFoundError(f"Feasibility assessment with id '{assessment_id}' not found.")
        return assessment

    def _require_business(self, business_id: int):
        if not self.business_repo.find_by_id(business_id):
            raise BusinessNotFoundError(f"Business with id '{business_id}' not found.")

    def _require_youth(self, youth_id: int):
        profile = self.profile_repo.find_by_id(youth_id)
        if not profile or profile.is_deleted:
            raise YouthProfileNotFoundError(f"Youth profile with id '{youth_id}' not found.")

    def _clean(self, data: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(data)
        if "status" in data:
            data["status"] = require_choice("status", data["status"], ASSESSMENT_STATUSES)
            if data["status"] == "Reviewed":
                raise ValueError("An assessment can only become 'Reviewed' through review.")
        if "overall_feasibility_percentage" in data:
            data["overall_feasibility_percentage"] = require_range(
                "overall_feasibility_percentage", data["overall_feasibility_percentage"], 0, 100
            )
        for field in AMOUNT_FIELDS:
            if field in data:
                data[field] = require_range(field, data[field], 0)
        if "equipment" in data:
            if data["equipment"] is None:
                data["equipment"] = []
            elif not isinstance(data["equipment"], list):
                raise ValueError("equipment must be a list.")
        if data.get("youth_id") is not None:
            data["youth_id"] = int(data["youth_id"])
            self._require_youth(data["youth_id"])
        return data

    @staticmethod
    def _derive_savings(assessment: models.FeasibilityAssessment):
        revenue, expenditure = assessment.expected_monthly_revenue, assessment.expected_monthly_expenditure
        if assessment.expected_monthly_savings is None and revenue is not None and expenditure is not None:
            assessment.expected_monthly_savings = revenue - expenditure

    def create_assessment(self, business_id: int, assessment_by: Optional[int] = None, **data) -> Dict[str, Any]:
        """
        사업체의 타당성 평가를 생성합니다.

        Args:
            business_id: 평가 대상 사업체 ID.
            assessment_by: 평가를 작성한 사용자 ID.
            **data: 평가 항목. 월 저축액이 없으면 예상 수입과 지출의 차이로 계산합니다.

        Raises:
            BusinessNotFoundError: 사업체가 없을 때.
            YouthProfileNotFoundError: 연결할 청년 프로필이 없거나 삭제되었을 때.
            ValueError: 상태, 비율, 금액 값이 올바르지 않을 때.
        """
        self._require_business(business_id)
        data.pop("business_id", None)
        data = self._clean(data)

        assessment = models.FeasibilityAssessment(business_id=business_id, assessment_by=assessment_by)
        apply_fields(assessment, data, allowed=ASSESSMENT_FIELDS)
        assessment.status = assessment.status or "Draft"
        assessment.assessment_date = assessment.assessment_date or date.today()
        if assessment.equipment is None:
            assessment.equipment = []
        self._derive_savings(assessment)

        created = self.assessment_repo.create(assessment)
        logger.info("Feasibility assessment %s created for business %s", created.id, business_id)
        return model_to_dict(created)

    def list_assessments(self, business_id: Optional[int] = None, youth_id: Optional[int] = None,
                         status: Optional[str] = None) -> List[Dict[str, Any]]:
        status = require_choice("status", status, ASSESSMENT_STATUSES)
        assessments = self.assessment_repo.list_all(business_id=business_id, youth_id=youth_id, status=status)
        return [model_to_dict(a) for a in assessments]

    def get_assessment(self, assessment_id: int) -> Dict[str, Any]:
        return model_to_dict(self._get_assessment_model(assessment_id))

    def update_assessment(self, assessment_id: int, **changes) -> Dict[str, Any]:
        """
        Raises:
            FeasibilityAssessmentNotFoundError: 평가가 없을 때.
            ValueError: 이미 검토된 평가이거나 값이 올바르지 않을 때.
        """
        assessment = self._get_assessment_model(assessment_id)
        if assessment.status == "Reviewed":
            raise ValueError("A reviewed assessment can no longer be edited.")
        changes = self._clean(changes)
        if "assessment_date" in changes and not changes["assessment_date"]:
            raise ValueError("assessment_date cannot be empty.")
        if "status" in changes and not changes["status"]:
            raise ValueError("status cannot be empty.")
        current = {name: getattr(assessment, name) for name in ASSESSMENT_FIELDS}
        apply_fields(models.FeasibilityAssessment(**current), changes, allowed=ASSESSMENT_FIELDS)
        apply_fields(assessment, changes, allowed=ASSESSMENT_FIELDS)
        if assessment.equipment is None:
            assessment.equipment = []
        self._derive_savings(assessment)
        return model_to_dict(self.assessment_repo.update(assessment))

    def submit_assessment(self, assessment_id: int) -> Dict[str, Any]:
        """평가를 검토 대기(Completed) 상태로 제출합니다."""
        assessment = self._get_assessment_model(assessment_id)
        if assessment.status == "Reviewed":
            raise ValueError("A reviewed assessment cannot be submitted again.")
        assessment.status = "Completed"
        return model_to_dict(self.assessment_repo.update(assessment))

    def review_assessment(self, assessment_id: int, reviewed_by: Optional[int] = None, **review) -> Dict[str, Any]:
        """
        평가를 검토 완료(Reviewed)로 표시하고 검토자, 검토 일시, 검토 의견을 기록합니다.

        Raises:
            FeasibilityAssessmentNotFoundError: 평가가 없을 때.
            ValueError: 검토 항목이 아닌 필드가 있거나 비율이 0~100 범위를 벗어날 때.
        """
        assessment = self._get_assessment_model(assessment_id)
        if "overall_feasibility_percentage" in review:
            review["overall_feasibility_percentage"] = require_range(
                "overall_feasibility_percentage", review["overall_feasibility_percentage"], 0, 100
            )
        apply_fields(assessment, review, allowed=REVIEW_FIELDS)
        assessment.status = "Reviewed"
        assessment.reviewed_by = reviewed_by
        assessment.review_date = datetime.now()
        updated = self.assessment_repo.update(assessment)
        logger.info("Feasibility assessment %s reviewed by user %s", assessment_id, reviewed_by)
        return model_to_dict(updated)

    def delete_assessment(self, assessment_id: int) -> bool:
        assessment = self._get_assessment_model(assessment_id)
        self.assessment_repo.delete(assessment)
        return True
