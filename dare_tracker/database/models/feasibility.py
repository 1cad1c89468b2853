from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from ..database import Base

class FeasibilityAssessment(Base):
    """
    사업 계획의 타당성 평가입니다.
    입지, 장비, 마케팅, 수익 전망, 초기 자본 항목을 평가하고
    Draft -> In Progress -> Completed -> Reviewed 순서로 진행됩니다.
    금액은 가나 세디 정수 단위입니다.
    """
    __tablename__ = "feasibility_assessments"
    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(Integer, ForeignKey("business_profiles.id"), nullable=False, index=True)
    youth_id = Column(Integer, ForeignKey("youth_profiles.id"), index=True)
    assessment_date = Column(Date, nullable=False)
    assessment_by = Column(Integer, ForeignKey("users.id"))
    status = Column(String, nullable=False, default="Draft")
    overall_feasibility_percentage = Column(Integer)

    # 입지 및 구조
    business_location = Column(String)
    location_description = Column(Text)
    has_structure = Column(Boolean)
    structure_description = Column(Text)

    # 장비 및 재료
    equipment = Column(JSON, nullable=False, default=list)
    equipment_cost = Column(Integer)
    supplies_description = Column(Text)
    monthly_supplies_cost = Column(Integer)

    # 마케팅 및 배송
    target_customers = Column(Text)
    marketing_plan = Column(Text)
    delivery_plan = Column(Text)
    monthly_livelihood_expenses = Column(Integer)

    # 수익 전망
    expected_price = Column(Integer)
    expected_monthly_revenue = Column(Integer)
    expected_monthly_expenditure = Column(Integer)
    expected_monthly_savings = Column(Integer)
    is_plan_feasible = Column(Boolean)
    plan_adjustments = Column(Text)

    # 초기 자본
    seed_capital_needed = Column(Integer)
    seed_capital_usage = Column(Text)

    # 평가 의견
    risk_factors = Column(Text)
    growth_opportunities = Column(Text)
    recommendations = Column(Text)
    recommended_actions = Column(Text)
    review_comments = Column(Text)
    reviewed_by = Column(Integer, ForeignKey("users.id"))
    review_date = Column(DateTime)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    business = relationship("BusinessProfile", back_populates="feasibility_assessments")
