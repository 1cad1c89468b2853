from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base

class BusinessTracking(Base):
    """
    사업체의 기간별 성과(매출, 지출, 고용 등) 추적 기록입니다.
    멘토나 담당자가 기록하고, 관리자가 검증(is_verified)합니다.
    """
    __tablename__ = "business_tracking"
    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(Integer, ForeignKey("business_profiles.id"), nullable=False, index=True)
    recorded_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    mentor_id = Column(Integer, ForeignKey("mentors.id"))

    tracking_date = Column(Date, nullable=False)
    tracking_month = Column(Date, nullable=False)
    tracking_year = Column(Integer, nullable=False)
    tracking_period = Column(String, nullable=False, default="monthly")

    projected_revenue = Column(Integer)
    actual_revenue = Column(Integer)
    actual_expenditure = Column(Integer)
    actual_profit = Column(Integer)
    projected_employees = Column(Integer)
    actual_employees = Column(Integer)
    new_employees = Column(Integer)
    client_count = Column(Integer)

    mentor_feedback = Column(Text)
    business_insights = Column(Text)
    performance_rating = Column(Integer)

    is_verified = Column(Boolean, default=False)
    verified_by = Column(Integer, ForeignKey("users.id"))
    verification_date = Column(DateTime)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    business = relationship("BusinessProfile", back_populates="tracking_records")
