from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, func
from sqlalchemy.orm import relationship
from ..database import Base

class BusinessProfile(Base):
    """
    프로그램을 통해 설립되거나 지원받는 사업체입니다.
    청년 구성원(BusinessYouthRelationship), 담당 멘토(MentorBusinessRelationship),
    메이커스페이스 배정, 타당성 평가, 멘토링 메시지와 조언,
    성과 추적 기록(BusinessTracking)이 이 모델에 종속됩니다.
    """
    __tablename__ = "business_profiles"
    id = Column(Integer, primary_key=True, index=True)
    business_name = Column(String, nullable=False, index=True)
    district = Column(String)
    business_location = Column(String)
    business_contact = Column(String)
    business_description = Column(Text)
    dare_model = Column(String)
    business_start_date = Column(Date)
    registration_status = Column(String)
    registration_number = Column(String)
    registration_date = Column(Date)
    target_market = Column(String)
    sector = Column(String)
    enterprise_type = Column(String)
    enterprise_size = Column(String)
    primary_phone_number = Column(String)
    business_email = Column(String)
    country = Column(String, default="Ghana")
    implementing_partner_name = Column(String)
    delivery_setup = Column(Boolean, default=False)
    expected_monthly_revenue = Column(Integer)
    anticipated_monthly_expenditure = Column(Integer)
    expected_monthly_profit = Column(Integer)
    payment_structure = Column(String)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    youth_associations = relationship("BusinessYouthRelationship", back_populates="business", cascade="all, delete-orphan")
    mentor_associations = relationship("MentorBusinessRelationship", back_populates="business", cascade="all, delete-orphan")
    tracking_records = relationship("BusinessTracking", back_populates="business", cascade="all, delete-orphan")
    makerspace_assignment = relationship("BusinessMakerspaceAssignment", back_populates="business", uselist=False, cascade="all, delete-orphan")
    feasibility_assessments = relationship("FeasibilityAssessment", back_populates="business", cascade="all, delete-orphan")
    messages = relationship("MentorshipMessage", back_populates="business", cascade="all, delete-orphan")
    advice = relationship("BusinessAdvice", back_populates="business", cascade="all, delete-orphan")
