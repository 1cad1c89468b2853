from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base

class Education(Base):
    """
    청년의 학력 및 자격 이력입니다.
    한 청년당 최대 하나의 기록만 최종 학력(is_highest_qualification)으로 표시됩니다.
    """
    __tablename__ = "education"
    id = Column(Integer, primary_key=True, index=True)
    youth_id = Column(Integer, ForeignKey("youth_profiles.id"), nullable=False, index=True)
    qualification_type = Column(String, nullable=False)
    qualification_name = Column(String, nullable=False)
    specialization = Column(String)
    level_completed = Column(String)
    institution = Column(String)
    graduation_year = Column(Integer)
    is_highest_qualification = Column(Boolean, default=False)
    certificate_url = Column(String)
    qualification_status = Column(String, default="Completed")
    additional_details = Column(Text)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    youth = relationship("YouthProfile", back_populates="education_records")
