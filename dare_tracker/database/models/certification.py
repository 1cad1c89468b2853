from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from ..database import Base

class Certification(Base):
    """
    청년이 취득한 자격증입니다.
    skills에는 자격증과 관련된 기술 이름 목록이 JSON으로 저장됩니다.
    """
    __tablename__ = "youth_certifications"
    id = Column(Integer, primary_key=True, index=True)
    youth_id = Column(Integer, ForeignKey("youth_profiles.id"), nullable=False, index=True)
    certification_name = Column(String, nullable=False)
    issuing_organization = Column(String)
    issue_date = Column(Date)
    expiry_date = Column(Date)
    credential_id = Column(String)
    credential_url = Column(String)
    skills = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    youth = relationship("YouthProfile", back_populates="certifications")
