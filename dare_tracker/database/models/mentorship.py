from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base

class MentorshipMessage(Base):
    """멘토와 사업체 사이에 주고받은 메시지입니다. sender는 'mentor' 또는 'business'입니다."""
    __tablename__ = "mentorship_messages"
    id = Column(Integer, primary_key=True, index=True)
    mentor_id = Column(Integer, ForeignKey("mentors.id"), nullable=False, index=True)
    business_id = Column(Integer, ForeignKey("business_profiles.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    sender = Column(String, nullable=False)
    category = Column(String)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())

    mentor = relationship("Mentor", back_populates="messages")
    business = relationship("BusinessProfile", back_populates="messages")


class BusinessAdvice(Base):
    """멘토가 사업체에 남긴 조언과 그 이행 상태입니다."""
    __tablename__ = "business_advice"
    id = Column(Integer, primary_key=True, index=True)
    mentor_id = Column(Integer, ForeignKey("mentors.id"), nullable=False, index=True)
    business_id = Column(Integer, ForeignKey("business_profiles.id"), nullable=False, index=True)
    advice_content = Column(Text, nullable=False)
    category = Column(String, nullable=False)
    follow_up_notes = Column(Text)
    implementation_status = Column(String, nullable=False, default="pending")
    priority = Column(String, nullable=False, default="medium")
    created_by = Column(Integer, ForeignKey("users.id"))
    updated_by = Column(Integer, ForeignKey("users.id"))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    mentor = relationship("Mentor", back_populates="advice")
    business = relationship("BusinessProfile", back_populates="advice")
