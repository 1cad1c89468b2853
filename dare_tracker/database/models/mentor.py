from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from ..database import Base

class Mentor(Base):
    """
    사업체를 지도하는 멘토입니다. 로그인 계정(User)과 연결되며
    하나 이상의 담당 지역(assigned_districts)을 가질 수 있습니다.
    """
    __tablename__ = "mentors"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    name = Column(String, nullable=False)
    phone = Column(String)
    email = Column(String)
    assigned_districts = Column(JSON, nullable=False, default=list)
    specialization = Column(String)
    bio = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())

    business_associations = relationship("MentorBusinessRelationship", back_populates="mentor", cascade="all, delete-orphan")
    messages = relationship("MentorshipMessage", back_populates="mentor", cascade="all, delete-orphan")
    advice = relationship("BusinessAdvice", back_populates="mentor", cascade="all, delete-orphan")
