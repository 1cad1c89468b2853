from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base

class Makerspace(Base):
    """
    사업체가 장비와 공간을 함께 쓰는 메이커스페이스입니다.
    MakerSpace 모델 사업체가 이곳에 배정됩니다.
    """
    __tablename__ = "makerspaces"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    address = Column(String, nullable=False)
    coordinates = Column(String)
    district = Column(String, nullable=False)
    contact_phone = Column(String)
    contact_email = Column(String)
    contact_person = Column(String)
    operating_hours = Column(String)
    open_date = Column(Date)
    resource_count = Column(Integer, default=0)
    member_count = Column(Integer, default=0)
    facilities = Column(Text)
    status = Column(String, nullable=False, default="Active")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    business_assignments = relationship("BusinessMakerspaceAssignment", back_populates="makerspace", cascade="all, delete-orphan")


class BusinessMakerspaceAssignment(Base):
    """사업체의 메이커스페이스 배정입니다. 사업체당 하나만 존재합니다."""
    __tablename__ = "business_makerspace_assignments"
    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(Integer, ForeignKey("business_profiles.id"), nullable=False, unique=True)
    makerspace_id = Column(Integer, ForeignKey("makerspaces.id"), nullable=False, index=True)
    assigned_date = Column(Date, nullable=False)
    assigned_by = Column(Integer, ForeignKey("users.id"))
    notes = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    business = relationship("BusinessProfile", back_populates="makerspace_assignment")
    makerspace = relationship("Makerspace", back_populates="business_assignments")
