from sqlalchemy import Column, Integer, String, Text, Boolean, Date, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class BusinessYouthRelationship(Base):
    """
    사업체(BusinessProfile)와 청년(YouthProfile) 사이의 다대다 관계를
    연결하는 연관 테이블 모델입니다. 청년이 사업체에서 맡은 역할을 함께 기록합니다.
    """
    __tablename__ = 'business_youth_relationships'
    business_id = Column(Integer, ForeignKey('business_profiles.id'), primary_key=True)
    youth_id = Column(Integer, ForeignKey('youth_profiles.id'), primary_key=True)
    role = Column(String, nullable=False, default="Member")
    join_date = Column(Date, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    business = relationship("BusinessProfile", back_populates="youth_associations")
    youth = relationship("YouthProfile", back_populates="business_associations")


class MentorBusinessRelationship(Base):
    """
    멘토(Mentor)와 사업체(BusinessProfile)의 배정 관계입니다.
    멘토링 중점 분야, 면담 주기, 진행 평가를 함께 기록합니다.
    """
    __tablename__ = 'mentor_business_relationships'
    mentor_id = Column(Integer, ForeignKey('mentors.id'), primary_key=True)
    business_id = Column(Integer, ForeignKey('business_profiles.id'), primary_key=True)
    assigned_date = Column(Date, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    mentorship_focus = Column(String)
    meeting_frequency = Column(String, default="Monthly")
    mentorship_progress = Column(Text)
    progress_rating = Column(Integer)

    mentor = relationship("Mentor", back_populates="business_associations")
    business = relationship("BusinessProfile", back_populates="mentor_associations")


class YouthSkill(Base):
    """
    청년(YouthProfile)과 기술 항목(Skill)의 연관 테이블 모델입니다.
    숙련도와 경력 연수를 함께 기록하며, 청년당 하나의 기술만 주 기술(is_primary)입니다.
    """
    __tablename__ = 'youth_skills'
    youth_id = Column(Integer, ForeignKey('youth_profiles.id'), primary_key=True)
    skill_id = Column(Integer, ForeignKey('skills.id'), primary_key=True)
    proficiency = Column(String, nullable=False, default="Intermediate")
    is_primary = Column(Boolean, nullable=False, default=False)
    years_of_experience = Column(Integer, nullable=False, default=0)
    notes = Column(Text)

    youth = relationship("YouthProfile", back_populates="skill_associations")
    skill = relationship("Skill", back_populates="youth_associations")
