from .user import User
from .role import Role
from .permission import Permission, RolePermission
from .youth_profile import YouthProfile
from .education import Education
from .certification import Certification
from .skill import Skill
from .training import TrainingProgram, YouthTraining
from .business import BusinessProfile
from .mentor import Mentor
from .association import BusinessYouthRelationship, MentorBusinessRelationship, YouthSkill
from .business_tracking import BusinessTracking
from .makerspace import Makerspace, BusinessMakerspaceAssignment
from .feasibility import FeasibilityAssessment
from .mentorship import MentorshipMessage, BusinessAdvice

__all__ = [
    "User",
    "Role",
    "Permission",
    "RolePermission",
    "YouthProfile",
    "Education",
    "Certification",
    "Skill",
    "TrainingProgram",
    "YouthTraining",
    "BusinessProfile",
    "Mentor",
    "BusinessYouthRelationship",
    "MentorBusinessRelationship",
    "YouthSkill",
    "BusinessTracking",
    "Makerspace",
    "BusinessMakerspaceAssignment",
    "FeasibilityAssessment",
    "MentorshipMessage",
    "BusinessAdvice",
]
