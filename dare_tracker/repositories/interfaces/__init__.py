from .user import IUserRepository
from .role import IRoleRepository
from .permission import IPermissionRepository, IRolePermissionRepository
from .youth_profile import IYouthProfileRepository
from .education import IEducationRepository
from .training import ITrainingProgramRepository, IYouthTrainingRepository
from .business import IBusinessRepository
from .business_tracking import IBusinessTrackingRepository
from .mentor import IMentorRepository
from .certification import ICertificationRepository
from .skill import ISkillRepository, IYouthSkillRepository
from .makerspace import IMakerspaceRepository, IMakerspaceAssignmentRepository
from .feasibility import IFeasibilityAssessmentRepository
from .mentorship import IMentorshipMessageRepository, IBusinessAdviceRepository
