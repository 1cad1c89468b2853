# dare_tracker/services/exceptions.py

# --- Not Found Exceptions ---
class UserNotFoundError(Exception):
    """사용자를 찾을 수 없을 때"""
    pass

class RoleNotFoundError(Exception):
    """역할을 찾을 수 없을 때"""
    pass

class RolePermissionNotFoundError(Exception):
    """회수하려는 역할 권한이 존재하지 않을 때"""
    pass

class YouthProfileNotFoundError(Exception):
    """청년 프로필을 찾을 수 없을 때"""
    pass

class EducationNotFoundError(Exception):
    """학력 기록을 찾을 수 없을 때"""
    pass

class TrainingProgramNotFoundError(Exception):
    """훈련 프로그램을 찾을 수 없을 때"""
    pass

class TrainingRecordNotFoundError(Exception):
    """청년 훈련 기록을 찾을 수 없을 때"""
    pass

class BusinessNotFoundError(Exception):
    """사업체를 찾을 수 없을 때"""
    pass

class BusinessTrackingNotFoundError(Exception):
    """사업 추적 기록을 찾을 수 없을 때"""
    pass

class MentorNotFoundError(Exception):
    """멘토를 찾을 수 없을 때"""
    pass

class MembershipNotFoundError(Exception):
    """사업체-청년 또는 멘토-사업체 관계가 존재하지 않을 때"""
    pass

class CertificationNotFoundError(Exception):
    """자격증 기록을 찾을 수 없을 때"""
    pass

class SkillNotFoundError(Exception):
    """기술 항목이나 청년의 기술 기록을 찾을 수 없을 때"""
    pass

class MakerspaceNotFoundError(Exception):
    """메이커스페이스를 찾을 수 없을 때"""
    pass

class MakerspaceAssignmentNotFoundError(Exception):
    """사업체-메이커스페이스 배정을 찾을 수 없을 때"""
    pass

class FeasibilityAssessmentNotFoundError(Exception):
    """타당성 평가를 찾을 수 없을 때"""
    pass

class MentorshipMessageNotFoundError(Exception):
    """멘토링 메시지를 찾을 수 없을 때"""
    pass

class BusinessAdviceNotFoundError(Exception):
    """사업 조언 기록을 찾을 수 없을 때"""
    pass

# --- Creation/Validation Exceptions ---
class UserCreationError(Exception):
    """사용자 생성 실패 시"""
    pass

class YouthProfileCreationError(Exception):
    """청년 프로필 생성 실패 시 (참가자 코드 중복 등)"""
    pass

class RoleInUseError(Exception):
    """사용자에게 할당된 역할을 삭제하려고 할 때"""
    pass

# --- Conflict Exceptions ---
class RoleExistsError(Exception):
    """동일한 이름의 역할이 이미 존재할 때"""
    pass

class RolePermissionExistsError(Exception):
    """역할에 동일한 권한이 이미 부여되어 있을 때"""
    pass

class SkillExistsError(Exception):
    """동일한 이름의 기술 항목이 이미 존재할 때"""
    pass

# --- Auth Exceptions ---
class TokenInvalidError(Exception):
    """토큰이 유효하지 않거나 없을 때"""
    pass

class AuthenticationError(Exception):
    """사용자 자격 증명 실패 시"""
    pass

class PermissionDeniedError(Exception):
    """역할에 요청한 (리소스, 동작) 권한이 없을 때"""
    pass

class SystemRoleError(Exception):
    """시스템 역할이나 수정 불가 역할을 변경/삭제하려고 할 때"""
    pass
