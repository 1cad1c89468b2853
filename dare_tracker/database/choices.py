# dare_tracker/database/choices.py
"""
모델과 서비스가 공유하는 값 목록(열거형)을 정의합니다.
DB 제약 대신 서비스 계층에서 이 목록으로 입력값을 검증합니다.
"""

# --- 권한 매트릭스 ---
PERMISSION_RESOURCES = (
    # 사용자 관리
    "users",
    "roles",
    "permissions",
    # 청년 프로필
    "youth_profiles",
    "youth_education",
    "youth_certifications",
    "youth_skills",
    "portfolio",
    "education",
    # 사업체
    "businesses",
    "business_youth",
    "business_makerspace",
    "feasibility_assessment",
    "business_tracking",
    # 멘토
    "mentors",
    "mentor_assignments",
    "mentorship_messages",
    "business_advice",
    # 교육 훈련
    "training",
    # 대시보드
    "dashboard",
    "activities",
    # 관리자
    "reports",
    "system_settings",
    "diagnostics",
    "uploads",
    # 시스템 리소스
    "skills",
    "makerspaces",
    "certificates",
    "system",
    "admin_panel",
)

PERMISSION_ACTIONS = ("view", "create", "edit", "update", "delete", "manage")

ADMIN_ROLE = "admin"
DEFAULT_USER_ROLE = "mentee"

# (name, display_name, description, is_system)
DEFAULT_ROLES = (
    (ADMIN_ROLE, "Administrator", "System administrator with full access to all features", True),
    ("manager", "Program Manager", "Manages youth, businesses and mentors", True),
    ("reviewer", "Reviewer", "Reviews program data", True),
    ("mentor", "Mentor", "Mentors assigned businesses", True),
    ("mentee", "Mentee", "Program participant", True),
    ("user", "User", "Basic access", False),
)

# admin 이외의 기본 역할에 부여되는 권한
DEFAULT_ROLE_PERMISSIONS = {
    "mentor": (
        ("youth_profiles", "view"),
        ("businesses", "view"),
        ("business_tracking", "view"),
        ("business_tracking", "create"),
        ("reports", "view"),
        ("reports", "edit"),
    ),
    "reviewer": (
        ("youth_profiles", "view"),
        ("businesses", "view"),
        ("reports", "view"),
    ),
}

# --- 도메인 값 ---
DISTRICTS = ("Bekwai", "Gushegu", "Lower Manya Krobo", "Yilo Krobo")

DARE_MODELS = ("Collaborative", "MakerSpace", "Madam Anchor")

TRAINING_STATUSES = ("In Progress", "Completed", "Dropped")

QUALIFICATION_STATUSES = ("Completed", "In Progress", "Incomplete")

REGISTRATION_STATUSES = ("Registered", "Unregistered")

ENTERPRISE_TYPES = (
    "Sole Proprietorship",
    "Partnership",
    "Limited Liability Company",
    "Cooperative",
    "Social Enterprise",
    "Other",
)

ENTERPRISE_SIZES = ("Micro", "Small", "Medium", "Large")

BUSINESS_SECTORS = (
    "Agriculture",
    "Manufacturing",
    "Construction",
    "Retail",
    "Food & Beverage",
    "Fashion & Apparel",
    "Beauty & Wellness",
    "ICT",
    "Creative Arts",
    "Education",
    "Healthcare",
    "Professional Services",
    "Other",
    "Unemployed",
    "Climate Adaptation & Resilience",
    "Digital Economy",
    "Enterprise/Business Development",
    "Youth Engagement",
    "Refugees & Displaced Populations",
    "Tourism & Hospitality",
    "Innovation",
    "Finance / Financial Services",
    "Information Not Available",
)

PAYMENT_STRUCTURES = ("Self-Pay", "Reinvestment", "Savings")

MENTORSHIP_FOCUSES = (
    "Business Growth",
    "Operations Improvement",
    "Market Expansion",
    "Financial Management",
    "Team Development",
)

MEETING_FREQUENCIES = ("Weekly", "Bi-weekly", "Monthly", "Quarterly", "As Needed")

TRACKING_PERIODS = ("weekly", "monthly", "quarterly", "semi_annual", "annual")

SKILL_PROFICIENCIES = ("Beginner", "Intermediate", "Advanced", "Expert")

MAKERSPACE_STATUSES = ("Active", "Inactive")

ASSESSMENT_STATUSES = ("Draft", "In Progress", "Completed", "Reviewed")

# 멘토링 메시지와 사업 조언이 공유하는 분류
ADVICE_CATEGORIES = ("operations", "marketing", "finance", "management", "strategy", "other")

MESSAGE_SENDERS = ("mentor", "business")

ADVICE_STATUSES = ("pending", "in_progress", "implemented", "postponed")

ADVICE_PRIORITIES = ("high", "medium", "low")
