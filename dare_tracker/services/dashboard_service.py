from typing import Dict, Any

from dare_tracker.database.choices import DISTRICTS
from dare_tracker.repositories.interfaces import (
    IYouthProfileRepository, IBusinessRepository, IMentorRepository, IMentorshipMessageRepository
)


class DashboardService:
    """대시보드에 표시할 요약 통계를 계산합니다."""

    def __init__(self, profile_repo: IYouthProfileRepository, business_repo: IBusinessRepository,
                 mentor_repo: IMentorRepository, message_repo: IMentorshipMessageRepository):
        self.profile_repo = profile_repo
        self.business_repo = business_repo
        self.mentor_repo = mentor_repo
        self.message_repo = message_repo

    def count_mentorship_sessions(self) -> int:
        """
        같은 날 같은 멘토와 사업체 사이에 오간 메시지를 한 번의 멘토링 세션으로 셉니다.
        작성 시각이 없는 메시지는 세지 않습니다.
        """
        sessions = {
            (m.created_at.date(), m.mentor_id, m.business_id)
            for m in self.message_repo.list_messages()
            if m.created_at is not None
        }
        return len(sessions)

    def get_stats(self) -> Dict[str, Any]:
        """
        Returns:
            활동 중인 청년 수, 사업체 수, 멘토 수, 멘토링 세션 수,
            지역별 청년 수(알려진 모든 지역 포함)와 청년이 있는 지역 목록.
        """
        profiles = self.profile_repo.list_all()
        district_counts = {district: 0 for district in DISTRICTS}
        for profile in profiles:
            if profile.district in district_counts:
                district_counts[profile.district] += 1
        districts = [district for district in DISTRICTS if district_counts[district] > 0]

        return {
            "active_participants": len(profiles),
            "active_businesses": len(self.business_repo.list_all()),
            "mentors_count": len(self.mentor_repo.list_all()),
            "mentorship_sessions": self.count_mentorship_sessions(),
            "district_counts": district_counts,
            "districts": districts,
            "districts_with_data": len(districts),
        }
