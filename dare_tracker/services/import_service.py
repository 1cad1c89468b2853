import logging
from typing import Dict, Any, Optional

from dare_tracker.repositories.interfaces import IYouthProfileRepository
from dare_tracker.services.exceptions import YouthProfileCreationError
from dare_tracker.services.youth_service import YouthService
from dare_tracker.utils.youth_import_parser import MIN_COLUMNS, parse_rows, row_to_profile_fields

logger = logging.getLogger(__name__)


class ImportService:
    """TSV/CSV 텍스트로부터 청년 프로필을 일괄 등록합니다."""

    def __init__(self, youth_service: YouthService, profile_repo: IYouthProfileRepository):
        """
        ImportService를 초기화합니다.

        Args:
            youth_service: 행 단위 검증과 생성을 담당하는 청년 프로필 서비스.
            profile_repo: 기존 프로필 일괄 삭제에 사용하는 리포지토리.
        """
        self.youth_service = youth_service
        self.profile_repo = profile_repo

    def import_youth_profiles(self, data: str, file_format: Optional[str] = None,
                              clear_existing: bool = False) -> Dict[str, Any]:
        """
        구분자로 나뉜 텍스트의 각 행을 청년 프로필로 등록합니다.

        한 행의 실패가 전체 가져오기를 중단시키지 않습니다. 컬럼 수가 부족한 행,
        이름이 없는 행, 참가자 코드가 중복된 행(DB 또는 같은 파일 내), 검증에 실패한 행은
        건너뛰고 그 사유를 errors에 기록합니다.

        Args:
            data: 헤더 행을 포함한 TSV 또는 CSV 텍스트.
            file_format: 'tsv' 또는 'csv'. 없으면 헤더 행에서 자동으로 판단합니다.
            clear_existing: True면 가져오기 전에 기존 청년 프로필을 모두 삭제합니다.

        Returns:
            imported(등록 수), skipped(건너뛴 수), errors(행 번호와 사유 목록)를 담은 딕셔너리.

        Raises:
            ValueError: 데이터가 비어 있거나 형식을 지원하지 않을 때.
        """
        if data is not None and not isinstance(data, str):
            raise ValueError("Import data must be a string.")
        if not data or not data.strip():
            raise ValueError("No import data provided.")

        headers, rows = parse_rows(data, file_format)

        if clear_existing:
            removed = self.profile_repo.delete_all()
            logger.info("Cleared %d existing youth profiles before import", removed)

        imported, skipped, errors = 0, 0, []
        seen_codes = set()

        for line_number, values in rows:
            if len(values) < MIN_COLUMNS:
                skipped += 1
                errors.append({
                    "row": line_number,
                    "error": f"Insufficient columns (expected at least {MIN_COLUMNS}, got {len(values)})"
                })
                continue

            fields = row_to_profile_fields(headers, values)
            code = fields.get("participant_code")
            if code and code in seen_codes:
                skipped += 1
                errors.append({"row": line_number, "error": f"Duplicate participant code '{code}' in file"})
                continue

            try:
                self.youth_service.create_profile(**fields)
            except (ValueError, YouthProfileCreationError) as e:
                skipped += 1
                errors.append({"row": line_number, "error": str(e)})
                continue

            # 등록에 성공한 코드만 중복으로 취급합니다.
            if code:
                seen_codes.add(code)
            imported += 1

        logger.info("Youth profile import finished: %d imported, %d skipped", imported, skipped)
        return {"imported": imported, "skipped": skipped, "errors": errors}
