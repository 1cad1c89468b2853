# dare_tracker/utils/youth_import_parser.py
import csv
import io
from typing import Any, Dict, List, Optional, Tuple

# 한 행에 최소로 있어야 하는 컬럼 수. 미만이면 해당 행은 건너뜁니다.
MIN_COLUMNS = 10

# 모델 필드 -> 허용되는 헤더 이름 (앞쪽이 우선)
COLUMN_ALIASES = {
    "participant_code": ("Participant Code", "participantCode", "participant_code"),
    "full_name": ("Full Name", "Name", "fullName", "full_name"),
    "first_name": ("First Name", "firstName", "first_name"),
    "middle_name": ("Middle Name", "middleName", "middle_name"),
    "last_name": ("Last Name", "lastName", "last_name"),
    "phone_number": ("Phone Number", "Phone", "phoneNumber", "phone_number"),
    "email": ("Email", "email"),
    "gender": ("Gender", "gender"),
    "district": ("District", "district"),
    "town": ("Town", "town"),
    "marital_status": ("Marital Status", "maritalStatus", "marital_status"),
    "children_count": ("Children", "childrenCount", "children_count"),
    "year_of_birth": ("YOB", "yearOfBirth", "year_of_birth"),
    "age": ("Age", "age"),
    "age_group": ("Age Group", "ageGroup", "age_group"),
    "business_interest": ("Business Interest", "businessInterest", "business_interest"),
    "employment_status": ("Employment Status", "employmentStatus", "employment_status"),
    "specific_job": ("Specific Job", "specificJob", "specific_job"),
    "pwd_status": ("PWD Status", "pwdStatus", "pwd_status"),
    "dare_model": ("DARE Model", "dareModel", "dare_model"),
    "madam_name": ("Madam Name", "madamName", "madam_name"),
    "madam_phone": ("Madam Phone", "madamPhone", "madam_phone"),
    "guarantor": ("Guarantor", "guarantor"),
    "guarantor_phone": ("Guarantor Phone", "guarantorPhone", "guarantor_phone"),
    "core_skills": ("Core Skills", "coreSkills", "core_skills"),
    "digital_skills": ("Digital Skills", "digitalSkills", "digital_skills"),
    "digital_skills_2": ("Digital Skills 2", "digitalSkills2", "digital_skills_2"),
    "dependents": ("Dependents", "dependents"),
    "national_id": ("National ID", "nationalId", "national_id"),
    "training_status": ("Training Status", "trainingStatus", "training_status"),
    "program_status": ("Program Status", "programStatus", "program_status"),
    "cohort": ("Cohort", "cohort"),
}

INTEGER_FIELDS = ("children_count", "year_of_birth", "age")

# 파일에 값이 없을 때 가져온 프로필에 설정되는 상태
DEFAULT_TRAINING_STATUS = "Completed"
DEFAULT_PROGRAM_STATUS = "Outreach"


def detect_delimiter(header_line: str, file_format: Optional[str] = None) -> str:
    """
    구분자를 결정합니다. file_format('tsv' 또는 'csv')이 주어지면 그것을 따르고,
    없으면 헤더에 탭이 있는지로 판단합니다.
    """
    if file_format:
        fmt = file_format.lower()
        if fmt not in ("tsv", "csv", "txt"):
            raise ValueError(f"Unsupported import format '{file_format}'. Use 'tsv' or 'csv'.")
        return "," if fmt == "csv" else "\t"
    return "\t" if "\t" in header_line else ","


def parse_rows(text: str, file_format: Optional[str] = None) -> Tuple[List[str], List[Tuple[int, List[str]]]]:
    """
    구분자로 나뉜 텍스트를 헤더와 (행 번호, 값 목록) 리스트로 분리합니다.
    빈 줄은 무시하며, 행 번호는 파일 기준 1부터 시작합니다.

    Raises:
        ValueError: 헤더 행이 없을 때.
    """
    lines = [(number, line) for number, line in enumerate(text.splitlines(), start=1) if line.strip()]
    if not lines:
        raise ValueError("Import data is empty.")

    delimiter = detect_delimiter(lines[0][1], file_format)
    reader = csv.reader(io.StringIO("\n".join(line for _, line in lines)), delimiter=delimiter)
    parsed = list(reader)

    headers = [header.strip() for header in parsed[0]]
    rows = [(lines[index][0], values) for index, values in enumerate(parsed[1:], start=1)]
    return headers, rows


def _parse_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def row_to_profile_fields(headers: List[str], values: List[str]) -> Dict[str, Any]:
    """
    헤더와 값 목록을 YouthProfile 필드 딕셔너리로 변환합니다.
    빈 값은 None으로, 정수 필드는 파싱 실패 시 None으로 처리합니다.
    """
    row = {header: values[index].strip() for index, header in enumerate(headers) if index < len(values)}

    fields: Dict[str, Any] = {}
    for field, aliases in COLUMN_ALIASES.items():
        value = next((row[alias] for alias in aliases if row.get(alias)), None)
        fields[field] = value

    for field in INTEGER_FIELDS:
        fields[field] = _parse_int(fields[field])
    fields["children_count"] = fields["children_count"] or 0

    if not fields["full_name"]:
        parts = [fields["first_name"], fields["middle_name"], fields["last_name"]]
        fields["full_name"] = " ".join(p for p in parts if p) or None

    fields["training_status"] = fields["training_status"] or DEFAULT_TRAINING_STATUS
    fields["program_status"] = fields["program_status"] or DEFAULT_PROGRAM_STATUS
    return {key: value for key, value in fields.items() if value is not None}
