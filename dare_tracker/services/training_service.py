from typing import Dict, Any, List

from dare_tracker.database import models
from dare_tracker.database.choices import TRAINING_STATUSES
from dare_tracker.repositories.interfaces import (
    ITrainingProgramRepository, IYouthTrainingRepository, IYouthProfileRepository
)
from dare_tracker.services.exceptions import (
    TrainingProgramNotFoundError, TrainingRecordNotFoundError, YouthProfileNotFoundError
)
from dare_tracker.utils.model_utils import apply_fields, coerce_value, model_to_dict
from dare_tracker.utils.validation import validate_choices

TRAINING_CHOICE_FIELDS = {"status": TRAINING_STATUSES}


class TrainingService:
    """훈련 프로그램과 청년의 훈련 등록 기록을 관리합니다."""

    def __init__(self, program_repo: ITrainingProgramRepository, training_repo: IYouthTrainingRepository,
                 profile_repo: IYouthProfileRepository):
        self.program_repo = program_repo
        self.training_repo = training_repo
        self.profile_repo = profile_repo

    def _get_program_model(self, program_id: int) -> models.TrainingProgram:
        program = self.program_repo.find_by_id(program_id)
        if not program:
            raise TrainingProgramNotFoundError(f"Training program with id '{program_id}' not found.")
        return program

    def _get_training_model(self, training_id: int) -> models.YouthTraining:
        record = self.training_repo.find_by_id(training_id)
        if not record:
            raise TrainingRecordNotFoundError(f"Training record with id '{training_id}' not found.")
        return record

    def _require_youth(self, youth_id: int):
        profile = self.profile_repo.find_by_id(youth_id)
        if not profile or profile.is_deleted:
            raise YouthProfileNotFoundError(f"Youth profile with id '{youth_id}' not found.")

    # --- 훈련 프로그램 ---

    def create_program(self, **data) -> Dict[str, Any]:
        """
        훈련 프로그램을 생성합니다.

        Raises:
            ValueError: 이름이 없을 때.
        """
        if not data.get("name"):
            raise ValueError("Training program name is required.")
        program = apply_fields(models.TrainingProgram(), data)
        return model_to_dict(self.program_repo.create(program))

    def list_programs(self) -> List[Dict[str, Any]]:
        return [model_to_dict(p) for p in self.program_repo.list_all()]

    def get_program(self, program_id: int) -> Dict[str, Any]:
        program = self._get_program_model(program_id)
        result = model_to_dict(program)
        result["enrolled_count"] = len(program.trainings)
        return result

    def update_program(self, program_id: int, **changes) -> Dict[str, Any]:
        program = self._get_program_model(program_id)
        if "name" in changes and not changes["name"]:
            raise ValueError("Training program name cannot be empty.")
        apply_fields(program, changes)
        return model_to_dict(self.program_repo.update(program))

    def delete_program(self, program_id: int) -> bool:
        """훈련 프로그램과 그 프로그램의 모든 등록 기록을 삭제합니다."""
        program = self._get_program_model(program_id)
        self.program_repo.delete(program)
        return True

    # --- 청년 훈련 기록 ---

    def enroll_youth(self, youth_id: int, program_id: int, **data) -> Dict[str, Any]:
        """
        청년을 훈련 프로그램에 등록합니다.

        Raises:
            YouthProfileNotFoundError: 청년 프로필이 없을 때.
            TrainingProgramNotFoundError: 프로그램이 없을 때.
            ValueError: 이미 등록되어 있거나 상태 값이 올바르지 않을 때.
        """
        self._require_youth(youth_id)
        self._get_program_model(program_id)
        if self.training_repo.find_by_youth_and_program(youth_id, program_id):
            raise ValueError(f"Youth '{youth_id}' is already enrolled in program '{program_id}'.")

        data = validate_choices(data, TRAINING_CHOICE_FIELDS)
        data.pop("youth_id", None)
        record = apply_fields(models.YouthTraining(youth_id=youth_id, program_id=program_id), data)
        if not record.status:
            record.status = "In Progress"
        return model_to_dict(self.training_repo.create(record))

    def list_youth_training(self, youth_id: int) -> List[Dict[str, Any]]:
        """청년의 훈련 기록을 프로그램 이름과 함께 조회합니다."""
        self._require_youth(youth_id)
        records = []
        for record in self.training_repo.list_by_youth(youth_id):
            item = model_to_dict(record)
            item["program_name"] = record.program.name if record.program else None
            records.append(item)
        return records

    def update_training(self, training_id: int, **changes) -> Dict[str, Any]:
        """
        훈련 기록을 수정합니다. 상태가 'Completed'가 아니면 수료증 수령 여부를 설정할 수 없습니다.

        Raises:
            TrainingRecordNotFoundError: 훈련 기록이 없을 때.
        """
        record = self._get_training_model(training_id)
        changes = validate_choices(changes, TRAINING_CHOICE_FIELDS)
        status = changes.get("status", record.status)
        certified = record.certification_received
        if "certification_received" in changes:
            certified = coerce_value(models.YouthTraining.__table__.c.certification_received,
                                     changes["certification_received"])
        if certified and status != "Completed":
            raise ValueError("certification_received requires status 'Completed'.")

        apply_fields(record, changes, allowed=(
            "start_date", "completion_date", "status", "certification_received", "notes"
        ))
        return model_to_dict(self.training_repo.update(record))

    def delete_training(self, training_id: int) -> bool:
        record = self._get_training_model(training_id)
        self.training_repo.delete(record)
        return True
