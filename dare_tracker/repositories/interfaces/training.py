from abc import ABC, abstractmethod
from typing import List, Optional
from dare_tracker.database import models

class ITrainingProgramRepository(ABC):
    @abstractmethod
    def create(self, program_model: models.TrainingProgram) -> models.TrainingProgram:
        """훈련 프로그램을 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, program_id: int) -> Optional[models.TrainingProgram]:
        """고유 ID로 훈련 프로그램을 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.TrainingProgram]:
        """모든 훈련 프로그램을 이름순으로 조회합니다."""
        pass

    @abstractmethod
    def update(self, program: models.TrainingProgram) -> models.TrainingProgram:
        """변경된 훈련 프로그램을 저장합니다."""
        pass

    @abstractmethod
    def delete(self, program: models.TrainingProgram) -> bool:
        """훈련 프로그램과 그 등록 기록을 삭제합니다."""
        pass


class IYouthTrainingRepository(ABC):
    @abstractmethod
    def create(self, training_model: models.YouthTraining) -> models.YouthTraining:
        """청년의 훈련 등록 기록을 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, training_id: int) -> Optional[models.YouthTraining]:
        """고유 ID로 훈련 기록을 조회합니다."""
        pass

    @abstractmethod
    def find_by_youth_and_program(self, youth_id: int, program_id: int) -> Optional[models.YouthTraining]:
        """청년과 프로그램 조합으로 훈련 기록을 조회합니다."""
        pass

    @abstractmethod
    def list_by_youth(self, youth_id: int) -> List[models.YouthTraining]:
        """특정 청년의 모든 훈련 기록을 조회합니다."""
        pass

    @abstractmethod
    def update(self, training: models.YouthTraining) -> models.YouthTraining:
        """변경된 훈련 기록을 저장합니다."""
        pass

    @abstractmethod
    def delete(self, training: models.YouthTraining) -> bool:
        """훈련 기록을 삭제합니다."""
        pass
