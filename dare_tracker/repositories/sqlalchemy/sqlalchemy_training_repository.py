from typing import List, Optional
from sqlalchemy.orm import Session
from dare_tracker.database import models
from dare_tracker.repositories.interfaces import ITrainingProgramRepository, IYouthTrainingRepository

class SqlalchemyTrainingProgramRepository(ITrainingProgramRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, program_model: models.TrainingProgram) -> models.TrainingProgram:
        self.db.add(program_model)
        self.db.commit()
        self.db.refresh(program_model)
        return program_model

    def find_by_id(self, program_id: int) -> Optional[models.TrainingProgram]:
        return self.db.query(models.TrainingProgram).filter(models.TrainingProgram.id == program_id).first()

    def list_all(self) -> List[models.TrainingProgram]:
        return self.db.query(models.TrainingProgram).order_by(models.TrainingProgram.name.asc()).all()

    def update(self, program: models.TrainingProgram) -> models.TrainingProgram:
        self.db.commit()
        self.db.refresh(program)
        return program

    def delete(self, program: models.TrainingProgram) -> bool:
        if program:
            self.db.delete(program)
            self.db.commit()
            return True
        return False


class SqlalchemyYouthTrainingRepository(IYouthTrainingRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, training_model: models.YouthTraining) -> models.YouthTraining:
        self.db.add(training_model)
        self.db.commit()
        self.db.refresh(training_model)
        return training_model

    def find_by_id(self, training_id: int) -> Optional[models.YouthTraining]:
        return self.db.query(models.YouthTraining).filter(models.YouthTraining.id == training_id).first()

    def find_by_youth_and_program(self, youth_id: int, program_id: int) -> Optional[models.YouthTraining]:
        return self.db.query(models.YouthTraining).filter(
            models.YouthTraining.youth_id == youth_id,
            models.YouthTraining.program_id == program_id
        ).first()

    def list_by_youth(self, youth_id: int) -> List[models.YouthTraining]:
        return self.db.query(models.YouthTraining).filter(
            models.YouthTraining.youth_id == youth_id
        ).order_by(models.YouthTraining.id.asc()).all()

    def update(self, training: models.YouthTraining) -> models.YouthTraining:
        self.db.commit()
        self.db.refresh(training)
        return training

    def delete(self, training: models.YouthTraining) -> bool:
        if training:
            self.db.delete(training)
            self.db.commit()
            return True
        return False
