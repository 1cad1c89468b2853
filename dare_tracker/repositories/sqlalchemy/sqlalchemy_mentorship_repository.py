from typing import List, Optional
from sqlalchemy.orm import Session
from dare_tracker.database import models
from dare_tracker.repositories.interfaces import IMentorshipMessageRepository, IBusinessAdviceRepository

class SqlalchemyMentorshipMessageRepository(IMentorshipMessageRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, message_model: models.MentorshipMessage) -> models.MentorshipMessage:
        self.db.add(message_model)
        self.db.commit()
        self.db.refresh(message_model)
        return message_model

    def find_by_id(self, message_id: int) -> Optional[models.MentorshipMessage]:
        return self.db.query(models.MentorshipMessage).filter(models.MentorshipMessage.id == message_id).first()

    def list_messages(self, mentor_id: Optional[int] = None,
                      business_id: Optional[int] = None) -> List[models.MentorshipMessage]:
        query = self.db.query(models.MentorshipMessage)
        if mentor_id is not None:
            query = query.filter(models.MentorshipMessage.mentor_id == mentor_id)
        if business_id is not None:
            query = query.filter(models.MentorshipMessage.business_id == business_id)
        return query.order_by(models.MentorshipMessage.created_at.asc(), models.MentorshipMessage.id.asc()).all()

    def update(self, message: models.MentorshipMessage) -> models.MentorshipMessage:
        self.db.commit()
        self.db.refresh(message)
        return message


class SqlalchemyBusinessAdviceRepository(IBusinessAdviceRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, advice_model: models.BusinessAdvice) -> models.BusinessAdvice:
        self.db.add(advice_model)
        self.db.commit()
        self.db.refresh(advice_model)
        return advice_model

    def find_by_id(self, advice_id: int) -> Optional[models.BusinessAdvice]:
        return self.db.query(models.BusinessAdvice).filter(models.BusinessAdvice.id == advice_id).first()

    def list_advice(self, mentor_id: Optional[int] = None,
                    business_id: Optional[int] = None) -> List[models.BusinessAdvice]:
        query = self.db.query(models.BusinessAdvice)
        if mentor_id is not None:
            query = query.filter(models.BusinessAdvice.mentor_id == mentor_id)
        if business_id is not None:
            query = query.filter(models.BusinessAdvice.business_id == business_id)
        return query.order_by(models.BusinessAdvice.created_at.desc(), models.BusinessAdvice.id.desc()).all()

    def update(self, advice: models.BusinessAdvice) -> models.BusinessAdvice:
        self.db.commit()
        self.db.refresh(advice)
        return advice

    def delete(self, advice: models.BusinessAdvice) -> bool:
        if advice:
            self.db.delete(advice)
            self.db.commit()
            return True
        return False
