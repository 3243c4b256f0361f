# doccart/repos/submission_repo.py
from sqlalchemy.orm import Session

from doccart.data.models.submission import SubmissionModel


class SubmissionRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_submission(self, submission: SubmissionModel) -> SubmissionModel:
        self.db.add(submission)
        self.db.commit()
        self.db.refresh(submission)
        return submission

    def get_submission(self, submission_id: int) -> SubmissionModel | None:
        return self.db.get(SubmissionModel, submission_id)
