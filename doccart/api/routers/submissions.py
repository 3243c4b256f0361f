# doccart/api/routers/submissions.py
from fastapi import APIRouter, Depends, HTTPException

from doccart.api.deps import get_recorder
from doccart.domain.errors import ERROR_SUBMISSION_NOT_FOUND
from doccart.domain.schemas import SubmissionOut
from doccart.services.submission_service import SubmissionRecorder

router = APIRouter(prefix="/submissions", tags=["submissions"])


@router.get("/{submission_id}", response_model=SubmissionOut)
def get_submission(
    submission_id: int,
    recorder: SubmissionRecorder = Depends(get_recorder),
):
    """
    Pobiera zapisane zgłoszenie (snapshot koszyka).
    """
    submission = recorder.get_submission(submission_id)
    if not submission:
        raise HTTPException(status_code=404, detail=ERROR_SUBMISSION_NOT_FOUND)
    return submission
