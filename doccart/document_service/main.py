# document_service/main.py
from fastapi import FastAPI, HTTPException

from doccart.domain.errors import ERROR_DOCUMENT_NOT_FOUND

app = FastAPI(title="Document Service (dev mock)")


DOCUMENTS = {
    1: {"id": 1, "title": "Annual Report 2025", "allowed_in_cart": True, "has_quantity_limit": False},
    2: {"id": 2, "title": "Planning Guidelines", "allowed_in_cart": True, "has_quantity_limit": True, "maximum_quantity": 3},
    3: {"id": 3, "title": "Internal Memo", "allowed_in_cart": False, "has_quantity_limit": False},
}
PRINT_REQUESTS: dict[int, int] = {}


@app.get("/documents/{document_id}")
def get_document(document_id: int):
    document = DOCUMENTS.get(document_id)
    if not document:
        raise HTTPException(status_code=404, detail=ERROR_DOCUMENT_NOT_FOUND)
    return {**document, "print_request_count": PRINT_REQUESTS.get(document_id, 0)}


@app.post("/documents/{document_id}/print-requests")
def increment_print_request(document_id: int):
    if document_id not in DOCUMENTS:
        raise HTTPException(status_code=404, detail=ERROR_DOCUMENT_NOT_FOUND)
    PRINT_REQUESTS[document_id] = PRINT_REQUESTS.get(document_id, 0) + 1
    return {"id": document_id, "print_request_count": PRINT_REQUESTS[document_id]}
