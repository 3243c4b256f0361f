from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request):
    return {"status": "healthy", "service": "doccart", "cart_backend": request.app.state.cart_backend}
