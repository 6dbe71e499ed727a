from fastapi import APIRouter

router = APIRouter(prefix="/api/health", tags=["Health"])

@router.get("")
def health_root():
    return {"status": "OK", "message": "Server is running"}
