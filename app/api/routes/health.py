from fastapi import APIRouter, Request

router = APIRouter()

@router.get("")
def health():
    # liveness only, the store may still be loading
    return {"status": "ok"}

@router.get("/ready")
def ready(request: Request):
    service = request.app.state.catalog_service
    service.ensure_ready()
    return service.health_check()
