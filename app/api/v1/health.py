from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check(request: Request):
    ready = getattr(request.app.state, "orchestrator", None) is not None
    return {"status": "healthy", "tailoring_ready": ready}
