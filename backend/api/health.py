from fastapi import APIRouter, Request

from schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    state = request.app.state
    listener = getattr(state, "reservation_listener", None)
    return HealthResponse(
        status="ok",
        settlement_enabled=getattr(state, "settlement_service", None) is not None,
        sms_enabled=getattr(state, "sms_enabled", False),
        realtime_enabled=listener is not None and listener.is_running,
    )
