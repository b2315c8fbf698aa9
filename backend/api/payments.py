import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from constants import ORDER_PLACED_MESSAGE
from errors import RelayError
from schemas import ErrorResponse, SettlementResponse
from services.settlement_service import SettlementService

logger = logging.getLogger("order-relay")

router = APIRouter(prefix="/api", tags=["payments"])


def get_settlement_service(request: Request) -> SettlementService:
    service = getattr(request.app.state, "settlement_service", None)
    if service is None:
        raise RuntimeError("Order settlement is not configured")
    return service


@router.post(
    "/paystack-callback",
    response_model=SettlementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def paystack_callback(
    payload: Dict[str, Any] = Body(...),
    service: SettlementService = Depends(get_settlement_service),
):
    try:
        saved = await service.settle(payload)
    except RelayError as exc:
        logger.info("Settlement ended with %s: %s", exc.outcome, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=exc.public_message).model_dump(),
        )
    return SettlementResponse(message=ORDER_PLACED_MESSAGE, order=saved)
