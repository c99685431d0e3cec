"""Price estimate endpoint."""

import json
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError

from pawprice.admission.rate_limiter import RateLimitDecision
from pawprice.api.v1.models import PET_SIZES, PET_TYPES, PriceRequest, PriceResponse
from pawprice.core.logging import get_logger
from pawprice.core.metrics import RATE_LIMITED_TOTAL
from pawprice.exceptions import InvalidInputError, RateLimitExceeded
from pawprice.middleware.errors import format_validation_errors
from pawprice.pricing.service import PriceQuery, PricingService

logger = get_logger(__name__)

router = APIRouter(tags=["pricing"])

MIN_LOCATION_LENGTH = 2
MAX_LOCATION_LENGTH = 200
UNKNOWN_CLIENT = "unknown"


def get_pricing_service(request: Request) -> PricingService:
    service: PricingService | None = getattr(
        request.app.state, "pricing_service", None
    )
    if service is None:
        raise RuntimeError("Pricing service is not initialized")
    return service


def client_id(request: Request) -> str:
    """First ``X-Forwarded-For`` hop, else the peer address."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


def enforce_rate_limit(
    request: Request,
    response: Response,
    service: PricingService = Depends(get_pricing_service),
) -> RateLimitDecision | None:
    """Count the request against its client's window.

    The decision is kept on ``request.state`` so error responses carry the
    same headers.

    Raises:
        RateLimitExceeded: If the client is over its limit
    """
    identity = client_id(request)
    decision = service.rate_limiter.check(identity)
    if decision is None:
        return None

    request.state.rate_limit = decision
    response.headers.update(decision.headers())
    if not decision.allowed:
        RATE_LIMITED_TOTAL.inc()
        logger.warning(
            "rate_limit_exceeded", client=identity, retry_after=decision.retry_after
        )
        raise RateLimitExceeded(decision)
    return decision


def _trimmed(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _normalized(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


def normalize_request(body: PriceRequest) -> dict[str, Any]:
    """Combine address, zip and location into one location string."""
    address = _trimmed(body.address)
    zip_code = _trimmed(body.zip)
    location = address or body.location or ""
    if zip_code:
        location = f"{location} {zip_code}".strip()
    return {
        "location": location or body.location,
        "size": _normalized(body.size),
        "type": _normalized(body.type),
    }


def validate_price_input(payload: dict[str, Any]) -> list[str]:
    """Client-facing messages for every invalid field, in field order."""
    errors = []
    location = payload.get("location")
    if not isinstance(location, str) or len(location.strip()) < MIN_LOCATION_LENGTH:
        errors.append("location is required")
    elif len(location) > MAX_LOCATION_LENGTH:
        errors.append("location is too long")
    if payload.get("size") not in PET_SIZES:
        errors.append(f"size must be one of: {', '.join(PET_SIZES)}")
    if payload.get("type") not in PET_TYPES:
        errors.append(f"type must be one of: {', '.join(PET_TYPES)}")
    return errors


async def read_price_request(request: Request) -> PriceRequest:
    """Parse the JSON body once the request has been admitted.

    Raises:
        InvalidInputError: If the body is not a JSON object
    """
    raw = await request.body()
    try:
        data = json.loads(raw) if raw.strip() else {}
    except ValueError as e:
        raise InvalidInputError([f"body: Malformed JSON ({e})"]) from e
    try:
        return PriceRequest.model_validate(data)
    except ValidationError as e:
        raise InvalidInputError(format_validation_errors(e.errors())) from e


@router.post(
    "/price",
    response_model=PriceResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": PriceRequest.model_json_schema()}
            },
        }
    },
    responses={
        400: {"description": "Invalid input"},
        429: {"description": "Rate limit exceeded"},
        500: {"description": "Pricing service error"},
    },
)
async def estimate_price(
    request: Request,
    _: RateLimitDecision | None = Depends(enforce_rate_limit),
    service: PricingService = Depends(get_pricing_service),
) -> PriceResponse:
    """
    Estimate grooming cost for a pet near a location.

    Returns the estimate together with the nearby groomers it is based on.
    """
    payload = normalize_request(await read_price_request(request))
    errors = validate_price_input(payload)
    if errors:
        raise InvalidInputError(errors)

    query = PriceQuery(
        location=payload["location"], size=payload["size"], pet_type=payload["type"]
    )
    logger.info("price_requested", size=query.size, pet_type=query.pet_type)
    quote = await service.quote(query)

    return PriceResponse.model_validate(
        {
            "input": {
                "location": query.location,
                "size": query.size,
                "type": query.pet_type,
                "groomersCount": len(quote.groomers),
                "radiusMilesUsed": quote.radius_miles_used,
            },
            "price": quote.price,
            "groomers": quote.groomers,
        }
    )
