"""
Sales API Endpoints.

Webhook endpoints for recording point-of-sale events. Each accepted sale is
written to the product line's ledger sheet and announced in the notification
chat; both happen concurrently.
"""

from typing import Type, TypeVar

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from pydantic import ValidationError as BodyValidationError

from api.models import JewelrySaleRequest, SaleResponse, ToySaleRequest
from domain.sale import SaleEvent, ValidationError
from services.sale_service import SaleProcessor

PARTIAL_FAILURE_MESSAGE: str = "Partial failure: some operations failed"

router = APIRouter()

BodyModel = TypeVar("BodyModel", bound=BaseModel)


def get_toy_processor(request: Request) -> SaleProcessor:
    return request.app.state.toy_processor


def get_jewelry_processor(request: Request) -> SaleProcessor:
    return request.app.state.jewelry_processor


async def _decode_body(request: Request, model: Type[BodyModel]) -> BodyModel:
    # Parsed as JSON whatever the content type.
    try:
        return model.model_validate_json(await request.body())
    except BodyValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e


async def toy_sale_body(request: Request) -> ToySaleRequest:
    return await _decode_body(request, ToySaleRequest)


async def jewelry_sale_body(request: Request) -> JewelrySaleRequest:
    return await _decode_body(request, JewelrySaleRequest)


def _process(event: SaleEvent, processor: SaleProcessor):
    try:
        outcome = processor.process(event)
    except ValidationError as e:
        return PlainTextResponse(str(e), status_code=400)

    if not outcome.succeeded:
        return PlainTextResponse(PARTIAL_FAILURE_MESSAGE, status_code=500)

    return SaleResponse()


@router.post(
    "/3d-toy-sale/",
    response_model=SaleResponse,
    summary="Record 3D Toy Sale",
    description="Append a figurine sale to the toy ledger and send a notification."
)
def record_toy_sale(
    request: ToySaleRequest = Depends(toy_sale_body),
    processor: SaleProcessor = Depends(get_toy_processor),
):
    """
    Record a sale of a 3D-printed figurine.

    **Ledger row:** time | item | material | price | paymentType

    **Example request:**
    ```json
    {
      "item": "Марк",
      "material": "Золотой",
      "price": "40",
      "paymentType": "Карта"
    }
    ```

    `time` defaults to the current UTC time (`YYYY-MM-DD HH:MM:SS`).
    Responds `400` when `item` is missing and `500` when the ledger or the
    notification failed.
    """
    return _process(request.to_event(), processor)


@router.post(
    "/jewelry-sale/",
    response_model=SaleResponse,
    summary="Record Jewelry Sale",
    description="Append a jewelry sale to the jewelry ledger and send a notification."
)
def record_jewelry_sale(
    request: JewelrySaleRequest = Depends(jewelry_sale_body),
    processor: SaleProcessor = Depends(get_jewelry_processor),
):
    """
    Record a sale of a jewelry product.

    **Ledger row:** time | item | price | paymentType
    """
    return _process(request.to_event(), processor)
