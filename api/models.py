"""
API Request and Response Models.

Pydantic models for decoding sale webhook bodies and serializing responses.
Field names on the wire follow the point-of-sale trigger (`time`,
`paymentType`; the alias is the only accepted name); missing or null fields
decode to empty strings.
"""

from typing import Optional

from pydantic import BaseModel, Field

from domain.sale import JewelrySale, ToySale


# ============================================================================
# Sale Request Models
# ============================================================================

class ToySaleRequest(BaseModel):
    """Webhook body for a 3D toy sale."""
    time: Optional[str] = Field(default=None, description="Sale time; server UTC time when omitted")
    item: Optional[str] = Field(default=None, description="Figurine name (required)")
    material: Optional[str] = Field(default=None, description="Print material")
    price: Optional[str] = None
    payment_type: Optional[str] = Field(default=None, alias="paymentType")

    class Config:
        json_schema_extra = {
            "example": {
                "time": "2025-11-18 22:45:48",
                "item": "Марк",
                "material": "Золотой",
                "price": "40",
                "paymentType": "Карта"
            }
        }

    def to_event(self) -> ToySale:
        return ToySale(
            timestamp=self.time or "",
            item=self.item or "",
            material=self.material or "",
            price=self.price or "",
            payment_type=self.payment_type or "",
        )


class JewelrySaleRequest(BaseModel):
    """Webhook body for a jewelry sale."""
    time: Optional[str] = Field(default=None, description="Sale time; server UTC time when omitted")
    item: Optional[str] = Field(default=None, description="Product name (required)")
    price: Optional[str] = None
    payment_type: Optional[str] = Field(default=None, alias="paymentType")

    class Config:
        json_schema_extra = {
            "example": {
                "item": "Серьги",
                "price": "1500",
                "paymentType": "Наличные"
            }
        }

    def to_event(self) -> JewelrySale:
        return JewelrySale(
            timestamp=self.time or "",
            item=self.item or "",
            price=self.price or "",
            payment_type=self.payment_type or "",
        )


# ============================================================================
# Response Models
# ============================================================================

class SaleResponse(BaseModel):
    """Response after both sinks accepted the sale."""
    status: str = "success"
    message: str = "Sale processed successfully"

    class Config:
        json_schema_extra = {
            "example": {
                "status": "success",
                "message": "Sale processed successfully"
            }
        }


class HealthResponse(BaseModel):
    status: str
    version: str
    service: str
