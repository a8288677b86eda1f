"""Order domain schemas - Pydantic models for the order aggregate.

Field names follow the stored JSON documents (camelCase) so an order can be
round-tripped to the frontend and the database without remapping.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.validators import validate_email, validate_us_phone

OrderStatus = Literal["pending", "in-progress", "completed", "archived"]
FittingType = Literal["Initial", "Muslin", "Construction", "Final", "Bustle", "Custom"]
Carrier = Literal["att", "tmobile", "verizon", "sprint", "other"]

ARCHIVED = "archived"
WEDDING_DRESS = "Wedding Dress"


class ClientInfo(BaseModel):
    name: str
    phone: str = ""
    email: str = ""
    carrier: str = "other"

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return validate_us_phone(v)
        return v

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v):
        if v:
            return validate_email(v)
        return v


class PaymentInfo(BaseModel):
    totalAmount: float = 0
    depositAmount: float = 0
    paymentMethod: str = ""


class FittingSession(BaseModel):
    """A bridal fitting appointment; `date` stays blank until scheduled"""

    id: str
    date: str = ""
    type: FittingType = "Initial"
    customType: Optional[str] = None
    notes: str = ""
    completed: bool = False


class FittingSessionUpdate(BaseModel):
    """Partial update for a fitting session"""

    date: Optional[str] = None
    type: Optional[FittingType] = None
    customType: Optional[str] = None
    notes: Optional[str] = None
    completed: Optional[bool] = None


class BridalInfo(BaseModel):
    # bustle, party, preservation and veil sub-records pass through untouched
    model_config = ConfigDict(extra="allow")

    weddingDate: str = ""
    fittingSessions: list[FittingSession] = Field(default_factory=list)
    bustleInfo: Optional[dict[str, Any]] = None
    notes: str = ""


class GarmentInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    brand: str = ""
    color: str = ""
    quantity: int = 1
    photos: list[Any] = Field(default_factory=list)
    notes: str = ""
    bridalInfo: Optional[BridalInfo] = None
    designInfo: Optional[dict[str, Any]] = None


class Garment(BaseModel):
    garmentInfo: GarmentInfo
    accessories: list[Any] = Field(default_factory=list)
    measurements: list[Any] = Field(default_factory=list)


class TimelineEntry(BaseModel):
    id: str
    type: str
    timestamp: str
    description: str


class Order(BaseModel):
    """Order aggregate root"""

    id: str
    clientInfo: ClientInfo
    garments: list[Garment] = Field(..., min_length=1)
    paymentInfo: PaymentInfo = Field(default_factory=PaymentInfo)
    description: str = ""
    status: OrderStatus = "pending"
    dueDate: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    timeline: list[TimelineEntry] = Field(default_factory=list)
    eventInfo: Optional[dict[str, Any]] = None

    @property
    def is_archived(self) -> bool:
        return self.status == ARCHIVED

    def bridal_garments(self) -> list[Garment]:
        return [g for g in self.garments if g.garmentInfo.bridalInfo is not None]


class OrderListResponse(BaseModel):
    orders: list[Order]
    total: int
    archivedCount: int
