from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

Phone = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=32)]


class CamelModel(BaseModel):
    """Serialises with camelCase keys and accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Request Schemas
class RegisterRequest(CamelModel):
    fio: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    phone: Phone
    password: Annotated[str, StringConstraints(min_length=1)]

class LoginRequest(CamelModel):
    phone: Phone
    password: str

class SettingsUpdateRequest(CamelModel):
    fio: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    phone: Phone

class TopUpRequest(CamelModel):
    phone: Phone
    amount: float = Field(gt=0)

class ServiceToggleRequest(CamelModel):
    phone: Phone
    service_name: str
    activate: bool

class TariffChangeRequest(CamelModel):
    phone: Phone
    tariff_id: str


# Response Schemas
class TariffInfo(CamelModel):
    id: str
    name: str
    price: float

class Tariff(TariffInfo):
    description: str
    features: List[str]

class UserProfile(CamelModel):
    fio: str
    phone: str
    role: Optional[str] = None
    balance: float
    credit_limit: float
    status: str
    tariff: TariffInfo

class AuthResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    redirect: str
    user: UserProfile

class UserDataResponse(UserProfile):
    current_tariff_id: Optional[str] = None

class MessageResponse(CamelModel):
    success: bool = True
    message: str

class SettingsUpdateResponse(MessageResponse):
    user: UserProfile

class TopUpResponse(MessageResponse):
    new_balance: float

class TariffChangeResponse(MessageResponse):
    new_tariff: str

class CreditInfoResponse(CamelModel):
    current_balance: float
    credit_limit: float
    available_credit: float
    is_in_debt: bool
    tariff: TariffInfo

class UsageMeter(CamelModel):
    used: float
    total: float

class UsageResponse(CamelModel):
    internet: UsageMeter
    calls: UsageMeter
    sms: UsageMeter
    tariff: TariffInfo

class CallRecord(CamelModel):
    date: str
    number: str
    duration: str
    cost: str

class PaymentRecord(CamelModel):
    date: str
    amount: str
    method: str
    status: str

class ServiceItem(CamelModel):
    name: str
    description: str
    active: bool
    price: str

class Notification(CamelModel):
    id: int
    type: str
    title: str
    message: str
    date: str
    read: bool

class ClientSummary(CamelModel):
    fio: str
    phone: str
    balance: float
    status: Optional[str] = None
    tariff: Optional[str] = None
    created_at: Optional[datetime] = None
    tariff_info: TariffInfo
