"""
Domain models - the core of business logic.
These models are transport-agnostic (work with the web app, scripts, tests, etc.)
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Dict
from datetime import date, datetime, timedelta
from enum import Enum

from core.domain.constants import (
    MAX_EVENT_DAYS,
    DEFAULT_REGISTRATION_PRICE,
    MIN_REGISTRATION_PRICE,
    DEFAULT_REGISTRATION_WINDOW_DAYS,
    INDEPENDENT_GROUP_ID,
    DEFAULT_DOCUMENT_TYPE,
    MIN_DOCUMENT_LENGTH,
)


# === ENUMS ===

class AccessCodeStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    USED = "used"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class RegistrationType(str, Enum):
    INDIVIDUAL = "individual"
    GROUP_LEADER = "group_leader"
    GROUP_MEMBER = "group_member"


class SouvenirStatus(str, Enum):
    PENDING = "pending"
    DELIVERED = "delivered"


class Difficulty(str, Enum):
    EASY = "Fácil"
    MODERATE = "Moderada"
    HARD = "Difícil"


class RegistrationStep(str, Enum):
    """Where the registration wizard sends the visitor next"""
    VERIFY = "verify"
    INDIVIDUAL = "individual"
    GROUP_LEADER = "group_leader"
    SUCCESS = "success"


# === ROUTES ===

class DaySpots(BaseModel):
    """Capacity of a route on one event day"""
    day: int = Field(ge=1, le=MAX_EVENT_DAYS)
    spots: int = Field(ge=0)
    enabled: bool = True


class RouteForm(BaseModel):
    """Route data as entered in the admin form"""
    name: str = Field(min_length=3)
    description: str = Field(min_length=10)
    difficulty: Difficulty = Difficulty.EASY
    image_url: str = ""
    available_spots_by_day: List[DaySpots] = Field(max_length=MAX_EVENT_DAYS)
    duration: str = Field(min_length=1)
    distance: str = Field(min_length=1)
    elevation: str = Field(min_length=1)
    meeting_point: str = Field(min_length=1)

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str) -> str:
        v = v.strip()
        if v and not v.startswith(("http://", "https://")):
            raise ValueError("Debe ser una URL válida")
        return v

    @field_validator("available_spots_by_day")
    @classmethod
    def check_enabled_day(cls, v: List[DaySpots]) -> List[DaySpots]:
        if not any(d.enabled for d in v):
            raise ValueError("Debe haber al menos un día habilitado")
        return v

    def to_record(self) -> dict:
        """Data to persist: only enabled days are stored"""
        data = self.model_dump(mode="json")
        data["available_spots_by_day"] = [
            d for d in data["available_spots_by_day"] if d["enabled"]
        ]
        return data


class Route(BaseModel):
    """Full route model"""
    id: str
    name: str
    description: str = ""
    difficulty: Difficulty = Difficulty.EASY
    image_url: str = ""
    duration: str = ""
    distance: str = ""
    elevation: str = ""
    meeting_point: str = ""
    available_spots_by_day: List[DaySpots] = Field(default_factory=list)
    # Places already taken per day, kept by the registration flow
    registered_by_day: Dict[int, int] = Field(default_factory=dict)

    def capacity(self, day: int) -> int:
        for d in self.available_spots_by_day:
            if d.day == day and d.enabled:
                return d.spots
        return 0

    def spots_for_form(self) -> List[DaySpots]:
        """Always exactly MAX_EVENT_DAYS slots, missing days disabled"""
        slots = [DaySpots(day=i, spots=0, enabled=False) for i in range(1, MAX_EVENT_DAYS + 1)]
        for d in self.available_spots_by_day:
            if 1 <= d.day <= MAX_EVENT_DAYS:
                slots[d.day - 1] = DaySpots(day=d.day, spots=d.spots, enabled=d.enabled)
        return slots


class RouteAvailability(BaseModel):
    """Route with remaining places per day (days without places dropped)"""
    id: str
    name: str
    difficulty: Difficulty = Difficulty.EASY
    available_spots_by_day: List[DaySpots] = Field(default_factory=list)

    def spots_on(self, day: int) -> int:
        return next((d.spots for d in self.available_spots_by_day if d.day == day), 0)


# === ACCESS CODES ===

class AccessCodeCreate(BaseModel):
    """Data for issuing an access code"""
    document_id: str = Field(min_length=MIN_DOCUMENT_LENGTH)
    is_group: bool = False
    people_count: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def check_people_count(self):
        if self.is_group and self.people_count < 2:
            raise ValueError("Un grupo debe tener al menos 2 personas")
        if not self.is_group and self.people_count != 1:
            self.people_count = 1
        return self


class AccessCode(BaseModel):
    """Full access code model"""
    id: str
    code: str
    document_id: str
    status: AccessCodeStatus = AccessCodeStatus.PENDING
    is_group: bool = False
    people_count: int = 1
    assigned_to_group: bool = False
    created_at: Optional[datetime] = None

    @property
    def is_verified(self) -> bool:
        return self.status in (AccessCodeStatus.PAID, AccessCodeStatus.USED)


# === REGISTRATIONS ===

class Walker(BaseModel):
    """A person registered under a group by its leader"""
    full_name: str = Field(min_length=3)
    document_id: str = Field(min_length=MIN_DOCUMENT_LENGTH)
    document_type: str = DEFAULT_DOCUMENT_TYPE
    phone: str = Field(min_length=7)
    rh: str = Field(min_length=1)


class InscriptionForm(BaseModel):
    """Fields posted by the registration wizard"""
    document_id: str = ""
    confirmation_code: str = ""
    document_type: str = ""
    full_name: str = ""
    phone: str = ""
    rh: str = ""
    route_id_day1: str = ""
    route_id_day2: str = ""
    group_name: str = ""
    leader_full_name: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def strip_values(cls, v):
        return v.strip() if isinstance(v, str) else ("" if v is None else v)


class Registration(BaseModel):
    """Full registration model"""
    id: Optional[str] = None
    document_id: str
    document_type: str = DEFAULT_DOCUMENT_TYPE
    full_name: str = ""
    phone: str = ""
    rh: str = ""
    route_id_day1: Optional[str] = None
    route_id_day2: Optional[str] = None
    access_code: str = ""
    group_id: str = INDEPENDENT_GROUP_ID
    payment_status: PaymentStatus = PaymentStatus.PAID
    registration_type: RegistrationType = RegistrationType.INDIVIDUAL
    souvenir_status: SouvenirStatus = SouvenirStatus.PENDING
    group_name: Optional[str] = None
    leader_full_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("route_id_day1", "route_id_day2", mode="before")
    @classmethod
    def blank_route_to_none(cls, v):
        return v or None

    @field_validator("souvenir_status", "payment_status", "document_type", "group_id", mode="before")
    @classmethod
    def missing_to_default(cls, v, info):
        if v:
            return v
        return cls.model_fields[info.field_name].default

    def route_for_day(self, day: int) -> Optional[str]:
        return {1: self.route_id_day1, 2: self.route_id_day2}.get(day)


class RegistrationUpdate(BaseModel):
    """Personal data an admin may edit"""
    full_name: Optional[str] = Field(default=None, min_length=3)
    phone: Optional[str] = Field(default=None, min_length=7)
    rh: Optional[str] = Field(default=None, min_length=1)
    document_type: Optional[str] = None


# === GROUPS ===

class Group(BaseModel):
    id: str
    group_name: str
    leader_document_id: str
    member_count: int = 1
    created_at: Optional[datetime] = None


# === EVENT SETTINGS ===

def _today() -> date:
    return date.today()


def _default_end() -> date:
    return date.today() + timedelta(days=DEFAULT_REGISTRATION_WINDOW_DAYS)


def _parse_date(v):
    # Stored values may be full ISO timestamps
    if isinstance(v, str):
        v = v.strip()
        return v[:10] if v else None
    if isinstance(v, datetime):
        return v.date()
    return v


class EventSettings(BaseModel):
    """Event-wide price, bank data and registration period (as stored)"""
    registration_price: int = DEFAULT_REGISTRATION_PRICE
    bank_name: str = ""
    account_type: str = ""
    account_number: str = ""
    account_holder: str = ""
    nit: str = ""
    whatsapp_number: str = ""
    payment_instructions: str = ""
    registration_start_date: Optional[date] = None
    registration_end_date: Optional[date] = None
    updated_at: Optional[datetime] = None

    @field_validator("registration_start_date", "registration_end_date", mode="before")
    @classmethod
    def parse_dates(cls, v):
        return _parse_date(v)

    @field_validator(
        "bank_name", "account_type", "account_number", "account_holder",
        "nit", "whatsapp_number", "payment_instructions", mode="before",
    )
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v


class EventSettingsForm(BaseModel):
    """Settings as submitted from the admin panel"""
    registration_price: int = Field(default=DEFAULT_REGISTRATION_PRICE, ge=MIN_REGISTRATION_PRICE)
    bank_name: str = Field(min_length=3)
    account_type: str = Field(min_length=3)
    account_number: str = Field(min_length=5)
    account_holder: str = Field(min_length=5)
    nit: str = Field(min_length=5)
    whatsapp_number: str = Field(min_length=10)
    payment_instructions: str = Field(min_length=10)
    registration_start_date: date = Field(default_factory=_today)
    registration_end_date: date = Field(default_factory=_default_end)

    @field_validator("registration_start_date", "registration_end_date", mode="before")
    @classmethod
    def parse_dates(cls, v):
        return _parse_date(v)

    @model_validator(mode="after")
    def check_period(self):
        if self.registration_end_date <= self.registration_start_date:
            raise ValueError("La fecha de cierre debe ser posterior a la fecha de inicio")
        return self

    def to_settings(self) -> EventSettings:
        return EventSettings(**self.model_dump(), updated_at=datetime.now())


# === PRE-REGISTRATION ===

class Preregistration(BaseModel):
    """Lead captured on the home page before payment"""
    id: Optional[str] = None
    name: str
    whatsapp: str
    event_name: str
    kind: str = "preinscripcion"
    status: str = "pendiente"
    notified: bool = False
    created_at: Optional[datetime] = None


# === RESULTS ===

class VerificationResult(BaseModel):
    """Outcome of checking a document + access code pair"""
    success: bool
    message_key: str
    step: RegistrationStep = RegistrationStep.VERIFY
    access_code: Optional[AccessCode] = None
    existing_registration: Optional[Registration] = None
    redirect_group_id: Optional[str] = None

    @property
    def is_update(self) -> bool:
        return self.existing_registration is not None


class RouteOccupancy(BaseModel):
    id: str
    name: str
    day1_used: int = 0
    day1_total: int = 0
    day2_used: int = 0
    day2_total: int = 0

    @staticmethod
    def _pct(used: int, total: int) -> float:
        return round(used / total * 100, 1) if total > 0 else 0.0

    @property
    def day1_pct(self) -> float:
        return self._pct(self.day1_used, self.day1_total)

    @property
    def day2_pct(self) -> float:
        return self._pct(self.day2_used, self.day2_total)

    @property
    def bar_pct(self) -> float:
        total = self.day1_total + self.day2_total
        return min(self._pct(self.day1_used + self.day2_used, total), 100.0)


class DashboardStats(BaseModel):
    total_spots: int = 0
    total_registered: int = 0
    souvenirs_delivered: int = 0
    routes: List[RouteOccupancy] = Field(default_factory=list)

    @property
    def available(self) -> int:
        return self.total_spots - self.total_registered

    @property
    def occupancy_pct(self) -> float:
        if self.total_spots <= 0:
            return 0.0
        return round(self.total_registered / self.total_spots * 100, 1)

    @property
    def delivered_pct(self) -> float:
        if self.total_registered <= 0:
            return 0.0
        return round(self.souvenirs_delivered / self.total_registered * 100, 1)

    @property
    def pending_pct(self) -> float:
        if self.total_registered <= 0:
            return 0.0
        return round(100 - self.delivered_pct, 1)


class SouvenirStats(BaseModel):
    total: int = 0
    delivered: int = 0
    pending: int = 0


class SouvenirLookup(BaseModel):
    """Result of looking a person up at the souvenir desk"""
    status: str  # not_found / already_delivered / payment_pending / ready / delivered
    registration: Optional[Registration] = None
