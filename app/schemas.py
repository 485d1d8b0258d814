import math
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field, ValidationInfo, constr, field_serializer, field_validator
from pydantic.config import ConfigDict

from app.utils.dates import normalize_date

UsernameStr = constr(
    strip_whitespace=True,
    min_length=3,
    max_length=50,
    pattern=r"^[A-Za-z0-9_-]+$",
)


# --- Categories ---
class Category(str, Enum):
    MEAT = "בשר"
    DOUGH = "בצק"
    TIVALL = "טבעול"
    READY_MEAL = "אוכל מוכן"
    FISH = "דגים"
    CAKES = "עוגות"
    OTHER = "אחר"


CATEGORIES: List[Category] = list(Category)
FALLBACK_CATEGORY = Category.OTHER

# Контекст валидации для строк, прочитанных из таблицы: дату не переставляем
VERBATIM_DATES = {"verbatim_dates": True}


# --- Entries ---
class EntryDraft(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    product: str = ""
    category: Category = FALLBACK_CATEGORY
    date: str = ""
    amount: float = math.nan
    units: str = ""
    clean_state: Optional[bool] = Field(default=None, alias="cleanState")
    skin_state: Optional[bool] = Field(default=None, alias="skinState")
    comments: str = ""

    @field_validator("units", "comments", "product", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("date", mode="before")
    @classmethod
    def _canonical_date(cls, value, info: ValidationInfo):
        if value is None:
            return ""
        if info.context and info.context.get("verbatim_dates"):
            return str(value).strip()
        return normalize_date(str(value))

    @field_validator("amount", mode="before")
    @classmethod
    def _blank_amount_is_nan(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return math.nan
        return value

    @field_serializer("amount")
    def _serialize_amount(self, value: float):
        # NaN нельзя отдать в JSON, клиент получает null
        return None if math.isnan(value) else value


class Entry(EntryDraft):
    id: str = ""


class GroupedEntry(Entry):
    display_date: str = Field(default="", alias="displayDate")


class EntryCreated(BaseModel):
    id: str


class OperationResult(BaseModel):
    success: bool = True


class AmountAdjust(BaseModel):
    delta: float


class BulkDeletePayload(BaseModel):
    ids: List[str] = Field(default_factory=list)


class BulkDeleteResult(BaseModel):
    deleted: int


class EntryGroup(BaseModel):
    category: Category
    columns: List[str]
    entries: List[GroupedEntry]


# --- Sheet ---
class SheetIdRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sheet_id: int = Field(alias="sheetId")


class HeaderResult(BaseModel):
    created: bool


# --- Auth ---
class LoginRequest(BaseModel):
    user_name: UsernameStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AuthStatus(BaseModel):
    authenticated: bool
    user_name: Optional[str] = None


class HealthStatus(BaseModel):
    status: str = "ok"
