"""Embed configuration, derived records and API request/response schemas"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, model_validator, validator
import re
import soupsieve


# ==================== Derived records ====================

class DaySchedule(BaseModel):
    """One parsed weekday-hours line"""
    day_of_week: str
    opens: Optional[str] = None
    closes: Optional[str] = None
    is_closed: bool = False

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_open_or_closed(self):
        # Either both times are present, or the day is closed
        has_times = bool(self.opens) and bool(self.closes)
        if self.is_closed:
            if self.opens is not None or self.closes is not None:
                raise ValueError("closed day must not carry opens/closes")
        elif not has_times:
            raise ValueError("open day needs both opens and closes")
        return self


class InstructionKind(str, Enum):
    """What a render instruction writes to its target elements"""
    STYLE = "style"
    TEXT = "text"
    ATTRIBUTE = "attribute"
    INNER_HTML = "inner_html"
    HOURS_ROW = "hours_row"


class HoursRow(BaseModel):
    """A single opening-hours table row"""
    day: str
    time: str
    is_closed: bool = False
    is_last: bool = False
    item_selector: str
    day_selector: str
    time_selector: str


class RenderInstruction(BaseModel):
    """A value to write into the elements matched by `selector`"""
    kind: InstructionKind
    selector: str
    name: Optional[str] = None  # style property or attribute name
    value: str = ""
    row: Optional[HoursRow] = None

    class Config:
        frozen = True


# ==================== Embed configuration ====================

def _validate_selector(v: str) -> str:
    """Reject CSS selectors the document renderer could not run."""
    try:
        soupsieve.compile(v)
    except soupsieve.SelectorSyntaxError as e:
        raise ValueError(f"Invalid CSS selector {v!r}: {e}")
    return v


class SchemaFields(BaseModel):
    """Optional caller-supplied structured-data fields.

    A field is Absent when it is None or an empty string; absent fields never
    appear in the composed record.
    """
    type: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None
    address: Optional[Union[str, Dict[str, Any]]] = None
    telephone: Optional[str] = None
    price_range: Optional[str] = Field(default=None, alias="priceRange")

    class Config:
        populate_by_name = True


class ReviewSelectors(BaseModel):
    """CSS selectors for the review widgets"""
    stars_bar: str = Field(default='[hero-reviews="stars-bar"]', alias="starsBar")
    score: str = '[hero-reviews="score"]'
    text_wrapper: str = Field(default='[hero-reviews="text-wrapper"]', alias="textWrapper")
    # "{index}" is replaced with the 1-based photo slot
    profile_photo: str = Field(default='[hero-reviews="profile-photo-{index}"]', alias="profilePhoto")
    reviews_link: Optional[str] = Field(default=None, alias="reviewsLink")

    class Config:
        populate_by_name = True

    @validator("stars_bar", "score", "text_wrapper")
    def valid_selector(cls, v):
        return _validate_selector(v)

    @validator("profile_photo")
    def valid_photo_selector(cls, v):
        _validate_selector(v.replace("{index}", "1"))
        return v

    def profile_photo_selector(self, index: int) -> str:
        return self.profile_photo.replace("{index}", str(index))


class OpeningHoursSelectors(BaseModel):
    """CSS selectors for the opening-hours table"""
    list_container: str = Field(default='[opening-hours="list"]', alias="list")
    item: str = '[opening-hours="item"]'
    day: str = '[opening-hours="day"]'
    time: str = '[opening-hours="time"]'
    closed_label: Optional[str] = Field(default=None, alias="closedLabel")

    class Config:
        populate_by_name = True

    @validator("list_container", "item", "day", "time")
    def valid_selector(cls, v):
        return _validate_selector(v)


class EmbedOptions(BaseModel):
    """Feature switches and per-feature configuration, defaulted once here"""
    schema_enabled: bool = Field(default=False, alias="schemaEnabled")
    reviews_enabled: bool = Field(default=False, alias="reviewsEnabled")
    opening_hours_enabled: bool = Field(default=False, alias="openingHoursEnabled")
    schema_fields: SchemaFields = Field(default_factory=SchemaFields, alias="schemaFields")
    review_selectors: ReviewSelectors = Field(default_factory=ReviewSelectors, alias="reviewSelectors")
    opening_hours_selectors: OpeningHoursSelectors = Field(
        default_factory=OpeningHoursSelectors, alias="openingHoursSelectors"
    )

    class Config:
        populate_by_name = True

    @validator("schema_fields", "review_selectors", "opening_hours_selectors", pre=True)
    def none_as_default(cls, v):
        # An explicit null means "use the defaults"
        if v is None:
            return {}
        return v


# ==================== API request/response ====================

def _validate_place_id(v: str) -> str:
    """
    Validate place_id format to prevent injection into the endpoint URL.

    Place IDs are alphanumeric with underscore, hyphen and (new API format)
    forward slash.
    """
    if not v or not isinstance(v, str):
        raise ValueError("place_id must be a non-empty string")

    v = v.strip()

    if len(v) < 1 or len(v) > 200:
        raise ValueError(f"Invalid place_id length: {len(v)} chars. Expected 1-200 chars.")

    if not re.match(r'^[a-zA-Z0-9_\-\/]+$', v):
        raise ValueError(
            "place_id contains invalid characters. Only alphanumeric, underscore, hyphen, and forward slash allowed."
        )

    return v


class EmbedRequest(BaseModel):
    """POST /api/embed request"""
    place_id: str = Field(..., description="Google Maps place_id")
    options: EmbedOptions = Field(default_factory=EmbedOptions)
    html: Optional[str] = Field(default=None, description="Page HTML to render into")

    @validator("place_id")
    def validate_place_id(cls, v):
        return _validate_place_id(v)


class SchemaRequest(BaseModel):
    """POST /api/schema request"""
    place_id: str = Field(..., description="Google Maps place_id")
    schema_fields: SchemaFields = Field(default_factory=SchemaFields, alias="fields")

    class Config:
        populate_by_name = True

    @validator("place_id")
    def validate_place_id(cls, v):
        return _validate_place_id(v)


class EmbedResponse(BaseModel):
    """POST /api/embed response"""
    place_id: str
    schema_record: Optional[Dict[str, Any]] = Field(default=None, alias="schema")
    instructions: List[RenderInstruction] = Field(default_factory=list)
    html: Optional[str] = None
    feature_errors: Dict[str, str] = Field(default_factory=dict)

    class Config:
        populate_by_name = True


class ErrorResponse(BaseModel):
    """Error response"""
    error_id: str
    code: str
    message: str
    hint: Optional[str] = None
    retryable: bool = False
    place_id: Optional[str] = None
