"""Place details payload models"""

import math
from typing import List, Optional, Union
from pydantic import BaseModel, Field, validator


class Review(BaseModel):
    """Place review as served by the place details endpoint"""
    author_name: str = ""
    profile_photo_url: Optional[str] = None

    class Config:
        frozen = True


class OpeningHours(BaseModel):
    """Business operating hours"""
    weekday_text: List[str] = Field(default_factory=list)

    @validator("weekday_text", pre=True)
    def none_as_empty(cls, v):
        return [] if v is None else v


class PlacePayload(BaseModel):
    """Place details payload (read-only; unknown keys are ignored)"""
    rating: Optional[Union[int, float]] = None
    user_ratings_total: Optional[int] = None
    reviews: List[Review] = Field(default_factory=list)
    opening_hours: Optional[OpeningHours] = None

    class Config:
        frozen = True

    @validator("reviews", pre=True)
    def none_as_empty(cls, v):
        return [] if v is None else v

    @validator("rating")
    def finite_rating(cls, v):
        # NaN and Infinity are accepted by the JSON decoder; treat them as absent
        if v is not None and not math.isfinite(v):
            return None
        return v

    @property
    def weekday_text(self) -> Optional[List[str]]:
        """Weekday hour lines, or None when the place has no opening hours"""
        if self.opening_hours is None:
            return None
        return self.opening_hours.weekday_text
