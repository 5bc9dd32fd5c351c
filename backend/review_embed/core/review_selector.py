"""Review selection and score display helpers"""

from decimal import Decimal, ROUND_HALF_UP
import math
from typing import List, Optional, Sequence, Union
from urllib.parse import urlencode

from bs4 import BeautifulSoup

from review_embed.models.place import Review
from review_embed.utils.sanitization import sanitize_photo_markup

MAX_STARS = 5
DEFAULT_PHOTO_LIMIT = 3
REVIEWS_SEARCH_URL = "https://www.google.com/maps/search/"

Number = Union[int, float]


def select_reviews(reviews: Optional[Sequence[Review]], limit: int = DEFAULT_PHOTO_LIMIT) -> List[Review]:
    """
    Pick the first `limit` reviews that carry a profile photo.

    Payload order is kept; nothing is re-sorted.
    """
    if not reviews:
        return []
    with_photos = [review for review in reviews if review.profile_photo_url]
    return with_photos[:max(limit, 0)]


def is_rating(rating: Optional[Number]) -> bool:
    """A usable rating: present and finite."""
    if rating is None:
        return False
    return not isinstance(rating, float) or math.isfinite(rating)


def format_score(rating: Optional[Number]) -> str:
    """Format a rating for display: "4", "4.3", or "0" when absent."""
    if not is_rating(rating):
        return "0"
    value = Decimal(str(rating))
    if value == value.to_integral_value():
        return str(int(value))
    # Half away from zero on the tenths place (4.25 -> 4.3)
    return str(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def star_fill_percentage(rating: Optional[Number]) -> float:
    """Width of the star bar in percent, clamped to [0, 100]."""
    if not is_rating(rating):
        return 0.0
    percentage = rating / MAX_STARS * 100
    return min(max(percentage, 0.0), 100.0)


def format_percentage(percentage: float) -> str:
    return f"{percentage:g}%"


def reviews_link(place_id: Optional[str], override: Optional[str] = None) -> str:
    """Link-out to the place's reviews; a caller-supplied link wins."""
    if override:
        return override
    query = urlencode({"api": "1", "query": "Google", "query_place_id": place_id or ""})
    return f"{REVIEWS_SEARCH_URL}?{query}"


def photo_markup(review: Review) -> str:
    """<img> markup for a reviewer's profile photo."""
    soup = BeautifulSoup("", "html.parser")
    img = soup.new_tag("img", attrs={
        "src": review.profile_photo_url or "",
        "alt": f"Profile photo of {review.author_name}",
    })
    return sanitize_photo_markup(str(img))
