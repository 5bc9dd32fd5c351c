"""Place details client - HTTP-based implementation"""

from typing import Optional
import httpx
import logging
from review_embed.core.config import settings
from review_embed.models.errors import ApplicationError, ErrorCode
from review_embed.models.place import PlacePayload

logger = logging.getLogger(__name__)


class PlaceFetcher:
    """
    Fetches place details (rating, reviews, opening hours) for a place id.

    Issues a single GET <endpoint>?placeId=<id> per call and validates the
    JSON body into a PlacePayload. Failures surface as ApplicationError;
    there is no retry here, callers wanting one wrap fetch_place.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint if endpoint is not None else settings.place_details_endpoint
        self.timeout = timeout if timeout is not None else settings.fetch_timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def close(self):
        """Close HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_place(self, place_id: str) -> PlacePayload:
        """Fetch and validate the place details payload."""
        if not self.endpoint:
            raise ApplicationError(
                code=ErrorCode.CONFIGURATION_ERROR,
                message="Place details endpoint not configured. Please set PLACE_DETAILS_ENDPOINT in .env file.",
                place_id=place_id
            )
        try:
            logger.info(f"[PLACE FETCH] Fetching place details for place_id: {place_id}")
            client = await self._get_client()
            response = await client.get(self.endpoint, params={"placeId": place_id})
            response.raise_for_status()

            payload = PlacePayload.model_validate(response.json())
            logger.info(
                f"[PLACE FETCH] Received rating={payload.rating!r}, "
                f"reviews={len(payload.reviews)}, has_hours={payload.opening_hours is not None}"
            )
            return payload

        except httpx.HTTPStatusError as e:
            logger.error(f"[PLACE FETCH] HTTP error: {e.response.status_code} - {e.response.text}")
            if e.response.status_code == 404:
                raise ApplicationError(
                    code=ErrorCode.INVALID_PLACE_ID,
                    message=f"Place not found: {place_id}",
                    retryable=False,
                    place_id=place_id
                ) from e
            raise ApplicationError(
                code=ErrorCode.FETCH_FAILED,
                message=f"Place details endpoint returned {e.response.status_code}",
                retryable=e.response.status_code == 429 or e.response.status_code >= 500,
                place_id=place_id
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"[PLACE FETCH] Transport error: {e!r}")
            raise ApplicationError(
                code=ErrorCode.FETCH_FAILED,
                message=f"Failed to reach place details endpoint: {str(e)}",
                retryable=True,
                place_id=place_id
            ) from e
        except ValueError as e:
            # Non-JSON body, or JSON that is not a place payload
            logger.error(f"[PLACE FETCH] Malformed response body: {e}")
            raise ApplicationError(
                code=ErrorCode.FETCH_FAILED,
                message="Place details endpoint returned a malformed body",
                retryable=False,
                hint=str(e),
                place_id=place_id
            ) from e


# Global fetcher instance
place_fetcher = PlaceFetcher()
