import json
from http.client import HTTPException
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from tcgleague.config import config
from tcgleague.utils.logging import logger

NOMINATIM_SEARCH_ENDPOINT = "https://nominatim.openstreetmap.org/search"


def build_geocoding_query(address: str, city: str, state: str) -> str:
    return ", ".join(part.strip() for part in (address, city, state) if part and part.strip())


def geocode_address(address: str, city: str, state: str) -> tuple[float, float] | None:
    """
    Look up the coordinates of an event location.

    Fail-soft: events are created without coordinates when the lookup fails.
    """
    if not config.geocoding_enabled or (address.strip() == "" and city.strip() == ""):
        return None

    query = build_geocoding_query(address, city, state)
    request = Request(
        f"{NOMINATIM_SEARCH_ENDPOINT}?{urlencode({'format': 'json', 'q': query, 'limit': 1})}",
        headers={"User-Agent": config.geocoding_user_agent},
    )
    # URLError and socket timeouts are OSErrors, a dropped response surfaces as HTTPException.
    try:
        with urlopen(request, timeout=config.geocoding_timeout_s) as response:  # noqa: S310 controlled host
            payload = json.loads(response.read().decode("utf-8"))
    except (OSError, HTTPException, ValueError) as exc:
        logger.warning(f"Geocoding failed, event will be created without coordinates: {exc}")
        return None

    if not isinstance(payload, list) or len(payload) < 1:
        return None

    try:
        return float(payload[0]["lat"]), float(payload[0]["lon"])
    except (KeyError, TypeError, ValueError):
        return None
