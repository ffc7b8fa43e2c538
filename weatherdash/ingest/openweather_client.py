"""OpenWeatherMap current-weather client."""

import logging

import httpx

from weatherdash.config.loader import API_KEY_ENV, ConfigError
from weatherdash.config.schema import OPENWEATHER_BASE_URL
from weatherdash.models.weather import Unit, WeatherSnapshot

logger = logging.getLogger(__name__)

WEATHER_PATH = "/data/2.5/weather"


class LookupFailed(Exception):
    """Raised for any failed lookup: unknown place, HTTP error, bad body.

    Callers cannot tell these apart; the cause is chained for logging only.
    """

    def __init__(self, place: str):
        super().__init__("not found or service error")
        self.place = place


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = 10.0,
    ):
        if not api_key:
            raise ConfigError(f"No API key: set api.api_key or {API_KEY_ENV}")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def lookup(self, place: str, unit: Unit) -> WeatherSnapshot:
        """Fetch current conditions for a place name, converted to `unit`.

        Raises LookupFailed on transport errors, non-2xx responses and
        bodies without name, sys.country and main.temp.
        """
        url = f"{self.base_url}{WEATHER_PATH}"
        params = {"q": place, "appid": self.api_key, "units": unit.value}
        try:
            resp = httpx.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            snapshot = _parse_snapshot(resp.json(), unit)
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Weather lookup for %r returned %d", place, e.response.status_code
            )
            raise LookupFailed(place) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Weather lookup for %r failed: %s", place, e)
            raise LookupFailed(place) from e
        except ValueError as e:
            logger.warning("Weather lookup for %r returned a bad body: %s", place, e)
            raise LookupFailed(place) from e

        logger.info(
            "Fetched %s (%s): %s°%s",
            snapshot.name, snapshot.country, snapshot.temp, unit.symbol,
        )
        return snapshot


def _parse_snapshot(data: object, unit: Unit) -> WeatherSnapshot:
    """Map the service's JSON body onto a WeatherSnapshot.

    Raises ValueError when a required field is missing or mistyped.
    """
    if not isinstance(data, dict):
        raise ValueError("body is not an object")
    sys_block = data.get("sys")
    main_block = data.get("main")
    if not isinstance(sys_block, dict) or not isinstance(main_block, dict):
        raise ValueError("missing sys or main block")
    return WeatherSnapshot.from_dict(
        {
            "name": data.get("name"),
            "country": sys_block.get("country"),
            "temp": main_block.get("temp"),
            "unit": unit.value,
        }
    )
