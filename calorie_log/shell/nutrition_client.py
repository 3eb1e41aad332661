"""Nutritionix Client - Online lookup of foods from free text.

Turns a sentence like "2 apples, 200 grams of chicken" into structured
food records. All network I/O for nutrition data is contained here.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import httpx
from pydantic import BaseModel, ValidationError

from ..core.errors import LookupFailure
from ..core.macros import derive_carbs
from ..core.models import NutritionInfo


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://trackapi.nutritionix.com"
NATURAL_NUTRIENTS_PATH = "/v2/natural/nutrients"


class NutritionLookup(Protocol):
    """Anything that can resolve free text into food records."""

    def search(self, query: str) -> list[NutritionInfo]:
        """Return zero or more foods for the query, or raise LookupFailure."""


@dataclass
class NutritionixConfig:
    """Configuration for the Nutritionix client.

    Attributes:
        app_id: Nutritionix application ID
        api_key: Nutritionix application key
        base_url: API root URL
        timezone: Timezone sent with each query
        timeout: Request timeout in seconds
    """

    app_id: str
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timezone: str = "US/Eastern"
    timeout: float = 15.0


class _NutritionixFood(BaseModel):
    food_name: str
    serving_qty: float
    serving_unit: str
    nf_calories: float
    nf_total_fat: float
    nf_protein: float
    nf_total_carbohydrate: Optional[float] = None


class _NutritionixResponse(BaseModel):
    foods: list[_NutritionixFood]


def to_nutrition_info(food: _NutritionixFood) -> NutritionInfo:
    """Normalize a raw Nutritionix food, deriving carbs when absent."""
    if food.nf_total_carbohydrate is None:
        carbs = derive_carbs(food.nf_calories, food.nf_protein, food.nf_total_fat)
    else:
        carbs = round(food.nf_total_carbohydrate, 1)

    return NutritionInfo(
        name=food.food_name,
        quantity=food.serving_qty,
        unit=food.serving_unit,
        calories=food.nf_calories,
        protein=food.nf_protein,
        fat=food.nf_total_fat,
        carbs=carbs,
    )


class NutritionixClient:
    """Synchronous client for the Nutritionix natural language endpoint."""

    def __init__(
        self, config: NutritionixConfig, http_client: httpx.Client | None = None
    ) -> None:
        """Initialize the client.

        Args:
            config: Credentials and endpoint settings
            http_client: Optional preconfigured HTTPX client (used in tests)
        """
        self.config = config
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.Client:
        """Lazy initialization of the HTTPX client."""
        if self._http_client is None:
            self._http_client = httpx.Client(
                base_url=self.config.base_url, timeout=self.config.timeout
            )
        return self._http_client

    def search(self, query: str) -> list[NutritionInfo]:
        """Look up the foods described by ``query``.

        Args:
            query: Free text such as "2 eggs and a slice of toast"

        Returns:
            Foods recognized in the query (may be empty)

        Raises:
            LookupFailure: On transport errors, non-success status or a bad body
        """
        logger.info("Looking up nutrition for: %s", query)
        try:
            response = self.http_client.post(
                NATURAL_NUTRIENTS_PATH,
                headers={
                    "x-app-id": self.config.app_id,
                    "x-app-key": self.config.api_key,
                },
                json={"query": query, "timezone": self.config.timezone},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Nutrition lookup failed: %s", e.response.status_code)
            raise LookupFailure(f"API request failed: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("Nutrition lookup failed: %s", str(e))
            raise LookupFailure(f"API request failed: {e}") from e

        try:
            parsed = _NutritionixResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.error("Unexpected nutrition response: %s", str(e))
            raise LookupFailure("Unexpected response from nutrition API") from e

        foods = [to_nutrition_info(f) for f in parsed.foods]
        logger.debug("Nutrition lookup returned %d foods", len(foods))
        return foods

    def close(self) -> None:
        """Close the underlying HTTP session."""
        if self._http_client is not None:
            self._http_client.close()
