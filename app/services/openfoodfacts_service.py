"""
OpenFoodFacts client backing the remote search tier and barcode lookups.
API docs: https://openfoodfacts.github.io/openfoodfacts-server/api/

Production behaviour:
- timeout 8s; retry with exponential backoff (1s -> 2s) on timeout only
- circuit breaker: after 5 failures in a row, 60s without requests
- optional Redis response cache (1h TTL); works without it when Redis is
  unset or unreachable

Transport failures raise CatalogUnavailableError, malformed payloads raise
CatalogDecodeError. A product that does not exist, or a barcode lookup
answered with a non-success status, is ``None``. Barcode lookups are not
retried.
"""
import asyncio
import hashlib
import json
import logging
import time
from typing import Dict, List, Optional

import httpx
import redis.asyncio as aioredis

from app.core.config import settings
from app.core.errors import CatalogUnavailableError, CatalogDecodeError
from app.schemas.food import CatalogProduct

logger = logging.getLogger(__name__)

KJ_PER_KCAL = 4.184


class FoodCatalogClient:
    # --- Configuration ---
    CACHE_TTL = 3600        # seconds; macro data rarely changes
    MAX_RETRIES = 2         # attempts on timeout (with backoff)
    FAILURE_THRESHOLD = 5   # failures in a row before the circuit opens
    RECOVERY_TIMEOUT = 60   # seconds the circuit stays open

    SEARCH_FIELDS = "product_name,brands,nutriments,code"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        redis_url: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or settings.OPENFOODFACTS_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.OPENFOODFACTS_TIMEOUT
        self.redis_url = redis_url if redis_url is not None else settings.REDIS_URL
        self._http: Optional[httpx.AsyncClient] = http
        self._redis: Optional[aioredis.Redis] = None
        # circuit breaker state
        self._failures: int = 0
        self._open_until: float = 0.0

    # ------------------------------------------------------------------
    # Lazy clients
    # ------------------------------------------------------------------

    async def _get_http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": "IronLog/1.0"},
            )
        return self._http

    async def _get_redis(self) -> Optional[aioredis.Redis]:
        if not self.redis_url:
            return None
        if self._redis is None:
            self._redis = aioredis.from_url(
                self.redis_url,
                decode_responses=True,
                socket_connect_timeout=2,
                socket_timeout=2,
            )
        return self._redis

    # ------------------------------------------------------------------
    # Circuit breaker
    # ------------------------------------------------------------------

    def _circuit_is_open(self) -> bool:
        """True while the catalog is considered down and no requests are made."""
        if self._failures >= self.FAILURE_THRESHOLD:
            if time.monotonic() < self._open_until:
                return True
            # Recovery window elapsed, try again
            self._failures = 0
        return False

    def _record_failure(self) -> None:
        self._failures += 1
        if self._failures >= self.FAILURE_THRESHOLD:
            self._open_until = time.monotonic() + self.RECOVERY_TIMEOUT
            logger.warning("OpenFoodFacts circuit OPEN for %ss", self.RECOVERY_TIMEOUT)

    def _record_success(self) -> None:
        if self._failures > 0:
            logger.info("OpenFoodFacts circuit CLOSED, service recovered")
        self._failures = 0

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def _cache_key(self, query: str, page_size: int) -> str:
        digest = hashlib.md5(f"{query.lower().strip()}:{page_size}".encode()).hexdigest()
        return f"off:search:{digest}"

    async def _cache_get(self, key: str) -> Optional[List[Dict]]:
        try:
            redis = await self._get_redis()
            if redis is None:
                return None
            raw = await redis.get(key)
            if raw:
                return json.loads(raw)
        except (aioredis.RedisError, OSError, ValueError) as e:
            logger.debug("Redis cache read skipped: %s", e)
        return None

    async def _cache_set(self, key: str, data: List[Dict]) -> None:
        try:
            redis = await self._get_redis()
            if redis is None:
                return
            await redis.setex(key, self.CACHE_TTL, json.dumps(data, ensure_ascii=False))
        except (aioredis.RedisError, OSError) as e:
            logger.debug("Redis cache write skipped: %s", e)

    # ------------------------------------------------------------------
    # Response normalization
    # ------------------------------------------------------------------

    @staticmethod
    def _normalize_nutriments(nutriments: Dict) -> Dict[str, Optional[float]]:
        """Per-100 g macros. Missing macros are 0, fiber and sugar stay optional."""
        calories = nutriments.get("energy-kcal_100g")
        if calories is None and nutriments.get("energy_100g") is not None:
            # energy_100g is reported in kJ
            calories = float(nutriments["energy_100g"]) / KJ_PER_KCAL

        def optional(key: str) -> Optional[float]:
            value = nutriments.get(key)
            return round(float(value), 1) if value is not None else None

        return {
            "calories_per_100g": round(float(calories or 0), 1),
            "protein_per_100g": round(float(nutriments.get("proteins_100g") or 0), 1),
            "carbs_per_100g": round(float(nutriments.get("carbohydrates_100g") or 0), 1),
            "fat_per_100g": round(float(nutriments.get("fat_100g") or 0), 1),
            "fiber_per_100g": optional("fiber_100g"),
            "sugar_per_100g": optional("sugars_100g"),
        }

    def _parse_product(self, product: Dict) -> Optional[CatalogProduct]:
        name = (product.get("product_name") or "").strip()
        nutriments = product.get("nutriments")
        if not name or not isinstance(nutriments, dict):
            return None
        try:
            return CatalogProduct(
                name=name,
                barcode=product.get("code") or None,
                brand=product.get("brands") or None,
                **self._normalize_nutriments(nutriments),
            )
        except (TypeError, ValueError) as e:
            logger.debug("Skipping malformed product %r: %s", name, e)
            return None

    def _parse_products(self, data: Dict) -> List[CatalogProduct]:
        products = data.get("products")
        if not isinstance(products, list):
            raise CatalogDecodeError("search response has no products list")
        results = []
        for product in products:
            if isinstance(product, dict):
                parsed = self._parse_product(product)
                if parsed is not None:
                    results.append(parsed)
        return results

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _get(
        self, url: str, params: Optional[Dict] = None, retries: Optional[int] = None,
    ) -> httpx.Response:
        """GET with retry on timeout; every other transport error fails at once.

        ``retries`` is the number of attempts, MAX_RETRIES when unset.
        """
        if self._circuit_is_open():
            raise CatalogUnavailableError("OpenFoodFacts circuit open")

        attempts = retries or self.MAX_RETRIES
        for attempt in range(attempts):
            try:
                client = await self._get_http()
                return await client.get(url, params=params)
            except httpx.TimeoutException:
                wait = 2 ** attempt  # 1s, 2s
                if attempt < attempts - 1:
                    logger.warning("OpenFoodFacts timeout (attempt %d), retrying in %ss", attempt + 1, wait)
                    await asyncio.sleep(wait)
                else:
                    logger.warning("OpenFoodFacts timeout after %d attempt(s)", attempts)
            except httpx.HTTPError as e:
                self._record_failure()
                raise CatalogUnavailableError(f"OpenFoodFacts request failed: {e}") from e

        self._record_failure()
        raise CatalogUnavailableError("OpenFoodFacts timed out")

    def _decode(self, response: httpx.Response) -> Dict:
        try:
            data = response.json()
        except ValueError as e:
            raise CatalogDecodeError("OpenFoodFacts returned invalid JSON") from e
        if not isinstance(data, dict):
            raise CatalogDecodeError("OpenFoodFacts returned an unexpected payload")
        return data

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def search_by_name(self, query: str, page_size: int = 30) -> List[CatalogProduct]:
        cache_key = self._cache_key(query, page_size)
        cached = await self._cache_get(cache_key)
        if cached is not None:
            logger.debug("OpenFoodFacts cache hit: %r", query)
            return [CatalogProduct(**p) for p in cached]

        logger.info("OpenFoodFacts search %r", query)
        params = {
            "search_terms": query,
            "search_simple": 1,
            "action": "process",
            "json": 1,
            "page_size": page_size,
            "fields": self.SEARCH_FIELDS,
        }
        response = await self._get(f"{self.base_url}/cgi/search.pl", params=params)
        if response.status_code != 200:
            self._record_failure()
            raise CatalogUnavailableError(f"OpenFoodFacts HTTP {response.status_code}")

        try:
            results = self._parse_products(self._decode(response))
        except CatalogDecodeError:
            self._record_failure()
            raise
        self._record_success()
        logger.info("OpenFoodFacts returned %d products for %r", len(results), query)

        await self._cache_set(cache_key, [p.model_dump() for p in results])
        return results

    async def get_by_barcode(self, barcode: str) -> Optional[CatalogProduct]:
        cache_key = f"off:barcode:{barcode}"
        cached = await self._cache_get(cache_key)
        if cached:
            return CatalogProduct(**cached[0])

        # a failed barcode lookup is not retried
        response = await self._get(f"{self.base_url}/api/v2/product/{barcode}.json", retries=1)
        if response.status_code == 404:
            self._record_success()
            return None
        if response.status_code != 200:
            logger.warning("OpenFoodFacts barcode %s: HTTP %d, treated as not found", barcode, response.status_code)
            return None

        try:
            data = self._decode(response)
        except CatalogDecodeError:
            self._record_failure()
            raise
        self._record_success()
        if data.get("status") != 1 or not isinstance(data.get("product"), dict):
            return None

        product = self._parse_product(data["product"])
        if product is None:
            return None
        if product.barcode is None:
            product.barcode = barcode

        await self._cache_set(cache_key, [product.model_dump()])
        return product

    async def close(self) -> None:
        """Close connections on application shutdown."""
        if self._http:
            await self._http.aclose()
            self._http = None
        if self._redis:
            await self._redis.aclose()
            self._redis = None


# Singleton instance
food_catalog_client = FoodCatalogClient()
