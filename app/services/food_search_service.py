"""
Cascading food search.

Tiers, in order: the user's own history, bundled staples, the local cache of
catalog products, the remote catalog, and finally a keyword estimate so a
non-empty query never comes back empty.
"""
import asyncio
import logging
import weakref
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.errors import CatalogUnavailableError, StoreWriteError
from app.core.staple_foods import STAPLE_FOODS
from app.models.food import FoodItem, FoodSourceEnum
from app.repositories.food_repository import FoodRepository
from app.schemas.food import FoodSearchItem, SearchResult, SearchTier
from app.services.openfoodfacts_service import FoodCatalogClient

logger = logging.getLogger(__name__)

ESTIMATE_FIBER_PER_100G = 2.0

# (keywords, (kcal, protein, carbs, fat) per 100 g)
FALLBACK_HEURISTICS: Tuple[Tuple[Tuple[str, ...], Tuple[float, float, float, float]], ...] = (
    (("chicken", "poultry"), (165, 31, 0, 3.6)),
    (("beef", "steak"), (250, 26, 0, 17)),
    (("fish", "salmon", "tuna"), (150, 25, 0, 5)),
    (("egg",), (155, 13, 1.1, 11)),
    (("milk", "yogurt", "cheese"), (100, 8, 5, 5)),
    (("rice",), (130, 2.7, 28, 0.3)),
    (("pasta", "noodle"), (131, 5, 25, 1.1)),
    (("bread",), (247, 13, 41, 4.2)),
    (("potato",), (86, 1.6, 20, 0.1)),
    (("oat",), (389, 17, 66, 7)),
    (("apple", "banana", "orange"), (50, 0.5, 13, 0.2)),
    (("broccoli", "spinach", "lettuce"), (25, 2, 5, 0.3)),
    (("nut", "almond", "peanut"), (600, 20, 20, 50)),
    (("oil", "butter"), (900, 0, 0, 100)),
)
DEFAULT_ESTIMATE = (100, 5, 15, 2)

_TIER_BY_SOURCE = {
    FoodSourceEnum.user_history: SearchTier.history,
    FoodSourceEnum.manual: SearchTier.history,
    FoodSourceEnum.bundled: SearchTier.bundled,
    FoodSourceEnum.catalog: SearchTier.cache,
}

# Cache write-back is serialized per barcode (or per id for barcode-less items).
# An entry lives only while a write-back holds or waits on its lock.
_write_back_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()


def _write_back_lock(key: str) -> asyncio.Lock:
    lock = _write_back_locks.get(key)
    if lock is None:
        lock = _write_back_locks[key] = asyncio.Lock()
    return lock


def estimate_nutrition(query: str) -> FoodSearchItem:
    """Low-confidence per-100 g estimate from keyword heuristics."""
    normalized = query.lower()
    calories, protein, carbs, fat = DEFAULT_ESTIMATE
    for keywords, macros in FALLBACK_HEURISTICS:
        if any(keyword in normalized for keyword in keywords):
            calories, protein, carbs, fat = macros
            break

    return FoodSearchItem(
        name=query.strip().title(),
        calories_per_100g=calories,
        protein_per_100g=protein,
        carbs_per_100g=carbs,
        fat_per_100g=fat,
        fiber_per_100g=ESTIMATE_FIBER_PER_100G,
        source=FoodSourceEnum.manual,
        is_estimate=True,
    )


class FoodSearchService:
    def __init__(
        self,
        repo: FoodRepository,
        catalog: FoodCatalogClient,
        staples: Sequence[FoodSearchItem] = STAPLE_FOODS,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.repo = repo
        self.catalog = catalog
        self.staples = staples
        self.clock = clock

    # ------------------------------------------------------------------
    # Tiers
    # ------------------------------------------------------------------

    def _bundled_matches(self, query: str) -> List[FoodSearchItem]:
        needle = query.lower()
        matches = [item for item in self.staples if needle in item.name.lower()]
        return matches[:settings.SEARCH_BUNDLED_LIMIT]

    async def _remote_matches(self, query: str) -> List[FoodSearchItem]:
        try:
            products = await self.catalog.search_by_name(query, settings.SEARCH_REMOTE_PAGE_SIZE)
        except CatalogUnavailableError as e:
            logger.warning("Remote tier skipped for %r: %s", query, e)
            return []
        return [FoodSearchItem.from_catalog(p) for p in products]

    async def _write_back(self, item: FoodSearchItem) -> Optional[FoodItem]:
        """Store a remote hit in the cache tier. A failed write never fails the search."""
        async with _write_back_lock(item.barcode or item.id):
            try:
                row = await self.repo.upsert_catalog_item(item, self.clock())
            except (StoreWriteError, SQLAlchemyError) as e:
                logger.error("Cache write-back failed for %r: %s", item.name, e)
                return None
        item.id = row.id
        return row

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def search(self, query: str) -> List[SearchResult]:
        query = query.strip()
        if not query:
            return []

        results: List[SearchResult] = []

        history = await self.repo.history_matches(query, settings.SEARCH_HISTORY_LIMIT)
        results.extend(
            SearchResult(tier=SearchTier.history, item=FoodSearchItem.model_validate(f)) for f in history
        )

        results.extend(
            SearchResult(tier=SearchTier.bundled, item=item) for item in self._bundled_matches(query)
        )

        fresh_since = self.clock() - timedelta(days=settings.CACHE_FRESHNESS_DAYS)
        cached = await self.repo.cached_matches(query, fresh_since, settings.SEARCH_CACHE_LIMIT)
        results.extend(
            SearchResult(tier=SearchTier.cache, item=FoodSearchItem.model_validate(f)) for f in cached
        )

        if len(results) < settings.SEARCH_MIN_RESULTS:
            seen = {r.item.name.lower() for r in results}
            for item in await self._remote_matches(query):
                key = item.name.lower()
                if key in seen:
                    continue
                seen.add(key)
                results.append(SearchResult(tier=SearchTier.remote, item=item))
                await self._write_back(item)

        if not results:
            logger.info("No matches for %r, returning an estimate", query)
            results.append(SearchResult(tier=SearchTier.fallback, item=estimate_nutrition(query)))

        return results

    async def search_by_barcode(self, barcode: str) -> Optional[SearchResult]:
        """
        Exact barcode lookup: local store first, then the remote catalog.

        Returns None when the product does not exist. Raises
        CatalogUnavailableError when the catalog cannot be reached, so a
        network failure is never reported as "not found".
        """
        barcode = barcode.strip()
        if not barcode:
            return None

        local = await self.repo.get_by_barcode(barcode)
        if local is not None:
            return SearchResult(tier=_TIER_BY_SOURCE[local.source], item=FoodSearchItem.model_validate(local))

        product = await self.catalog.get_by_barcode(barcode)
        if product is None:
            return None

        item = FoodSearchItem.from_catalog(product)
        await self._write_back(item)
        return SearchResult(tier=SearchTier.remote, item=item)

    async def select_result(self, result: SearchResult) -> FoodItem:
        """Materialize a picked search hit as a stored FoodItem, reusing an existing row."""
        item = result.item
        if item.barcode:
            existing = await self.repo.get_by_barcode(item.barcode)
            if existing is not None:
                return existing
        existing = await self.repo.get_by_id(item.id)
        if existing is not None:
            return existing

        if result.tier in (SearchTier.cache, SearchTier.remote):
            source = FoodSourceEnum.catalog
        else:
            # Bundled and estimated picks rank in the history tier from now on
            existing = await self.repo.get_history_item_by_name(item.name)
            if existing is not None:
                return existing
            source = FoodSourceEnum.user_history

        row = FoodItem(
            id=item.id,
            name=item.name,
            barcode=item.barcode,
            brand=item.brand,
            calories_per_100g=item.calories_per_100g,
            protein_per_100g=item.protein_per_100g,
            carbs_per_100g=item.carbs_per_100g,
            fat_per_100g=item.fat_per_100g,
            fiber_per_100g=item.fiber_per_100g,
            sugar_per_100g=item.sugar_per_100g,
            source=source,
            last_used=None,
            use_count=0,
            is_favorite=False,
        )
        return await self.repo.add(row)
