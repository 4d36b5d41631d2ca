"""
Seeding of the reference scheme catalog into the local store
"""
import logging
from collections import Counter
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

from pydantic import BaseModel, Field

from ..catalog import REFERENCE_SCHEMES
from ..models.scheme import SchemeOrigin, decode_scheme

if TYPE_CHECKING:
    from .store_service import LocalStore

logger = logging.getLogger(__name__)


class SeedReport(BaseModel):
    """Per-outcome counts of one seeding run"""
    counts: Dict[str, int] = Field(default_factory=dict)
    preserved: int = Field(default=0, description="Catalog names kept because a refreshed record exists")
    
    @property
    def total(self) -> int:
        return sum(self.counts.values()) + self.preserved


async def seed_reference_catalog(
    store: "LocalStore",
    schemes: Optional[Iterable[Any]] = None
) -> SeedReport:
    """
    Upsert every reference catalog record into the store
    
    A stored record that came from the reasoning collaborator is never
    overwritten here, even when it shares a name with a catalog entry.
    Catalog records with unchanged content are left untouched.
    
    Args:
        store: Store to seed; called from inside its initialization
        schemes: Raw catalog records (defaults to the built-in catalog)
    
    Returns:
        SeedReport with the upsert outcome counts
    """
    records = REFERENCE_SCHEMES if schemes is None else schemes
    outcomes = Counter()
    preserved = 0
    
    for raw in records:
        result = decode_scheme(raw, origin=SchemeOrigin.CATALOG)
        if not result.ok:
            logger.warning(f"Reference catalog entry rejected: {result.error}")
            outcomes["skipped"] += 1
            continue
        
        existing = await store.get_scheme(result.scheme.name)
        if existing is not None and existing.origin == SchemeOrigin.COLLABORATOR:
            preserved += 1
            continue
        
        outcome = await store.upsert_scheme(result.scheme)
        outcomes[outcome.value] += 1
    
    report = SeedReport(counts=dict(outcomes), preserved=preserved)
    logger.info(f"Reference catalog seeded: {report.counts}, preserved {report.preserved}")
    return report
