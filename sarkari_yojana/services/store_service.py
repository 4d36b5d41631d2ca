"""
Local store: versioned MongoDB persistence for schemes, settings, the
analysis cache, submission records and the agent log
"""
import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional, Tuple, Union

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pydantic import BaseModel, ValidationError
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from ..config import Settings, settings
from ..errors import StoreUnavailable
from ..models.analysis import AgentLogEntry, AnalysisResponse, SubmissionRecord, get_current_utc_time
from ..models.profile import UserProfile
from ..models.scheme import Scheme, SchemeStatus, decode_scheme, decode_schemes
from .seeding import SeedReport, seed_reference_catalog

logger = logging.getLogger(__name__)

# Collection names
SCHEMES = "schemes"
SETTINGS = "settings"
CACHE = "analysis_cache"
SUBMISSIONS = "submissions"
APP_DATA = "app_data"
AGENT_LOGS = "agent_logs"
COUNTERS = "counters"
META = "meta"

SCHEMA_DOC_ID = "schema"


class UpsertOutcome(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    IGNORE = "ignore"
    SKIPPED = "skipped"
    FAILED = "failed"


async def _ensure_collections(db: AsyncIOMotorDatabase, names: List[str]) -> None:
    existing = set(await db.list_collection_names())
    for name in names:
        if name not in existing:
            await db.create_collection(name)


async def _migrate_v1(db: AsyncIOMotorDatabase) -> None:
    """Core collections: schemes, settings, cache, submissions"""
    await _ensure_collections(db, [SCHEMES, SETTINGS, CACHE, SUBMISSIONS])
    await db[SCHEMES].create_index("name", unique=True)
    await db[SUBMISSIONS].create_index("seq", unique=True)


async def _migrate_v2(db: AsyncIOMotorDatabase) -> None:
    """Session restore data"""
    await _ensure_collections(db, [APP_DATA])


async def _migrate_v3(db: AsyncIOMotorDatabase) -> None:
    """Agent log, sequence counters, cache age index"""
    await _ensure_collections(db, [AGENT_LOGS, COUNTERS])
    await db[CACHE].create_index("created_at")
    await db[AGENT_LOGS].create_index("timestamp")


# Ordered migration steps, applied from the stored version up to SCHEMA_VERSION
MIGRATIONS: List[Tuple[int, Callable[[AsyncIOMotorDatabase], Awaitable[None]]]] = [
    (1, _migrate_v1),
    (2, _migrate_v2),
    (3, _migrate_v3),
]

SCHEMA_VERSION = MIGRATIONS[-1][0]


def _to_document_value(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value


class LocalStore:
    """
    Persistent store backing the application.
    
    Construct one per process and pass it to whoever needs it. Every
    operation waits for ``init()``; concurrent ``init()`` calls share a
    single initialization attempt.
    """
    
    def __init__(
        self,
        client: Optional[AsyncIOMotorClient] = None,
        db_name: Optional[str] = None,
        config: Settings = settings,
        seed_catalog: bool = True
    ):
        self.settings = config
        self.client = client
        self.db_name = db_name or config.mongodb_db_name
        self.db: Optional[AsyncIOMotorDatabase] = None
        self.seed_catalog = seed_catalog
        self.seed_report: Optional[SeedReport] = None
        self.migrations_applied: List[int] = []
        self._init_task: Optional[asyncio.Task] = None
    
    # Lifecycle
    async def init(self) -> None:
        """Open the database, migrate it to SCHEMA_VERSION and seed the catalog"""
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._initialize())
        task = self._init_task
        try:
            await asyncio.shield(task)
        except Exception:
            # Let a later init() start a fresh attempt
            if self._init_task is task:
                self._init_task = None
            raise
    
    async def _initialize(self) -> None:
        try:
            if self.client is None:
                self.client = AsyncIOMotorClient(
                    self.settings.mongodb_url,
                    serverSelectionTimeoutMS=self.settings.mongodb_timeout_ms
                )
            await self.client.admin.command('ping')
            self.db = self.client[self.db_name]
            await self._apply_migrations()
        except PyMongoError as e:
            logger.error(f"Failed to open local store: {e}")
            raise StoreUnavailable(f"Local store unavailable: {e}") from e
        
        logger.info(f"Local store '{self.db_name}' ready at schema v{SCHEMA_VERSION}")
        if self.seed_catalog:
            self.seed_report = await seed_reference_catalog(self)
    
    async def _apply_migrations(self) -> None:
        meta = self.db[META]
        doc = await meta.find_one({"_id": SCHEMA_DOC_ID})
        current = doc["version"] if doc else 0
        if current > SCHEMA_VERSION:
            raise StoreUnavailable(
                f"Stored schema v{current} is newer than supported v{SCHEMA_VERSION}"
            )
        
        for version, step in MIGRATIONS:
            if version <= current:
                continue
            logger.info(f"Applying store migration v{version}")
            await step(self.db)
            await meta.replace_one(
                {"_id": SCHEMA_DOC_ID},
                {"_id": SCHEMA_DOC_ID, "version": version},
                upsert=True
            )
            self.migrations_applied.append(version)
    
    async def _ensure_ready(self) -> None:
        # Seeding runs inside the init task and must not wait on itself
        if self._init_task is not None and self._init_task is asyncio.current_task():
            return
        await self.init()
    
    async def schema_version(self) -> int:
        """
        Stored schema version
        
        Raises:
            StoreUnavailable: the store cannot be opened or read
        """
        await self._ensure_ready()
        try:
            doc = await self.db[META].find_one({"_id": SCHEMA_DOC_ID})
        except PyMongoError as e:
            logger.error(f"Failed to read schema version: {e}")
            raise StoreUnavailable(f"Local store unavailable: {e}") from e
        return doc["version"] if doc else 0
    
    def close(self) -> None:
        """Close the database connection"""
        if self.client:
            self.client.close()
            logger.info("Local store connection closed")
    
    # Scheme operations
    async def get_all_schemes(self) -> List[Scheme]:
        """All schemes in insertion order; empty on any failure"""
        try:
            await self._ensure_ready()
            docs = []
            async for doc in self.db[SCHEMES].find({}, sort=[("_id", 1)]):
                doc.pop("_id", None)
                docs.append(doc)
        except (StoreUnavailable, PyMongoError) as e:
            logger.error(f"Failed to get schemes: {e}")
            return []
        return decode_schemes(docs)
    
    async def get_scheme(self, name: str) -> Optional[Scheme]:
        """Get a scheme by name"""
        if not name:
            return None
        try:
            await self._ensure_ready()
            doc = await self.db[SCHEMES].find_one({"name": name}, {"_id": 0})
        except (StoreUnavailable, PyMongoError) as e:
            logger.error(f"Failed to get scheme {name!r}: {e}")
            return None
        if not doc:
            return None
        result = decode_scheme(doc)
        if not result.ok:
            logger.warning(f"Stored scheme unreadable: {result.error}")
        return result.scheme
    
    async def upsert_scheme(self, scheme: Union[Scheme, dict]) -> UpsertOutcome:
        """
        Insert or replace a scheme keyed by name
        
        Records that fail validation (a missing name included) are skipped
        without touching the collection.
        
        Returns:
            UpsertOutcome describing what happened
        """
        result = decode_scheme(scheme)
        if not result.ok:
            logger.warning(f"Skipping scheme upsert: {result.error}")
            return UpsertOutcome.SKIPPED
        
        try:
            await self._ensure_ready()
            return await self._put_scheme(result.scheme)
        except (StoreUnavailable, PyMongoError) as e:
            logger.error(f"Failed to upsert scheme {result.scheme.name!r}: {e}")
            return UpsertOutcome.FAILED
    
    async def _put_scheme(self, scheme: Scheme) -> UpsertOutcome:
        collection = self.db[SCHEMES]
        existing = await collection.find_one(
            {"name": scheme.name},
            {"hash_signature": 1, "origin": 1}
        )
        new_hash = scheme.content_hash()
        if existing and existing.get("hash_signature") == new_hash and existing.get("origin") == scheme.origin.value:
            return UpsertOutcome.IGNORE
        
        changes = {
            "hash_signature": new_hash,
            "last_checked_at": get_current_utc_time()
        }
        # First sighting of a name is tagged NEW; updates keep the record's own status
        if not existing and scheme.status != SchemeStatus.EXPIRED:
            changes["status"] = SchemeStatus.NEW
        record = scheme.model_copy(update=changes)
        await collection.replace_one(
            {"name": scheme.name},
            record.model_dump(mode="json"),
            upsert=True
        )
        if existing:
            logger.info(f"Scheme updated: {scheme.name}")
            return UpsertOutcome.UPDATE
        logger.info(f"Scheme inserted: {scheme.name}")
        return UpsertOutcome.INSERT
    
    # Single-value collections
    async def _get_value(self, collection: str, key: str, default: Any = None) -> Any:
        if not key:
            return default
        try:
            await self._ensure_ready()
            doc = await self.db[collection].find_one({"_id": key})
        except (StoreUnavailable, PyMongoError) as e:
            logger.error(f"Failed to read {collection}/{key}: {e}")
            return default
        return doc["value"] if doc else default
    
    async def _put_value(self, collection: str, key: str, value: Any) -> None:
        if not key:
            logger.warning(f"Ignoring write to {collection} without a key")
            return
        try:
            await self._ensure_ready()
            await self.db[collection].replace_one(
                {"_id": key},
                {"_id": key, "value": _to_document_value(value)},
                upsert=True
            )
        except (StoreUnavailable, PyMongoError) as e:
            logger.error(f"Failed to write {collection}/{key}: {e}")
    
    async def get_setting(self, name: str, default: Any = None) -> Any:
        return await self._get_value(SETTINGS, name, default)
    
    async def set_setting(self, name: str, value: Any) -> None:
        await self._put_value(SETTINGS, name, value)
    
    async def get_app_data(self, key: str, default: Any = None) -> Any:
        return await self._get_value(APP_DATA, key, default)
    
    async def save_app_data(self, key: str, value: Any) -> None:
        await self._put_value(APP_DATA, key, value)
    
    # Analysis cache
    async def get_cache(self, fingerprint: Optional[str]) -> Optional[AnalysisResponse]:
        """Cached analysis for a profile fingerprint, or None"""
        if not fingerprint:
            return None
        try:
            await self._ensure_ready()
            doc = await self.db[CACHE].find_one({"_id": fingerprint})
        except (StoreUnavailable, PyMongoError) as e:
            logger.error(f"Failed to read cache entry: {e}")
            return None
        if not doc:
            return None
        try:
            return AnalysisResponse.model_validate(doc["response"])
        except (KeyError, ValidationError) as e:
            logger.warning(f"Discarding unreadable cache entry {fingerprint[:12]}: {e}")
            return None
    
    async def save_cache(self, fingerprint: Optional[str], response: AnalysisResponse) -> None:
        """Store an analysis under its fingerprint, replacing any previous one"""
        if not fingerprint:
            logger.debug("Not caching an analysis without a fingerprint")
            return
        try:
            await self._ensure_ready()
            await self.db[CACHE].replace_one(
                {"_id": fingerprint},
                {
                    "_id": fingerprint,
                    "response": response.model_dump(mode="json"),
                    "created_at": response.created_at.isoformat()
                },
                upsert=True
            )
        except (StoreUnavailable, PyMongoError) as e:
            logger.error(f"Failed to write cache entry: {e}")
    
    # Submission records
    async def _next_sequence(self, name: str) -> int:
        doc = await self.db[COUNTERS].find_one_and_update(
            {"_id": name},
            {"$inc": {"value": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return doc["value"]
    
    async def append_submission(self, profile: UserProfile) -> Optional[int]:
        """Append a profile snapshot; returns its sequence number"""
        try:
            await self._ensure_ready()
            seq = await self._next_sequence(SUBMISSIONS)
            record = SubmissionRecord(seq=seq, fingerprint=profile.fingerprint(), profile=profile)
            doc = record.model_dump(mode="json")
            doc["_id"] = seq
            await self.db[SUBMISSIONS].insert_one(doc)
            return seq
        except (StoreUnavailable, PyMongoError) as e:
            logger.error(f"Failed to append submission: {e}")
            return None
    
    async def list_submissions(self, limit: int = 50) -> List[SubmissionRecord]:
        """Most recent submissions first"""
        try:
            await self._ensure_ready()
            records = []
            async for doc in self.db[SUBMISSIONS].find({}, {"_id": 0}, sort=[("seq", -1)], limit=limit):
                records.append(SubmissionRecord.model_validate(doc))
            return records
        except (StoreUnavailable, PyMongoError, ValidationError) as e:
            logger.error(f"Failed to list submissions: {e}")
            return []
    
    # Agent log
    async def add_log(self, entry: AgentLogEntry) -> None:
        try:
            await self._ensure_ready()
            doc = entry.model_dump(mode="json")
            doc["_id"] = entry.id
            await self.db[AGENT_LOGS].replace_one({"_id": entry.id}, doc, upsert=True)
        except (StoreUnavailable, PyMongoError) as e:
            logger.error(f"Failed to write agent log: {e}")
    
    async def get_logs(self, limit: int = 50) -> List[AgentLogEntry]:
        """Most recent agent log entries first"""
        try:
            await self._ensure_ready()
            entries = []
            async for doc in self.db[AGENT_LOGS].find({}, {"_id": 0}, sort=[("timestamp", -1)], limit=limit):
                entries.append(AgentLogEntry.model_validate(doc))
            return entries
        except (StoreUnavailable, PyMongoError, ValidationError) as e:
            logger.error(f"Failed to get agent logs: {e}")
            return []
