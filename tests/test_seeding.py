"""
Unit tests for reference catalog seeding
"""
from sarkari_yojana.catalog import REFERENCE_SCHEMES
from sarkari_yojana.models.scheme import SchemeOrigin
from sarkari_yojana.services.seeding import seed_reference_catalog
from sarkari_yojana.services.store_service import LocalStore


async def test_first_seed_inserts_everything(store):
    assert store.seed_report.counts == {"insert": len(REFERENCE_SCHEMES)}


async def test_reseeding_is_idempotent(store):
    before = await store.get_all_schemes()
    report = await seed_reference_catalog(store)
    assert report.counts == {"ignore": len(REFERENCE_SCHEMES)}
    assert await store.get_all_schemes() == before


async def test_seeding_twice_from_empty_matches_once(mongo_client, test_settings):
    once = LocalStore(client=mongo_client, db_name="seed_once", config=test_settings)
    await once.init()
    
    twice = LocalStore(client=mongo_client, db_name="seed_twice", config=test_settings)
    await twice.init()
    await seed_reference_catalog(twice)
    
    strip = lambda schemes: [s.model_dump(exclude={"last_checked_at"}) for s in schemes]
    assert strip(await once.get_all_schemes()) == strip(await twice.get_all_schemes())


async def test_refreshed_record_survives_reseeding(store):
    refreshed = dict(
        REFERENCE_SCHEMES[2],
        detailed_benefits="Revised monthly grant",
        origin="collaborator"
    )
    await store.upsert_scheme(refreshed)
    
    report = await seed_reference_catalog(store)
    stored = await store.get_scheme(refreshed["name"])
    assert report.preserved == 1
    assert stored.origin == SchemeOrigin.COLLABORATOR
    assert stored.detailed_benefits == "Revised monthly grant"


async def test_changed_catalog_entry_updates_store(store):
    revised = [dict(REFERENCE_SCHEMES[0], detailed_benefits="₹9,000 per year")]
    report = await seed_reference_catalog(store, revised)
    assert report.counts == {"update": 1}
    assert (await store.get_scheme(REFERENCE_SCHEMES[0]["name"])).detailed_benefits == "₹9,000 per year"


async def test_invalid_catalog_entry_is_skipped(store):
    report = await seed_reference_catalog(store, [{"government": "Central Govt"}])
    assert report.counts == {"skipped": 1}
