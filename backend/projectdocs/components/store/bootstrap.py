"""Store bootstrap: seed defaults once, or wipe and re-seed.

Called from the application lifespan at startup, never lazily from service
code.
"""

from projectdocs.components.store.provider import EntityStore
from projectdocs.components.store.seed import build_seed
from projectdocs.utils import get_logger, get_timestamp_ms

logger = get_logger(__name__)


def initialize(store: EntityStore) -> bool:
    """Seed default records if every collection is empty.

    Returns:
        True if the seed was written, False if data already existed
    """
    if not store.is_empty():
        logger.debug("Store already holds data, skipping seed")
        return False

    seed = build_seed(get_timestamp_ms())
    for name, records in seed.items():
        collection = store.collection(name)
        for record in records:
            collection.create(record)

    total = sum(len(records) for records in seed.values())
    logger.info(f"Seeded default data: {total} records in {len(seed)} collections")
    return True


def reset(store: EntityStore) -> None:
    """Clear every collection, then seed the defaults again."""
    store.clear()
    initialize(store)
    logger.info("Store reset to default data")
