"""MongoDB index creation, run once at app startup."""

from logging import getLogger

from pymongo.errors import PyMongoError

logger = getLogger(__name__)


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create one index; log and report failure instead of raising.

    ``create_index`` is a no-op when an identical index already exists.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        logger.error("Failed to create index", extra={
            "collection": collection.name,
            "index": name,
            "error": str(e),
        })
        return False


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository
    from adapter.mongodb.task_list_repository import MongoTaskListRepository, MongoTaskRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoTaskListRepository(db).ensure_indexes(),
        MongoTaskRepository(db).ensure_indexes(),
    ]
    return all(results)
