"""MongoDB adapters and collection names."""

USERS_COLLECTION_NAME = 'users'
LISTS_COLLECTION_NAME = 'lists'
TASKS_COLLECTION_NAME = 'tasks'
