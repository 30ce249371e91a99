"""MongoDB implementations of TaskListRepository and TaskRepository.

Every list query is scoped by ``user_id``; tasks are scoped by ``list_id``
and callers check list ownership first.
"""

from logging import getLogger
from pymongo.database import Database
from pymongo.errors import PyMongoError
from adapter.mongodb import LISTS_COLLECTION_NAME, TASKS_COLLECTION_NAME
from domain.model.task_list import Task, TaskList

logger = getLogger(__name__)

TASK_UPDATABLE_FIELDS = ('title', 'completed')


class MongoTaskListRepository:
    def __init__(self, db: Database):
        self.collection = db[LISTS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        from adapter.mongodb.indexes import create_index_safe

        return create_index_safe(self.collection, [('user_id', 1), ('created_at', 1)], 'idx_lists_user_created')

    def _to_domain(self, doc: dict) -> TaskList:
        return TaskList(
            id=doc['_id'],
            title=doc['title'],
            user_id=doc['user_id'],
            created_at=doc['created_at'],
        )

    def save(self, task_list: TaskList) -> bool:
        try:
            self.collection.insert_one({
                '_id': task_list.id,
                'title': task_list.title,
                'user_id': task_list.user_id,
                'created_at': task_list.created_at,
            })
            return True
        except PyMongoError as e:
            logger.error("Failed to save list", extra={"userId": task_list.user_id, "error": str(e)})
            return False

    def find_by_user(self, user_id: str) -> list[TaskList]:
        try:
            cursor = self.collection.find({'user_id': user_id}).sort('created_at', 1)
            return [self._to_domain(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to find lists", extra={"userId": user_id, "error": str(e)})
            return []

    def get_owned(self, list_id: str, user_id: str) -> TaskList | None:
        try:
            doc = self.collection.find_one({'_id': list_id, 'user_id': user_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get list", extra={"listId": list_id, "error": str(e)})
            return None

    def update_title(self, list_id: str, user_id: str, title: str) -> bool:
        try:
            result = self.collection.update_one(
                {'_id': list_id, 'user_id': user_id},
                {'$set': {'title': title}}
            )
            return result.matched_count > 0
        except PyMongoError as e:
            logger.error("Failed to update list", extra={"listId": list_id, "error": str(e)})
            return False

    def delete(self, list_id: str, user_id: str) -> TaskList | None:
        try:
            doc = self.collection.find_one_and_delete({'_id': list_id, 'user_id': user_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to delete list", extra={"listId": list_id, "error": str(e)})
            return None


class MongoTaskRepository:
    def __init__(self, db: Database):
        self.collection = db[TASKS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        from adapter.mongodb.indexes import create_index_safe

        return create_index_safe(self.collection, [('list_id', 1), ('created_at', 1)], 'idx_tasks_list_created')

    def _to_domain(self, doc: dict) -> Task:
        return Task(
            id=doc['_id'],
            title=doc['title'],
            list_id=doc['list_id'],
            created_at=doc['created_at'],
            completed=doc.get('completed', False),
        )

    def save(self, task: Task) -> bool:
        try:
            self.collection.insert_one({
                '_id': task.id,
                'title': task.title,
                'list_id': task.list_id,
                'completed': task.completed,
                'created_at': task.created_at,
            })
            return True
        except PyMongoError as e:
            logger.error("Failed to save task", extra={"listId": task.list_id, "error": str(e)})
            return False

    def find_by_list(self, list_id: str) -> list[Task]:
        try:
            cursor = self.collection.find({'list_id': list_id}).sort('created_at', 1)
            return [self._to_domain(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to find tasks", extra={"listId": list_id, "error": str(e)})
            return []

    def get(self, task_id: str, list_id: str) -> Task | None:
        try:
            doc = self.collection.find_one({'_id': task_id, 'list_id': list_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get task", extra={"taskId": task_id, "error": str(e)})
            return None

    def update(self, task_id: str, list_id: str, fields: dict) -> bool:
        update = {k: v for k, v in fields.items() if k in TASK_UPDATABLE_FIELDS}
        try:
            if not update:
                return self.collection.count_documents({'_id': task_id, 'list_id': list_id}) > 0
            result = self.collection.update_one(
                {'_id': task_id, 'list_id': list_id},
                {'$set': update}
            )
            return result.matched_count > 0
        except PyMongoError as e:
            logger.error("Failed to update task", extra={"taskId": task_id, "error": str(e)})
            return False

    def delete(self, task_id: str, list_id: str) -> Task | None:
        try:
            doc = self.collection.find_one_and_delete({'_id': task_id, 'list_id': list_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to delete task", extra={"taskId": task_id, "error": str(e)})
            return None

    def delete_by_list(self, list_id: str) -> int:
        try:
            result = self.collection.delete_many({'list_id': list_id})
            logger.info("Tasks deleted with list", extra={"listId": list_id, "count": result.deleted_count})
            return result.deleted_count
        except PyMongoError as e:
            logger.error("Failed to delete tasks", extra={"listId": list_id, "error": str(e)})
            return 0
