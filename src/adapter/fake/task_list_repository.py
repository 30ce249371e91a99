"""In-memory implementations of TaskListRepository and TaskRepository for testing."""

from dataclasses import replace

from domain.model.task_list import Task, TaskList


class FakeTaskListRepository:
    def __init__(self):
        self.store: dict[str, TaskList] = {}

    def save(self, task_list: TaskList) -> bool:
        self.store[task_list.id] = task_list
        return True

    def find_by_user(self, user_id: str) -> list[TaskList]:
        lists = [tl for tl in self.store.values() if tl.user_id == user_id]
        return sorted(lists, key=lambda tl: tl.created_at)

    def get_owned(self, list_id: str, user_id: str) -> TaskList | None:
        task_list = self.store.get(list_id)
        if task_list and task_list.user_id == user_id:
            return task_list
        return None

    def update_title(self, list_id: str, user_id: str, title: str) -> bool:
        task_list = self.get_owned(list_id, user_id)
        if not task_list:
            return False
        self.store[list_id] = replace(task_list, title=title)
        return True

    def delete(self, list_id: str, user_id: str) -> TaskList | None:
        if not self.get_owned(list_id, user_id):
            return None
        return self.store.pop(list_id)


class FakeTaskRepository:
    def __init__(self):
        self.store: dict[str, Task] = {}

    def save(self, task: Task) -> bool:
        self.store[task.id] = task
        return True

    def find_by_list(self, list_id: str) -> list[Task]:
        tasks = [t for t in self.store.values() if t.list_id == list_id]
        return sorted(tasks, key=lambda t: t.created_at)

    def get(self, task_id: str, list_id: str) -> Task | None:
        task = self.store.get(task_id)
        if task and task.list_id == list_id:
            return task
        return None

    def update(self, task_id: str, list_id: str, fields: dict) -> bool:
        task = self.get(task_id, list_id)
        if not task:
            return False
        allowed = {k: v for k, v in fields.items() if k in ('title', 'completed')}
        self.store[task_id] = replace(task, **allowed)
        return True

    def delete(self, task_id: str, list_id: str) -> Task | None:
        if not self.get(task_id, list_id):
            return None
        return self.store.pop(task_id)

    def delete_by_list(self, list_id: str) -> int:
        doomed = [tid for tid, t in self.store.items() if t.list_id == list_id]
        for tid in doomed:
            del self.store[tid]
        return len(doomed)
