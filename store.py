import threading
from dataclasses import dataclass


class InvalidIndexError(ValueError):
    pass


@dataclass
class Task:
    description: str
    image_url: str = ''
    completed: bool = False


class TaskStore:
    """In-memory task list guarded by a single lock.

    Positions are live offsets into the list, so a delete shifts every
    later task down by one.
    """

    def __init__(self):
        self.tasks = []
        # Re-entrant so a request can hold it while calling the methods below
        self.lock = threading.RLock()

    def __len__(self):
        with self.lock:
            return len(self.tasks)

    def add(self, description):
        task = Task(description=description)
        with self.lock:
            self.tasks.append(task)
        return task

    def all(self):
        with self.lock:
            return list(self.tasks)

    def search(self, text):
        if not text:
            return self.all()
        needle = text.lower()
        with self.lock:
            return [t for t in self.tasks if needle in t.description.lower()]

    def delete(self, index):
        with self.lock:
            if not isinstance(index, int) or isinstance(index, bool):
                raise InvalidIndexError(f'Invalid index: {index!r}')
            if index < 0 or index >= len(self.tasks):
                raise InvalidIndexError(f'Index out of range: {index}')
            return self.tasks.pop(index)
