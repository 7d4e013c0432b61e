import datetime as dt
import logging
import random
from typing import List, Optional
from core.exceptions import PBError
from core.models import BacklogItem, Block, BlockColor, LibraryBlock, Task
from core.timefmt import normalize_time, time_sort_key
from services.library_service import LibraryOps
from storage.pocketbase import PocketBaseClient

logger = logging.getLogger(__name__)


class AppController:
    """Coordinates the UI with the PocketBase backend.

    Holds the board state the window renders: the selected day, its blocks, the
    timed tasks of those blocks, the backlog and the library list. Every remote
    failure is logged and leaves that state as it was.
    """
    def __init__(self, client: PocketBaseClient, library: Optional[LibraryOps] = None,
                 rng: Optional[random.Random] = None):
        self.client = client
        self.library = library or LibraryOps(client, rng)
        self.selected_date: dt.date = dt.date.today()
        self.blocks: List[Block] = []
        self.timed_tasks: List[Task] = []
        self.backlog: List[BacklogItem] = []
        self.library_blocks: List[LibraryBlock] = []

    @property
    def date_iso(self) -> str:
        return (self.selected_date or dt.date.today()).isoformat()

    # ---- sync ----
    def select_date(self, date: dt.date) -> int:
        self.selected_date = date
        return self.refresh()

    def refresh(self) -> int:
        """Re-fetch blocks, logs and backlog for the selected day. Returns items shown."""
        try:
            rows = self.client.list_blocks(self.date_iso)
            self.blocks = [Block.from_record(r) for r in rows]
            logger.info("Fetched %s block(s) for %s", len(self.blocks), self.date_iso)
        except PBError as e:
            logger.error("Error fetching blocks: %s", e)
        self.refresh_timed_tasks()
        self.refresh_backlog()
        return len(self.blocks) + len(self.timed_tasks) + len(self.backlog)

    def refresh_timed_tasks(self) -> None:
        try:
            rows = self.client.list_timed_tasks([b.id for b in self.blocks])
        except PBError as e:
            logger.error("Error fetching tasks: %s", e)
            return
        tasks = [Task.from_record(r) for r in rows]
        self.timed_tasks = sorted(tasks, key=lambda t: time_sort_key(t.time))

    def refresh_backlog(self) -> None:
        try:
            self.backlog = [BacklogItem.from_record(r) for r in self.client.list_backlog()]
        except PBError as e:
            logger.error("Error fetching backlog items: %s", e)

    # ---- blocks ----
    def get_block(self, block_id: str) -> Optional[Block]:
        return next((b for b in self.blocks if b.id == block_id), None)

    def block_color(self, block_id: str) -> Optional[str]:
        block = self.get_block(block_id)
        return block.color if block else None

    def create_block(self, title: str, color: str) -> Optional[Block]:
        title = (title or "").strip()
        if not title:
            return None
        try:
            BlockColor.from_name(color)
        except ValueError as e:
            logger.warning("%s", e)
            return None
        x, y = self.library.random_offset()
        try:
            record = self.client.create_block(title=title, color=color, date=self.date_iso, x=x, y=y)
        except PBError as e:
            logger.error("Error inserting block: %s", e)
            return None
        block = Block.from_record(record)
        self.blocks.append(block)
        return block

    def move_block(self, block_id: str, x: float, y: float) -> bool:
        x, y = round(x), round(y)
        block = self.get_block(block_id)
        if block:
            block.x, block.y = x, y
        logger.info("Updating block position: %s -> (%s, %s)", block_id, x, y)
        try:
            self.client.update_block_position(block_id, x, y)
        except PBError as e:
            logger.error("Error updating block position: %s", e)
            return False
        return True

    def delete_block(self, block_id: str) -> bool:
        # tasks first; a failure on the block delete leaves it in place without tasks
        try:
            self.client.delete_tasks_for_block(block_id)
        except PBError as e:
            logger.error("Error deleting tasks: %s", e)
            return False
        try:
            self.client.delete_block(block_id)
        except PBError as e:
            logger.error("Error deleting block: %s", e)
            return False
        self.blocks = [b for b in self.blocks if b.id != block_id]
        self.refresh_timed_tasks()
        return True

    def open_block(self, block: Block) -> "BlockSession":
        session = BlockSession(self, block)
        session.load()
        return session

    # ---- library ----
    def load_library(self) -> List[LibraryBlock]:
        try:
            self.library_blocks = [LibraryBlock.from_record(r) for r in self.client.list_library_blocks()]
        except PBError as e:
            logger.error("Error fetching library blocks: %s", e)
        return self.library_blocks

    def create_from_library(self, library_block_id: str) -> Optional[Block]:
        template = next((lb for lb in self.library_blocks if lb.id == library_block_id), None)
        if template is None:
            return None
        try:
            record = self.library.instantiate(template, self.date_iso)
        except PBError as e:
            logger.error("Error creating block from library: %s", e)
            return None
        block = Block.from_record(record)
        self.blocks.append(block)
        self.refresh_timed_tasks()
        return block

    def delete_library_block(self, library_block_id: str) -> bool:
        try:
            self.client.delete_library_tasks_for_block(library_block_id)
            self.client.delete_library_block(library_block_id)
        except PBError as e:
            logger.error("Error deleting library block: %s", e)
            return False
        self.library_blocks = [lb for lb in self.library_blocks if lb.id != library_block_id]
        return True

    # ---- backlog ----
    def add_backlog_item(self, title: str) -> Optional[BacklogItem]:
        if not (title or "").strip():
            return None
        try:
            record = self.client.create_backlog_item(title)
        except PBError as e:
            logger.error("Error creating backlog item: %s", e)
            return None
        item = BacklogItem.from_record(record)
        logger.info("Backlog item created: %s", item.id)
        self.backlog.append(item)
        return item

    def delete_backlog_item(self, item_id: str) -> bool:
        try:
            self.client.delete_backlog_item(item_id)
        except PBError as e:
            logger.error("Error deleting backlog item: %s", e)
            return False
        self.backlog = [i for i in self.backlog if i.id != item_id]
        return True


class BlockSession:
    """Task list of one open block (the block detail dialog)."""
    def __init__(self, controller: AppController, block: Block):
        self.controller = controller
        self.client = controller.client
        self.block = block
        self.tasks: List[Task] = []
        self.editing_task_id: Optional[str] = None

    def load(self) -> List[Task]:
        try:
            self.tasks = [Task.from_record(r) for r in self.client.list_tasks(self.block.id)]
        except PBError as e:
            logger.error("Error fetching tasks: %s", e)
        return self.tasks

    def get_task(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)

    def _tasks_changed(self):
        self.controller.refresh_timed_tasks()

    @staticmethod
    def _entry_time(value: Optional[str]):
        try:
            return True, normalize_time(value)
        except ValueError as e:
            logger.warning("%s", e)
            return False, None

    def add_task(self, title: str, time: Optional[str] = None) -> Optional[Task]:
        if not (title or "").strip():
            return None
        ok, time = self._entry_time(time)
        if not ok:
            return None
        try:
            record = self.client.create_task(block_id=self.block.id, title=title, time=time, completed=False)
        except PBError as e:
            logger.error("Error creating task: %s", e)
            return None
        task = Task.from_record(record)
        self.tasks.append(task)
        self._tasks_changed()
        return task

    def begin_edit(self, task_id: str) -> Optional[Task]:
        task = self.get_task(task_id)
        self.editing_task_id = task.id if task else None
        return task

    def cancel_edit(self):
        self.editing_task_id = None

    def update_task(self, title: str, time: Optional[str] = None) -> Optional[Task]:
        task = self.get_task(self.editing_task_id) if self.editing_task_id else None
        if task is None or not (title or "").strip():
            return None
        ok, time = self._entry_time(time)
        if not ok:
            return None
        try:
            self.client.patch_task(task.id, title=title, time=time)
        except PBError as e:
            logger.error("Error updating task: %s", e)
            return None
        task.title, task.time = title, time
        self.editing_task_id = None
        self._tasks_changed()
        return task

    def toggle_task(self, task_id: str) -> Optional[Task]:
        task = self.get_task(task_id)
        if task is None:
            return None
        try:
            self.client.patch_task(task.id, completed=not task.completed)
        except PBError as e:
            logger.error("Error updating task: %s", e)
            return None
        task.completed = not task.completed
        self._tasks_changed()
        return task

    def delete_task(self, task_id: str) -> bool:
        try:
            self.client.delete_task(task_id)
        except PBError as e:
            logger.error("Error deleting task: %s", e)
            return False
        self.tasks = [t for t in self.tasks if t.id != task_id]
        if self.editing_task_id == task_id:
            self.editing_task_id = None
        self._tasks_changed()
        return True

    def save_to_library(self) -> Optional[LibraryBlock]:
        try:
            record = self.controller.library.save_block(self.block, self.tasks)
        except PBError as e:
            logger.error("Error saving block to library: %s", e)
            return None
        return LibraryBlock.from_record(record)
