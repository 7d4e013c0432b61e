import logging
import random
from typing import Dict, List, Optional, Tuple
from core.exceptions import PBError
from core.models import Block, LibraryBlock, LibraryTask, Task
from storage.pocketbase import PocketBaseClient

logger = logging.getLogger(__name__)

OFFSET_RANGE = 200


class LibraryOps:
    """Library templates: copy a block and its tasks into the library and back onto a day.

    Every step is its own request. Nothing is wrapped in a transaction, so a failure
    partway leaves whatever was already written.
    """
    def __init__(self, client: PocketBaseClient, rng: Optional[random.Random] = None):
        self.client = client
        self.rng = rng or random.Random()

    def random_offset(self) -> Tuple[int, int]:
        half = OFFSET_RANGE // 2
        return (self.rng.randrange(OFFSET_RANGE) - half, self.rng.randrange(OFFSET_RANGE) - half)

    def save_block(self, block: Block, tasks: List[Task]) -> Dict:
        lib = self.client.create_library_block(title=block.title, color=block.color)
        rows = [dict(t.to_payload(), block_id=lib["id"]) for t in tasks]
        self.client.create_library_tasks(rows)
        logger.info("Saved block %r to library with %s task(s)", block.title, len(rows))
        return lib

    def instantiate(self, template: LibraryBlock, date_iso: str) -> Dict:
        x, y = self.random_offset()
        new_block = self.client.create_block(title=template.title, color=template.color,
                                             date=date_iso, x=x, y=y)
        # from here on the block exists; later failures are logged, the block is still returned
        try:
            lib_tasks = self.client.list_library_tasks(template.id)
        except PBError as e:
            logger.error("Error fetching library tasks for %s: %s", template.id, e)
            return new_block
        rows = [LibraryTask.from_record(r).copy_to(new_block["id"]) for r in lib_tasks]
        try:
            self.client.create_tasks(rows)
        except PBError as e:
            logger.error("Error inserting tasks from library: %s", e)
            return new_block
        logger.info("Created block %r on %s from library (%s task(s))", template.title, date_iso, len(rows))
        return new_block
