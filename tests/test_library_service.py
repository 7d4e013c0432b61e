import random
import unittest

from core.models import Block, LibraryBlock, Task
from services.library_service import LibraryOps
from tests.fakes import FakeClient


class TestLibraryOps(unittest.TestCase):
    def setUp(self) -> None:
        self.client = FakeClient()
        self.ops = LibraryOps(self.client, rng=random.Random(3))
        self.block = Block(id="b0", title="Evening", color="Purple", date="2024-05-17", x=5, y=5)
        self.tasks = [
            Task(id="t1", block_id="b0", title="dishes", time="20:00"),
            Task(id="t2", block_id="b0", title="read", time=None, completed=True),
        ]

    def test_random_offset_range(self) -> None:
        for _ in range(500):
            x, y = self.ops.random_offset()
            self.assertTrue(-100 <= x <= 99 and -100 <= y <= 99)

    def test_save_block_copies_tasks(self) -> None:
        lib = self.ops.save_block(self.block, self.tasks)
        self.assertEqual((lib["title"], lib["color"]), ("Evening", "Purple"))
        rows = self.client.tables["library_tasks"]
        self.assertEqual([(r["block_id"], r["title"], r["completed"]) for r in rows],
                         [(lib["id"], "dishes", False), (lib["id"], "read", True)])
        self.assertEqual(self.client.calls, ["create_library_block", "create_library_tasks"])

    def test_instantiate_creates_block_and_tasks(self) -> None:
        lib = self.ops.save_block(self.block, self.tasks)
        template = LibraryBlock.from_record(lib)
        new_block = self.ops.instantiate(template, "2024-06-01")
        self.assertEqual((new_block["title"], new_block["color"], new_block["date"]),
                         ("Evening", "Purple", "2024-06-01"))
        copied = [Task.from_record(r) for r in self.client.list_tasks(new_block["id"])]
        self.assertEqual([(t.title, t.time, t.completed) for t in copied],
                         [("dishes", "20:00", False), ("read", None, True)])

    def test_instantiate_normalizes_template_rows(self) -> None:
        self.client.tables["library_tasks"].append({"id": "lt1", "block_id": "lb1", "title": "walk", "time": ""})
        template = LibraryBlock(id="lb1", title="Outdoors", color="Green")
        new_block = self.ops.instantiate(template, "2024-06-02")
        copied = self.client.tables["tasks"]
        self.assertEqual(len(copied), 1)
        self.assertEqual((copied[0]["block_id"], copied[0]["title"], copied[0]["completed"]),
                         (new_block["id"], "walk", False))
        self.assertNotEqual(copied[0]["id"], "lt1")
        self.assertIsNone(Task.from_record(copied[0]).time)

    def test_instantiate_keeps_block_when_task_copy_fails(self) -> None:
        template = LibraryBlock.from_record(self.ops.save_block(self.block, self.tasks))
        self.client.fail_on.add("create_tasks")
        with self.assertLogs("services.library_service", level="ERROR"):
            new_block = self.ops.instantiate(template, "2024-06-01")
        self.assertEqual(len(self.client.tables["blocks"]), 1)
        self.assertEqual(self.client.list_tasks(new_block["id"]), [])

    def test_instantiate_keeps_block_when_template_read_fails(self) -> None:
        template = LibraryBlock(id="lb9", title="Gone", color="Red")
        self.client.fail_on.add("list_library_tasks")
        with self.assertLogs("services.library_service", level="ERROR"):
            new_block = self.ops.instantiate(template, "2024-06-01")
        self.assertEqual(new_block["title"], "Gone")
        self.assertNotIn("create_tasks", self.client.calls)


if __name__ == "__main__":
    unittest.main()
