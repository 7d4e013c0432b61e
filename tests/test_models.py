import unittest

from core.models import BacklogItem, Block, BlockColor, LibraryTask, Task


class TestBlockColor(unittest.TestCase):
    def test_names_and_values(self) -> None:
        self.assertEqual([c.label for c in BlockColor], ["Red", "Green", "Blue", "Yellow", "Purple"])
        self.assertEqual(BlockColor.from_name("Purple").hex, "#E6B3FF")

    def test_unknown_color(self) -> None:
        with self.assertRaises(ValueError):
            BlockColor.from_name("Unknown")
        self.assertEqual(BlockColor.hex_for("Unknown"), "#FFFFFF")
        self.assertEqual(BlockColor.hex_for(None, default="#000"), "#000")


class TestRecords(unittest.TestCase):
    def test_block_from_record(self) -> None:
        block = Block.from_record({"id": "b1", "title": "Gym", "color": "Red",
                                   "date": "2024-05-17", "x": 12.0, "y": None, "created": "..."})
        self.assertEqual(block, Block(id="b1", title="Gym", color="Red", date="2024-05-17", x=12, y=0))

    def test_empty_time_reads_as_none(self) -> None:
        task = Task.from_record({"id": "t1", "block_id": "b1", "title": "x", "time": "", "completed": False})
        self.assertIsNone(task.time)
        lib = LibraryTask.from_record({"id": "l1", "block_id": "lb1", "title": "x", "time": "08:00"})
        self.assertEqual((lib.time, lib.completed), ("08:00", False))

    def test_task_payload_has_no_id(self) -> None:
        task = Task(id="t1", block_id="b1", title="x", time="09:00", completed=True)
        self.assertEqual(task.to_payload(),
                         {"block_id": "b1", "title": "x", "time": "09:00", "completed": True})

    def test_library_task_copy_to_block(self) -> None:
        lib = LibraryTask.from_record({"id": "l1", "block_id": "lb1", "title": "plan", "time": ""})
        self.assertEqual(lib.copy_to("b9"),
                         {"block_id": "b9", "title": "plan", "time": None, "completed": False})

    def test_backlog_item(self) -> None:
        self.assertEqual(BacklogItem.from_record({"id": "i1", "title": "call"}).title, "call")


if __name__ == "__main__":
    unittest.main()
