import unittest

import pb_bootstrap


def field_names(spec):
    return [f["name"] for f in spec["schema"]]


class TestCollectionSpecs(unittest.TestCase):
    def test_blocks(self) -> None:
        spec = pb_bootstrap.spec_blocks()
        self.assertEqual(field_names(spec), ["title", "color", "date", "x", "y"])
        color = spec["schema"][1]
        self.assertEqual(color["options"]["values"], ["Red", "Green", "Blue", "Yellow", "Purple"])

    def test_task_collections_point_at_their_owner(self) -> None:
        for spec, owner in ((pb_bootstrap.spec_tasks("col_blocks"), "col_blocks"),
                            (pb_bootstrap.spec_library_tasks("col_lib"), "col_lib")):
            self.assertEqual(field_names(spec), ["block_id", "title", "time", "completed"])
            relation = spec["schema"][0]
            self.assertEqual(relation["options"]["collectionId"], owner)
            self.assertFalse(relation["options"]["cascadeDelete"])
            self.assertFalse(spec["schema"][2]["required"])

    def test_flat_collections(self) -> None:
        self.assertEqual(field_names(pb_bootstrap.spec_library_blocks()), ["title", "color"])
        self.assertEqual(field_names(pb_bootstrap.spec_backlog()), ["title"])

    def test_upsert_creates_when_missing(self) -> None:
        pb = FakeAdmin(existing=None)
        pb_bootstrap.upsert_collection(pb, pb_bootstrap.spec_backlog())
        self.assertEqual(pb.created, ["backlog"])
        self.assertEqual(pb.updated, [])

    def test_upsert_patches_existing_by_id(self) -> None:
        pb = FakeAdmin(existing={"id": "abc", "name": "backlog"})
        pb_bootstrap.upsert_collection(pb, pb_bootstrap.spec_backlog())
        self.assertEqual(pb.updated, [("abc", "abc")])


class FakeAdmin:
    def __init__(self, existing):
        self.existing = existing
        self.created = []
        self.updated = []

    def get_collection(self, name):
        return self.existing

    def create_collection(self, payload):
        self.created.append(payload["name"])
        return payload

    def update_collection(self, cid, payload):
        self.updated.append((cid, payload["id"]))
        return payload


if __name__ == "__main__":
    unittest.main()
