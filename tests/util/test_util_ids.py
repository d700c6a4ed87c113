import unittest
import uuid

from projsync.util.ids import new_node_id, new_project_id, new_uuid


class TestUtilIds(unittest.TestCase):
    def test_new_uuid_is_valid_uuid4(self) -> None:
        value = new_uuid()
        parsed = uuid.UUID(value)
        self.assertEqual(str(parsed), value)
        self.assertEqual(parsed.version, 4)

    def test_new_node_id_is_valid_uuid4(self) -> None:
        parsed = uuid.UUID(new_node_id())
        self.assertEqual(parsed.version, 4)

    def test_new_project_id_is_hex(self) -> None:
        value = new_project_id()
        self.assertEqual(len(value), 32)
        self.assertEqual(uuid.UUID(hex=value).version, 4)

    def test_ids_are_unique(self) -> None:
        values = {new_node_id() for _ in range(50)}
        self.assertEqual(len(values), 50)


if __name__ == "__main__":
    unittest.main()
