import unittest

from projsync.errors import (
    DuplicateIdError,
    InvalidParentError,
    NotFoundError,
    ValidationError,
)
from projsync.models import FileNode, FolderNode
from projsync.tree.validators import (
    validate_content,
    validate_description,
    validate_exists,
    validate_move_no_cycle,
    validate_name,
    validate_node,
    validate_tags,
    validate_tree,
)


class TestValidators(unittest.TestCase):
    def test_validate_name(self) -> None:
        self.assertEqual(validate_name("  x "), "x")
        self.assertEqual(validate_name("y" * 100), "y" * 100)
        with self.assertRaises(ValidationError):
            validate_name("y" * 101)
        with self.assertRaises(ValidationError):
            validate_name("")
        with self.assertRaises(ValidationError):
            validate_name(None)  # type: ignore[arg-type]

    def test_validate_exists(self) -> None:
        nodes = {"a": FileNode(id="a", name="a")}
        self.assertEqual(validate_exists(nodes, "a", "Node").name, "a")
        with self.assertRaises(NotFoundError):
            validate_exists(nodes, "b", "Node")

    def test_validate_node_duplicate_and_parent(self) -> None:
        existing = {
            "d": FolderNode(id="d", name="d"),
            "f": FileNode(id="f", name="f"),
        }
        with self.assertRaises(DuplicateIdError):
            validate_node(FileNode(id="f", name="again"), existing)
        with self.assertRaises(InvalidParentError):
            validate_node(FileNode(id="g", name="g", parent_id="f"), existing)
        with self.assertRaises(InvalidParentError):
            validate_node(FolderNode(id="h", name="h", parent_id="h"), existing)
        validate_node(FileNode(id="g", name="g", parent_id="d"), existing)

    def test_validate_move_no_cycle(self) -> None:
        nodes = {
            "a": FolderNode(id="a", name="a"),
            "b": FolderNode(id="b", name="b", parent_id="a"),
            "c": FolderNode(id="c", name="c", parent_id="b"),
        }
        with self.assertRaises(InvalidParentError):
            validate_move_no_cycle(nodes, "a", "c")
        validate_move_no_cycle(nodes, "c", "a")
        validate_move_no_cycle(nodes, "a", None)

    def test_validate_tree_accepts_parent_after_child(self) -> None:
        indexed = validate_tree([
            FileNode(id="f", name="f", parent_id="d"),
            FolderNode(id="d", name="d"),
        ])
        self.assertEqual(set(indexed), {"f", "d"})

    def test_validate_tree_rejects_cycle(self) -> None:
        with self.assertRaises(InvalidParentError):
            validate_tree([
                FolderNode(id="a", name="a", parent_id="b"),
                FolderNode(id="b", name="b", parent_id="a"),
            ])

    def test_validate_tree_rejects_orphans_and_duplicates(self) -> None:
        with self.assertRaises(InvalidParentError):
            validate_tree([FileNode(id="f", name="f", parent_id="gone")])
        with self.assertRaises(DuplicateIdError):
            validate_tree([FileNode(id="f", name="f"), FolderNode(id="f", name="d")])

    def test_validate_tags(self) -> None:
        self.assertEqual(validate_tags([" a ", "b", "a"]), ("a", "b"))
        with self.assertRaises(ValidationError):
            validate_tags(["x" * 21])
        with self.assertRaises(ValidationError):
            validate_tags([""])

    def test_validate_description(self) -> None:
        self.assertIsNone(validate_description(None))
        self.assertEqual(validate_description(" hi "), "hi")
        with self.assertRaises(ValidationError):
            validate_description("x" * 501)

    def test_validate_content(self) -> None:
        self.assertEqual(validate_content(None), "")
        self.assertEqual(validate_content("body"), "body")
        with self.assertRaises(ValidationError) as ctx:
            validate_content(3, "n1")
        self.assertEqual(ctx.exception.details["id"], "n1")


if __name__ == "__main__":
    unittest.main()
