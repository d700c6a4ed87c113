import unittest

from projsync.errors import ValidationError
from projsync.models import FileNode
from projsync.tree.templates import DEFAULT_TEMPLATE, TEMPLATES, build_template


class TestTemplates(unittest.TestCase):
    def test_default_is_react(self) -> None:
        self.assertEqual(DEFAULT_TEMPLATE, "react")
        self.assertIn("blank", TEMPLATES)

    def test_react_template_files_at_root(self) -> None:
        nodes = build_template("react")
        self.assertEqual([n.name for n in nodes], ["App.js", "App.css", "index.js"])
        self.assertTrue(all(isinstance(n, FileNode) and n.parent_id is None for n in nodes))
        self.assertIn("function App()", nodes[0].content)

    def test_fresh_ids_each_call(self) -> None:
        first = {n.id for n in build_template("react")}
        second = {n.id for n in build_template("react")}
        self.assertFalse(first & second)

    def test_blank_and_unknown(self) -> None:
        self.assertEqual(build_template("blank"), ())
        with self.assertRaises(ValidationError):
            build_template("vue")


if __name__ == "__main__":
    unittest.main()
