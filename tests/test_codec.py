import json
import unittest
from datetime import datetime, timezone

from projsync.codec import (
    FORMAT_NAME,
    export_json,
    import_json,
    node_from_dict,
    project_from_document,
    project_to_document,
)
from projsync.errors import ValidationError
from projsync.models import FileNode, FolderNode, Project, ProjectSettings, Theme


def _project() -> Project:
    return Project(
        id="p1",
        name="Demo",
        owner_id="u1",
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2025, 1, 2, tzinfo=timezone.utc),
        description="desc",
        tags=("react",),
        is_public=True,
        settings=ProjectSettings(theme=Theme.DARK, autosave=False),
        files=(
            FolderNode(id="F1", name="src"),
            FileNode(id="N1", name="a.js", parent_id="F1", content="let a = 1;"),
            FileNode(id="N2", name="README.md", content=""),
        ),
        version=4,
    )


class TestCodec(unittest.TestCase):
    def test_document_shape(self) -> None:
        doc = project_to_document(_project())
        self.assertEqual(doc["ownerId"], "u1")
        self.assertTrue(doc["isPublic"])
        self.assertEqual(doc["settings"], {"theme": "dark", "autosave": False})
        self.assertEqual(doc["files"][1]["parentId"], "F1")
        self.assertEqual(doc["files"][0]["type"], "folder")
        self.assertNotIn("children", doc["files"][0])
        self.assertEqual(doc["updatedAt"], "2025-01-02T00:00:00.000000Z")
        self.assertEqual(doc["version"], 4)

    def test_export_import_preserves_nodes(self) -> None:
        original = _project()
        restored = import_json(export_json(original))

        def shape(p):
            return [(n.id, n.name, n.content, n.kind, n.parent_id) for n in p.files]

        self.assertEqual(shape(restored), shape(original))
        self.assertEqual(restored.settings, original.settings)
        self.assertEqual(restored.tags, original.tags)

    def test_export_envelope(self) -> None:
        payload = json.loads(export_json(_project()))
        self.assertEqual(payload["format"], FORMAT_NAME)
        self.assertEqual(payload["formatVersion"], 1)
        self.assertEqual(payload["project"]["id"], "p1")

    def test_import_accepts_bare_document(self) -> None:
        text = json.dumps(project_to_document(_project()))
        self.assertEqual(import_json(text).id, "p1")

    def test_import_rejects_bad_json_and_version(self) -> None:
        with self.assertRaises(ValidationError):
            import_json("{not json")
        with self.assertRaises(ValidationError):
            import_json(json.dumps({"format": FORMAT_NAME, "formatVersion": 99, "project": {}}))

    def test_embedded_children_are_ignored(self) -> None:
        node = node_from_dict({
            "id": "F1",
            "name": "src",
            "type": "folder",
            "parentId": None,
            "children": [{"id": "ghost", "name": "x", "type": "file"}],
        })
        self.assertIsInstance(node, FolderNode)

        doc = project_to_document(_project())
        doc["files"][0]["children"] = [{"id": "ghost"}]
        project = project_from_document(doc)
        self.assertIsNone(project.find("ghost"))

    def test_rejects_invalid_tree(self) -> None:
        doc = project_to_document(_project())
        doc["files"][1]["parentId"] = "N2"
        with self.assertRaises(ValidationError):
            project_from_document(doc)

        doc = project_to_document(_project())
        doc["files"].append(dict(doc["files"][1]))
        with self.assertRaises(ValidationError):
            project_from_document(doc)

    def test_rejects_bad_fields(self) -> None:
        doc = project_to_document(_project())
        doc["files"][1]["type"] = "symlink"
        with self.assertRaises(ValidationError):
            project_from_document(doc)

        doc = project_to_document(_project())
        doc["settings"]["theme"] = "neon"
        with self.assertRaises(ValidationError):
            project_from_document(doc)

        doc = project_to_document(_project())
        doc["createdAt"] = "yesterday"
        with self.assertRaises(ValidationError):
            project_from_document(doc)

    def test_updated_at_clamped_to_created_at(self) -> None:
        doc = project_to_document(_project())
        doc["updatedAt"] = "2024-01-01T00:00:00Z"
        project = project_from_document(doc)
        self.assertEqual(project.updated_at, project.created_at)

    def test_empty_parent_id_means_root(self) -> None:
        node = node_from_dict({"id": "N", "name": "n", "type": "file", "parentId": ""})
        self.assertIsNone(node.parent_id)


if __name__ == "__main__":
    unittest.main()
