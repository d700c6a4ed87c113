import unittest
from dataclasses import replace

from projsync.errors import AccessDeniedError, AuthError, ConflictError
from projsync.server import InMemoryProjectRepository, ProjectService
from projsync.sync.remote import ServiceRemoteStore
from projsync.tree import new_project


class TestServiceRemoteStore(unittest.TestCase):
    def setUp(self) -> None:
        self.service = ProjectService(InMemoryProjectRepository())
        self.remote = ServiceRemoteStore(self.service, "u1")

    def test_first_push_creates_with_same_id(self) -> None:
        project = new_project("Demo", "u1")
        stored = self.remote.push(project, expected_version=0)

        self.assertEqual(stored.id, project.id)
        self.assertEqual(stored.version, 1)
        self.assertEqual([n.id for n in stored.files], [n.id for n in project.files])
        self.assertEqual(self.remote.fetch(project.id).name, "Demo")

    def test_push_updates_with_version_check(self) -> None:
        project = new_project("Demo", "u1")
        self.remote.push(project, expected_version=0)

        renamed = replace(project, name="Renamed", version=1)
        stored = self.remote.push(renamed, expected_version=1)
        self.assertEqual(stored.version, 2)
        self.assertEqual(stored.name, "Renamed")

        with self.assertRaises(ConflictError):
            self.remote.push(renamed, expected_version=1)

    def test_push_without_version_overwrites(self) -> None:
        project = new_project("Demo", "u1")
        self.remote.push(project, expected_version=0)
        self.remote.push(project, expected_version=1)
        stored = self.remote.push(replace(project, name="Forced"), expected_version=None)
        self.assertEqual(stored.name, "Forced")
        self.assertEqual(stored.version, 3)

    def test_push_recreates_missing_remote_copy(self) -> None:
        project = new_project("Demo", "u1")
        with self.assertLogs("projsync.sync.remote", level="INFO"):
            stored = self.remote.push(project, expected_version=4)
        self.assertEqual(stored.version, 1)

    def test_first_push_of_existing_id_conflicts(self) -> None:
        project = new_project("Demo", "u1")
        self.remote.push(project, expected_version=0)
        with self.assertRaises(ConflictError):
            self.remote.push(project, expected_version=0)

    def test_other_users_are_rejected(self) -> None:
        project = new_project("Demo", "u1")
        self.remote.push(project, expected_version=0)

        with self.assertRaises(AccessDeniedError):
            ServiceRemoteStore(self.service, "u2").push(project, expected_version=1)
        with self.assertRaises(AuthError):
            ServiceRemoteStore(self.service, None).push(project, expected_version=1)

    def test_delete(self) -> None:
        project = new_project("Demo", "u1")
        self.remote.push(project, expected_version=0)
        self.remote.delete(project.id)
        self.assertEqual(self.service.list("u1").total, 0)


if __name__ == "__main__":
    unittest.main()
