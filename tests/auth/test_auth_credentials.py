import json
import tempfile
import unittest
from pathlib import Path

from projsync.auth import DEFAULT_SCOPES, DriveAuth, load_credentials
from projsync.errors import AuthError


class TestDriveAuth(unittest.TestCase):
    def test_valid(self) -> None:
        auth = DriveAuth(client_secrets_file="/tmp/client.json", token_file="/tmp/token.json")
        self.assertEqual(auth.scopes, DEFAULT_SCOPES)

    def test_missing_fields(self) -> None:
        with self.assertRaises(ValueError):
            DriveAuth(client_secrets_file="", token_file="/tmp/token.json")
        with self.assertRaises(ValueError):
            DriveAuth(client_secrets_file="/tmp/client.json", token_file="  ")
        with self.assertRaises(ValueError):
            DriveAuth(client_secrets_file="/tmp/c.json", token_file="/tmp/t.json", scopes=())


class TestLoadCredentials(unittest.TestCase):
    def test_loads_token_file_without_refresh(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            token_file = tmp_path / "token.json"
            token_payload = {
                "token": "fake-token",
                "refresh_token": "fake-refresh-token",
                "token_uri": "https://oauth2.googleapis.com/token",
                "client_id": "fake-client-id",
                "client_secret": "fake-client-secret",
                "scopes": list(DEFAULT_SCOPES),
                "type": "authorized_user",
            }
            token_file.write_text(json.dumps(token_payload), encoding="utf-8")

            auth = DriveAuth(
                client_secrets_file=str(tmp_path / "client_secrets.json"),
                token_file=str(token_file),
            )
            creds = load_credentials(auth, interactive=False)

            self.assertEqual(creds.token, "fake-token")
            self.assertEqual(creds.refresh_token, "fake-refresh-token")

    def test_non_interactive_without_token_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            auth = DriveAuth(
                client_secrets_file=str(Path(tmp) / "client_secrets.json"),
                token_file=str(Path(tmp) / "token.json"),
            )
            with self.assertRaises(AuthError):
                load_credentials(auth, interactive=False)

    def test_unreadable_token_file_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            token_file = Path(tmp) / "token.json"
            token_file.write_text("{}", encoding="utf-8")
            auth = DriveAuth(
                client_secrets_file=str(Path(tmp) / "client_secrets.json"),
                token_file=str(token_file),
            )
            with self.assertRaises(AuthError):
                load_credentials(auth, interactive=False)


if __name__ == "__main__":
    unittest.main()
