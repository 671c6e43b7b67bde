import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from rickmorty_viewer.cli import cli
from rickmorty_viewer.errors import ApiError
from rickmorty_viewer.models.episode import EpisodeModel
from rickmorty_viewer.storage.dao import ViewedCharacterDao
from rickmorty_viewer.viewmodels.characters import CharactersViewModel

from helpers import API, MORTY, PILOT, RICK, FakeApi, character, characters_page, fake_image_loader


class TestCli(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.api = FakeApi(
            episodes={f"{API}/episode/1": EpisodeModel.from_api(PILOT)},
            pages={
                1: characters_page([RICK], next_page=2),
                2: characters_page([MORTY], prev_page=1),
            },
            characters={1: character(RICK), 2: character(MORTY, episode=[])},
        )
        self.dao = ViewedCharacterDao.from_path(self.tmp / "viewed.db")
        self.vm = CharactersViewModel(self.api, self.dao, image_loader=fake_image_loader)

        patcher = patch.object(CharactersViewModel, "create", return_value=self.vm)
        self.create = patcher.start()
        self.addCleanup(patcher.stop)
        self.runner = CliRunner()

    def tearDown(self):
        self._tmp.cleanup()

    def invoke(self, *args):
        return self.runner.invoke(cli, ["--db", str(self.tmp / "viewed.db"), *args])

    def test_characters_lists_first_page(self):
        result = self.invoke("characters")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Rick Sanchez [Alive] Human", result.output)
        self.assertIn("first seen: Pilot", result.output)
        self.assertIn("1 characters shown", result.output)
        self.assertEqual(self.api.page_calls, [1])

    def test_characters_walks_multiple_pages(self):
        result = self.invoke("characters", "--pages", "5")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Morty Smith", result.output)
        self.assertEqual(self.api.page_calls, [1, 2])

    def test_characters_failure_exits_with_error(self):
        self.api.pages[1] = ApiError(500, "Internal Server Error")

        result = self.invoke("characters")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Failed to fetch characters: Internal Server Error", result.output)

    def test_characters_bad_page_payload_exits_with_error(self):
        self.api.pages[2] = ValueError("bad page")

        result = self.invoke("characters", "--pages", "2")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("bad page", result.output)

    def test_view_saves_character(self):
        result = self.invoke("view", "1")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("First seen in: Pilot", result.output)
        self.assertEqual(self.dao.get_viewed_character(1).image_base64, f"b64:{RICK['image']}")

    def test_view_character_without_episodes(self):
        result = self.invoke("view", "2")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("nothing saved", result.output)
        self.assertIsNone(self.dao.get_viewed_character(2))

    def test_view_unknown_character(self):
        self.api.characters[999] = ApiError(404, "Not Found")

        result = self.invoke("view", "999")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Failed to fetch character 999: Not Found", result.output)

    def test_viewed_lists_history(self):
        self.assertIn("No viewed characters yet", self.invoke("viewed").output)

        self.invoke("view", "1")
        result = self.invoke("viewed")

        self.assertIn("Rick Sanchez - first seen in Pilot", result.output)

    def test_export_writes_json(self):
        self.invoke("view", "1")
        output = self.tmp / "out" / "viewed.json"

        result = self.invoke("export", "--output", str(output), "--no-images")

        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(data[0]["name"], "Rick Sanchez")
        self.assertNotIn("image_base64", data[0])

    def test_options_are_passed_to_view_model(self):
        self.runner.invoke(cli, ["--api-url", "http://localhost:9/api/", "--db", "x.db", "viewed"])

        self.create.assert_called_with(api_url="http://localhost:9/api/", db_path="x.db")


class TestCliBrokenDatabase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.db_path = Path(self._tmp.name) / "bad.db"
        self.db_path.write_bytes(b"this is not a sqlite database\n" * 64)
        self.runner = CliRunner()

    def tearDown(self):
        self._tmp.cleanup()

    def test_viewed_reports_unreadable_database(self):
        result = self.runner.invoke(cli, ["--db", str(self.db_path), "viewed"])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error: Failed to open database", result.output)

    def test_export_reports_unreadable_database(self):
        output = Path(self._tmp.name) / "viewed.json"

        result = self.runner.invoke(cli, ["--db", str(self.db_path), "export", "--output", str(output)])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error: Failed to open database", result.output)
        self.assertFalse(output.exists())


if __name__ == "__main__":
    unittest.main()
