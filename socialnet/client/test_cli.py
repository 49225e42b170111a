import unittest
import tempfile
import shutil
from typer.testing import CliRunner
from socialnet.client.cli import app

class TestCli(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.runner = CliRunner()

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def invoke(self, *args):
        return self.runner.invoke(app, ["--data-dir", self.temp_dir, *args])

    def test_people_and_friends(self):
        self.assertEqual(self.invoke("add-person", "a", "Anna", "Neri").exit_code, 0)
        self.assertEqual(self.invoke("add-person", "b", "Bruno", "Gialli").exit_code, 0)
        self.assertEqual(self.invoke("befriend", "a", "b").exit_code, 0)

        result = self.invoke("person", "a")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("a Anna Neri", result.output)

        result = self.invoke("friends", "b")
        self.assertEqual(result.output.split(), ["a"])

        result = self.invoke("most-friends")
        self.assertEqual(result.output.strip(), "a")

    def test_unknown_person_exits_with_error(self):
        result = self.invoke("befriend", "ghost", "nobody")
        self.assertEqual(result.exit_code, 1)

    def test_groups_and_feed(self):
        self.invoke("add-person", "a", "Anna", "Neri")
        self.invoke("add-person", "b", "Bruno", "Gialli")
        self.invoke("befriend", "a", "b")
        self.invoke("add-group", "G")
        self.invoke("join", "b", "G")
        self.assertEqual(self.invoke("rename-group", "G", "H").exit_code, 0)
        self.assertEqual(self.invoke("groups").output.split(), ["H"])
        self.assertEqual(self.invoke("members", "H").output.split(), ["b"])
        self.assertEqual(self.invoke("add-group", "H").exit_code, 1)

        post_id = self.invoke("post", "b", "hello").output.strip()
        self.assertEqual(self.invoke("post-content", post_id).output.strip(), "hello")
        result = self.invoke("friend-posts", "a", "--page", "1", "--page-length", "5")
        self.assertEqual(result.output.split(), [f"b:{post_id}"])
        self.assertEqual(self.invoke("user-posts", "b").output.split(), [post_id])

    def test_ranking_on_empty_data(self):
        self.assertEqual(self.invoke("largest-group").output.strip(), "-")

if __name__ == '__main__':
    unittest.main()
