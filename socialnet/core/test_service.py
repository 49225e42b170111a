import unittest
import tempfile
import shutil
from socialnet.core.service import SocialService
from socialnet.core.errors import NotFoundError, AlreadyExistsError

class TestSocialService(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_add_and_get_person(self):
        service = SocialService.in_memory()
        service.add_person("mrossi", "Mario", "Rossi")
        self.assertEqual(service.get_person("mrossi"), "mrossi Mario Rossi")
        with self.assertRaises(AlreadyExistsError):
            service.add_person("mrossi", "Marco", "Rossi")
        with self.assertRaises(NotFoundError):
            service.get_person("ghost")

    def test_state_survives_reopening_directory(self):
        service = SocialService.from_directory(self.temp_dir)
        service.add_person("a", "Anna", "Neri")
        service.add_person("b", "Bruno", "Gialli")
        service.add_friendship("a", "b")
        service.add_group("G")
        service.add_person_to_group("a", "G")
        service.update_group_name("G", "G2")
        pid = service.post("b", "first")

        reopened = SocialService.from_directory(self.temp_dir)
        self.assertEqual(reopened.list_of_friends("a"), ["b"])
        self.assertEqual(reopened.list_of_groups(), {"G2"})
        self.assertEqual(reopened.list_of_people_in_group("G2"), ["a"])
        self.assertEqual(reopened.get_post_content(pid), "first")
        self.assertEqual(reopened.get_paginated_friend_posts("a", 1, 5), [f"b:{pid}"])

if __name__ == '__main__':
    unittest.main()
