import unittest
import tempfile
import shutil
import os
import json
import dataclasses
from socialnet.core.models import Person, Group, Post, Friendship
from socialnet.core.repo import (InMemoryRepository, JsonlRepository, PersonsRepo, GroupsRepo, PostsRepo,
                                 FriendshipsRepo, person_key)
from socialnet.core.errors import DuplicateKeyError, NotFoundError

class TestInMemoryRepository(unittest.TestCase):
    def setUp(self):
        self.repo = InMemoryRepository(person_key)

    def test_save_and_find(self):
        p = Person("mario", "Mario", "Rossi")
        self.repo.save(p)
        self.assertEqual(self.repo.find_by_id("mario"), p)
        self.assertIsNone(self.repo.find_by_id("luigi"))

    def test_save_duplicate_key_raises(self):
        self.repo.save(Person("mario", "Mario", "Rossi"))
        with self.assertRaises(DuplicateKeyError):
            self.repo.save(Person("mario", "Other", "Name"))

    def test_update_and_delete_require_existing_key(self):
        with self.assertRaises(NotFoundError):
            self.repo.update(Person("mario", "Mario", "Rossi"))
        with self.assertRaises(NotFoundError):
            self.repo.delete(Person("mario", "Mario", "Rossi"))

    def test_person_is_immutable(self):
        p = Person("mario", "Mario", "Rossi")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            p.code = "luigi"

    def test_find_all_keeps_insertion_order(self):
        for code in ("c", "a", "b"):
            self.repo.save(Person(code, code, code))
        self.assertEqual([p.code for p in self.repo.find_all()], ["c", "a", "b"])


class TestJsonlRepositories(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.persons_file = os.path.join(self.temp_dir, "persons.jsonl")
        self.groups_file = os.path.join(self.temp_dir, "groups.jsonl")
        self.posts_file = os.path.join(self.temp_dir, "posts.jsonl")
        self.friendships_file = os.path.join(self.temp_dir, "friendships.jsonl")

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_persons_survive_reload(self):
        repo = PersonsRepo(self.persons_file)
        repo.save(Person("mario", "Mario", "Rossi"))
        repo.save(Person("anna", "Anna", "Neri"))
        reloaded = PersonsRepo(self.persons_file)
        self.assertEqual(reloaded.find_by_id("anna"), Person("anna", "Anna", "Neri"))
        self.assertEqual(len(reloaded.find_all()), 2)

    def test_group_update_and_delete_rewrite_file(self):
        repo = GroupsRepo(self.groups_file)
        repo.save(Group("G"))
        repo.save(Group("H"))
        repo.update(Group("G", {"b", "a"}))
        repo.delete(Group("H"))
        with open(self.groups_file, "r", encoding="utf-8") as f:
            records = [json.loads(line) for line in f if line.strip()]
        self.assertEqual(records, [{"name": "G", "member_codes": ["a", "b"]}])
        self.assertEqual(GroupsRepo(self.groups_file).find_by_id("G").member_codes, {"a", "b"})

    def test_posts_survive_reload(self):
        repo = PostsRepo(self.posts_file)
        repo.save(Post("p1", "mario", "ciao", 1234))
        self.assertEqual(PostsRepo(self.posts_file).find_by_id("p1"), Post("p1", "mario", "ciao", 1234))

    def test_failed_write_leaves_memory_untouched(self):
        def broken_record(person):
            raise TypeError("cannot serialize")

        repo = JsonlRepository(self.persons_file, key=person_key,
                               to_record=broken_record, from_record=lambda rec: Person(**rec))
        with self.assertRaises(TypeError):
            repo.save(Person("mario", "Mario", "Rossi"))
        self.assertIsNone(repo.find_by_id("mario"))
        self.assertEqual(repo.find_all(), [])

    def test_friendship_key_is_order_independent(self):
        repo = FriendshipsRepo(self.friendships_file)
        repo.save(Friendship("zoe", "adam"))
        with self.assertRaises(DuplicateKeyError):
            repo.save(Friendship("adam", "zoe"))
        reloaded = FriendshipsRepo(self.friendships_file)
        self.assertIsNotNone(reloaded.find_by_id(("adam", "zoe")))

if __name__ == '__main__':
    unittest.main()
