import os
from typing import Callable, List, Optional, Set
from .models import Person, Group, Post, Friendship
from .errors import SocialError, AlreadyExistsError, NotFoundError
from .repo import (Repository, InMemoryRepository, PersonsRepo, GroupsRepo, PostsRepo,
                   FriendshipsRepo, person_key, group_key, post_key, friendship_key)
from .graph import SocialGraph
from .feed import Feed
from ..utils.logger import setup_logger

logger = setup_logger('socialnet.service')

class SocialService:
    """Facade for the social network.

    Resolves entities through the injected repositories and delegates to
    the graph and feed engines. Every operation returns plain values:
    strings, collections of strings or "<author>:<post>" keys.
    """

    def __init__(self, persons: Repository[str, Person], groups: Repository[str, Group],
                 posts: Repository[str, Post], friendships: Repository[tuple, Friendship],
                 clock: Optional[Callable[[], int]] = None,
                 id_factory: Optional[Callable[[], str]] = None):
        """Initialize the facade with its repositories.

        Args:
            persons (Repository): Person repository keyed by code
            groups (Repository): Group repository keyed by name
            posts (Repository): Post repository keyed by post id
            friendships (Repository): Friendship edge repository
            clock (Callable, optional): Millisecond clock used to stamp posts
            id_factory (Callable, optional): Generator of post ids

        Attributes:
            persons: Person repository instance
            graph: Friendship and group engine
            feed: Post and feed engine
        """
        self.persons = persons
        self.graph = SocialGraph(persons, groups, friendships)
        self.feed = Feed(persons, posts, self.graph, clock=clock, id_factory=id_factory)

    @classmethod
    def in_memory(cls, **kwargs) -> "SocialService":
        """Build a service over fresh in-memory repositories."""
        return cls(
            InMemoryRepository(person_key),
            InMemoryRepository(group_key),
            InMemoryRepository(post_key),
            InMemoryRepository(friendship_key),
            **kwargs,
        )

    @classmethod
    def from_directory(cls, data_dir: str, **kwargs) -> "SocialService":
        """Build a service over JSONL repositories stored in data_dir."""
        return cls(
            PersonsRepo(os.path.join(data_dir, "persons.jsonl")),
            GroupsRepo(os.path.join(data_dir, "groups.jsonl")),
            PostsRepo(os.path.join(data_dir, "posts.jsonl")),
            FriendshipsRepo(os.path.join(data_dir, "friendships.jsonl")),
            **kwargs,
        )

    # Accounts

    def add_person(self, code: str, name: str, surname: str) -> None:
        """Create a new account.

        Raises:
            AlreadyExistsError: If the code is already taken
        """
        if self.persons.find_by_id(code) is not None:
            logger.error(f"AddPerson: Person '{code}' registration failed (code already exists)")
            raise AlreadyExistsError(f"Person {code} already exists")
        self.persons.save(Person(code=code, name=name, surname=surname))
        logger.info(f"AddPerson: Person '{code}' registered successfully")

    def get_person(self, code: str) -> str:
        """Return "<code> <name> <surname>" for an account.

        Raises:
            NotFoundError: If the code does not exist
        """
        person = self.persons.find_by_id(code)
        if person is None:
            logger.error(f"GetPerson: Person '{code}' not found")
            raise NotFoundError(f"Person {code} does not exist")
        return f"{person.code} {person.name} {person.surname}"

    # Friendships

    def add_friendship(self, code_a: str, code_b: str) -> None:
        """Make two persons friends of each other.

        Args:
            code_a (str): First person code
            code_b (str): Second person code

        Raises:
            NotFoundError: If either code does not exist

        Side Effects:
            - Saves one friendship edge unless the two are already friends
            - Logs the failure before re-raising
        """
        try:
            self.graph.add_friendship(code_a, code_b)
        except SocialError as e:
            logger.error(f"AddFriendship: Failed for '{code_a}' and '{code_b}': {e}")
            raise

    def list_of_friends(self, code: str) -> List[str]:
        """List the friend codes of a person.

        Raises:
            NotFoundError: If the code does not exist
        """
        try:
            return self.graph.list_friends(code)
        except SocialError as e:
            logger.error(f"ListOfFriends: {e}")
            raise

    def person_with_largest_number_of_friends(self) -> Optional[str]:
        """Code of the person with the most friends, None without persons."""
        return self.graph.person_with_largest_number_of_friends()

    # Groups

    def add_group(self, group_name: str) -> None:
        """Create a new, empty group.

        Args:
            group_name (str): Unique name for the group

        Raises:
            AlreadyExistsError: If a group with this name exists

        Side Effects:
            - Saves the group in the group repository
            - Logs creation attempt and result
        """
        try:
            self.graph.add_group(group_name)
        except SocialError as e:
            logger.error(f"AddGroup: Failed to create group '{group_name}': {e}")
            raise

    def delete_group(self, group_name: str) -> None:
        """Delete a group.

        Raises:
            NotFoundError: If the group does not exist
        """
        try:
            self.graph.delete_group(group_name)
        except SocialError as e:
            logger.error(f"DeleteGroup: Failed to delete group '{group_name}': {e}")
            raise

    def update_group_name(self, group_name: str, new_name: str) -> None:
        """Rename a group, keeping its members.

        Args:
            group_name (str): Current name of the group
            new_name (str): Name the group should take

        Raises:
            NotFoundError: If group_name does not exist
            AlreadyExistsError: If new_name is already taken

        Side Effects:
            - Deletes the old group and saves a new one with the same members
        """
        try:
            self.graph.update_group_name(group_name, new_name)
        except SocialError as e:
            logger.error(f"UpdateGroupName: Failed to rename '{group_name}' to '{new_name}': {e}")
            raise

    def list_of_groups(self) -> Set[str]:
        """Names of all groups."""
        return self.graph.list_groups()

    def add_person_to_group(self, code: str, group_name: str) -> None:
        """Add a person to a group; adding an existing member does nothing.

        Raises:
            NotFoundError: If the person or the group does not exist
        """
        try:
            self.graph.add_person_to_group(code, group_name)
        except SocialError as e:
            logger.error(f"AddPersonToGroup: Failed to add '{code}' to '{group_name}': {e}")
            raise

    def list_of_people_in_group(self, group_name: str) -> List[str]:
        """Member codes of a group, empty for an unknown group."""
        return self.graph.list_members(group_name)

    def largest_group(self) -> Optional[str]:
        """Name of the group with the most members, None without groups."""
        return self.graph.largest_group()

    def person_in_largest_number_of_groups(self) -> Optional[str]:
        """Code of the person in the most groups, None if no group has members."""
        return self.graph.person_in_largest_number_of_groups()

    # Posts

    def post(self, author_code: str, text: str) -> str:
        """Publish a post.

        Args:
            author_code (str): Code of the author
            text (str): Content of the post

        Returns:
            str: Identifier of the new post

        Raises:
            NotFoundError: If the author does not exist

        Side Effects:
            - Saves the post stamped with the current time
        """
        try:
            return self.feed.post(author_code, text)
        except SocialError as e:
            logger.error(f"Post: Failed to publish for '{author_code}': {e}")
            raise

    def get_post_content(self, post_id: str) -> str:
        """Text of a post.

        Raises:
            NotFoundError: If the post does not exist
        """
        try:
            return self.feed.get_post_content(post_id)
        except SocialError as e:
            logger.error(f"GetPostContent: {e}")
            raise

    def get_timestamp(self, post_id: str) -> int:
        """Creation time of a post in milliseconds since the epoch.

        Raises:
            NotFoundError: If the post does not exist
        """
        try:
            return self.feed.get_timestamp(post_id)
        except SocialError as e:
            logger.error(f"GetTimestamp: {e}")
            raise

    def get_paginated_user_posts(self, author_code: str, page_no: int, page_length: int) -> List[str]:
        """One page of a person's own post ids, newest first.

        Args:
            author_code (str): Code of the author
            page_no (int): 1-based page number
            page_length (int): Maximum number of ids per page

        Returns:
            List[str]: Post ids, empty past the last page

        Raises:
            NotFoundError: If the author does not exist
            InvalidPageError: If page_no or page_length is below 1
        """
        try:
            return self.feed.get_paginated_user_posts(author_code, page_no, page_length)
        except SocialError as e:
            logger.error(f"GetPaginatedUserPosts: {e}")
            raise

    def get_paginated_friend_posts(self, author_code: str, page_no: int, page_length: int) -> List[str]:
        """One page of the posts of a person's friends, newest first.

        Args:
            author_code (str): Code of the person whose friends are read
            page_no (int): 1-based page number
            page_length (int): Maximum number of entries per page

        Returns:
            List[str]: "<authorCode>:<postId>" entries, empty for an unknown person

        Raises:
            InvalidPageError: If page_no or page_length is below 1
        """
        try:
            return self.feed.get_paginated_friend_posts(author_code, page_no, page_length)
        except SocialError as e:
            logger.error(f"GetPaginatedFriendPosts: {e}")
            raise
