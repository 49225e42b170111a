from collections import Counter
from typing import Dict, Iterable, List, Optional, Set, Tuple
from .models import Person, Group, Friendship
from .errors import NotFoundError, AlreadyExistsError
from .repo import Repository
from ..utils.logger import setup_logger

logger = setup_logger('socialnet.graph')

def _max_by_count(counts: Iterable[Tuple[str, int]]) -> Optional[str]:
    """Return the identity with the highest count.

    Ties go to the lexicographically smallest identity, so the result
    does not depend on repository iteration order.
    """
    best = None
    for identity, count in counts:
        if best is None or count > best[1] or (count == best[1] and identity < best[0]):
            best = (identity, count)
    return best[0] if best else None


class SocialGraph:
    """Friendship graph and group membership engine.

    Friendships are stored as single undirected edges, so the relation
    becomes visible on both sides with one repository write.
    """

    def __init__(self, persons: Repository[str, Person], groups: Repository[str, Group],
                 friendships: Repository[tuple, Friendship]):
        """Initialize the engine over its repositories.

        Args:
            persons (Repository): Person repository keyed by code
            groups (Repository): Group repository keyed by name
            friendships (Repository): Friendship edges keyed by sorted code pair
        """
        self.persons = persons
        self.groups = groups
        self.friendships = friendships

    def _require_person(self, code: str) -> Person:
        person = self.persons.find_by_id(code)
        if person is None:
            raise NotFoundError(f"Person {code} does not exist")
        return person

    def _require_group(self, name: str) -> Group:
        group = self.groups.find_by_id(name)
        if group is None:
            raise NotFoundError(f"Group {name} does not exist")
        return group

    def adjacency(self) -> Dict[str, Set[str]]:
        """Build the friend sets of every person from the stored edges.

        Returns:
            Dict[str, Set[str]]: Maps each person code to its friend codes;
            persons without friends map to an empty set
        """
        adj: Dict[str, Set[str]] = {p.code: set() for p in self.persons.find_all()}
        for edge in self.friendships.find_all():
            adj.setdefault(edge.code_a, set()).add(edge.code_b)
            adj.setdefault(edge.code_b, set()).add(edge.code_a)
        return adj

    def friends_of(self, code: str) -> Set[str]:
        """Friend codes of a person, without checking that it exists."""
        friends = set()
        for edge in self.friendships.find_all():
            if edge.code_a == code:
                friends.add(edge.code_b)
            if edge.code_b == code:
                friends.add(edge.code_a)
        return friends

    # Friendships

    def add_friendship(self, code_a: str, code_b: str) -> bool:
        """Make two persons friends of each other.

        Args:
            code_a (str): First person code
            code_b (str): Second person code

        Returns:
            bool: True if the friendship was created, False if it already existed

        Raises:
            NotFoundError: If either code does not exist
        """
        self._require_person(code_a)
        self._require_person(code_b)
        edge = Friendship(code_a, code_b)
        if self.friendships.find_by_id(edge.key) is not None:
            logger.debug(f"{code_a} and {code_b} are already friends")
            return False
        self.friendships.save(edge)
        logger.info(f"Friendship added between {code_a} and {code_b}")
        return True

    def list_friends(self, code: str) -> List[str]:
        """List the friends of a person.

        Raises:
            NotFoundError: If the person does not exist
        """
        self._require_person(code)
        return sorted(self.friends_of(code))

    def person_with_largest_number_of_friends(self) -> Optional[str]:
        """Find the person with the most friends.

        Returns:
            Optional[str]: Person code, None if there are no persons.
            Ties go to the smallest code
        """
        return _max_by_count((code, len(friends)) for code, friends in self.adjacency().items())

    # Groups

    def add_group(self, name: str) -> Group:
        """Create an empty group.

        Raises:
            AlreadyExistsError: If a group with this name exists
        """
        if self.groups.find_by_id(name) is not None:
            raise AlreadyExistsError(f"Group {name} already exists")
        group = Group(name=name)
        self.groups.save(group)
        logger.info(f"New group created: {name}")
        return group

    def delete_group(self, name: str) -> None:
        """Delete a group.

        Raises:
            NotFoundError: If the group does not exist
        """
        self.groups.delete(self._require_group(name))
        logger.info(f"Group deleted: {name}")

    def update_group_name(self, old_name: str, new_name: str) -> Group:
        """Rename a group by recreating it under the new name.

        The member set is copied to a new Group object; the old object is
        deleted and must not be reused.

        Raises:
            NotFoundError: If old_name does not exist
            AlreadyExistsError: If new_name is already taken
        """
        old = self._require_group(old_name)
        if self.groups.find_by_id(new_name) is not None:
            raise AlreadyExistsError(f"Group {new_name} already exists")
        renamed = Group(name=new_name, member_codes=set(old.member_codes))
        self.groups.delete(old)
        self.groups.save(renamed)
        logger.info(f"Group {old_name} renamed to {new_name} ({len(renamed.member_codes)} members)")
        return renamed

    def add_person_to_group(self, code: str, group_name: str) -> bool:
        """Add a person to a group.

        Returns:
            bool: True if the person was added, False if already a member

        Raises:
            NotFoundError: If the person or the group does not exist
        """
        self._require_person(code)
        group = self._require_group(group_name)
        if code in group.member_codes:
            logger.debug(f"Person {code} already in group {group_name}")
            return False
        self.groups.update(Group(name=group.name, member_codes=group.member_codes | {code}))
        logger.info(f"Added person {code} to group {group_name}")
        return True

    def list_groups(self) -> Set[str]:
        """Get the names of all groups."""
        return {g.name for g in self.groups.find_all()}

    def list_members(self, group_name: str) -> List[str]:
        """List the members of a group.

        Returns:
            List[str]: Member codes, empty if the group does not exist
        """
        group = self.groups.find_by_id(group_name)
        if group is None:
            return []
        return sorted(group.member_codes)

    def largest_group(self) -> Optional[str]:
        """Find the group with the most members.

        Returns:
            Optional[str]: Group name, None if there are no groups.
            Ties go to the smallest name
        """
        return _max_by_count((g.name, len(g.member_codes)) for g in self.groups.find_all())

    def person_in_largest_number_of_groups(self) -> Optional[str]:
        """Find the person who belongs to the most groups.

        Counts the memberships of every person over all groups.

        Returns:
            Optional[str]: Person code, None if no group has members.
            Ties go to the smallest code
        """
        memberships = Counter()
        for group in self.groups.find_all():
            memberships.update(group.member_codes)
        return _max_by_count(memberships.items())
