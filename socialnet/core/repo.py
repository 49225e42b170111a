import json, os
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, Hashable, List, Optional, TypeVar
from .models import Person, Group, Post, Friendship
from .errors import DuplicateKeyError, NotFoundError
from ..utils.logger import setup_logger

logger = setup_logger('socialnet.repo')

K = TypeVar('K', bound=Hashable)
T = TypeVar('T')

def person_key(person: Person) -> str:
    return person.code

def group_key(group: Group) -> str:
    return group.name

def post_key(post: Post) -> str:
    return post.post_id

def friendship_key(friendship: Friendship):
    return friendship.key


class Repository(ABC, Generic[K, T]):
    """Storage contract for one entity type keyed by its identity."""

    @abstractmethod
    def find_by_id(self, key: K) -> Optional[T]:
        ...

    @abstractmethod
    def save(self, entity: T) -> None:
        ...

    @abstractmethod
    def update(self, entity: T) -> None:
        ...

    @abstractmethod
    def delete(self, entity: T) -> None:
        ...

    @abstractmethod
    def find_all(self) -> List[T]:
        ...


class InMemoryRepository(Repository[K, T]):
    """Dictionary-backed repository keeping entities in insertion order."""

    def __init__(self, key: Callable[[T], K]):
        """Initialize an empty repository.

        Args:
            key (Callable): Extracts the identity of an entity
        """
        self.key = key
        self.items_by_key: Dict[K, T] = {}

    def find_by_id(self, key: K) -> Optional[T]:
        """Get an entity by its key.

        Args:
            key: Identity of the entity

        Returns:
            Optional[T]: Entity if found, None otherwise
        """
        return self.items_by_key.get(key)

    def save(self, entity: T) -> None:
        """Store a new entity.

        Raises:
            DuplicateKeyError: If an entity with the same key is present
        """
        k = self.key(entity)
        if k in self.items_by_key:
            raise DuplicateKeyError(f"Key {k!r} already present")
        self.items_by_key[k] = entity

    def update(self, entity: T) -> None:
        """Replace a stored entity with a new version.

        Raises:
            NotFoundError: If no entity with the same key is present
        """
        k = self.key(entity)
        if k not in self.items_by_key:
            raise NotFoundError(f"Key {k!r} not present")
        self.items_by_key[k] = entity

    def delete(self, entity: T) -> None:
        """Remove an entity.

        Raises:
            NotFoundError: If no entity with the same key is present
        """
        k = self.key(entity)
        if k not in self.items_by_key:
            raise NotFoundError(f"Key {k!r} not present")
        del self.items_by_key[k]

    def find_all(self) -> List[T]:
        """Get all entities.

        Returns:
            List[T]: Every stored entity, in insertion order
        """
        return list(self.items_by_key.values())


class JsonlRepository(InMemoryRepository[K, T]):
    """Repository persisting entities to a JSONL file.

    Every entity lives in memory; the file is appended to on save and
    rewritten on update and delete.
    """

    def __init__(self, path: str, key: Callable[[T], K],
                 to_record: Callable[[T], Dict[str, Any]],
                 from_record: Callable[[Dict[str, Any]], T]):
        """Initialize a file-backed repository.

        Args:
            path (str): Path to JSONL file storing entity data
            key (Callable): Extracts the identity of an entity
            to_record (Callable): Converts an entity to a JSON-safe dict
            from_record (Callable): Builds an entity from a stored dict

        Side Effects:
            - Creates directory structure if not exists
            - Loads existing entities from file
        """
        super().__init__(key)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.path = path
        self.to_record = to_record
        self.from_record = from_record
        self._load()

    def _load(self):
        """Load entities from JSONL file into memory.

        Side Effects:
            - Populates items_by_key dictionary
        """
        if not os.path.exists(self.path):
            return
        with open(self.path, "r", encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                entity = self.from_record(json.loads(line))
                self.items_by_key[self.key(entity)] = entity
        logger.debug(f"Loaded {len(self.items_by_key)} records from {self.path}")

    def _rewrite(self):
        # This is not efficient for large files but keeps the file consistent
        with open(self.path, "w", encoding="utf-8") as f:
            for entity in self.items_by_key.values():
                f.write(json.dumps(self.to_record(entity), ensure_ascii=False) + "\n")
            f.flush()
            os.fsync(f.fileno())

    def save(self, entity: T) -> None:
        """Store a new entity and append it to the file.

        Raises:
            DuplicateKeyError: If an entity with the same key is present
        """
        k = self.key(entity)
        if k in self.items_by_key:
            raise DuplicateKeyError(f"Key {k!r} already present")
        line = json.dumps(self.to_record(entity), ensure_ascii=False)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line + "\n"); f.flush(); os.fsync(f.fileno())
        super().save(entity)
        logger.debug(f"Appended {self.key(entity)!r} to {self.path}")

    def update(self, entity: T) -> None:
        super().update(entity)
        self._rewrite()
        logger.debug(f"Updated {self.key(entity)!r} in {self.path}")

    def delete(self, entity: T) -> None:
        super().delete(entity)
        self._rewrite()
        logger.debug(f"Deleted {self.key(entity)!r} from {self.path}")


class PersonsRepo(JsonlRepository[str, Person]):
    """Repository for persons in JSONL format."""

    def __init__(self, path: str):
        super().__init__(
            path,
            key=person_key,
            to_record=lambda p: {"code": p.code, "name": p.name, "surname": p.surname},
            from_record=lambda rec: Person(**rec),
        )


class GroupsRepo(JsonlRepository[str, Group]):
    """Repository for groups and their memberships in JSONL format."""

    def __init__(self, path: str):
        super().__init__(
            path,
            key=group_key,
            # Convert set to sorted list for JSON
            to_record=lambda g: {"name": g.name, "member_codes": sorted(g.member_codes)},
            from_record=lambda rec: Group(name=rec["name"], member_codes=set(rec["member_codes"])),
        )


class PostsRepo(JsonlRepository[str, Post]):
    """Repository for posts in JSONL format."""

    def __init__(self, path: str):
        super().__init__(
            path,
            key=post_key,
            to_record=lambda p: {
                "post_id": p.post_id,
                "author_code": p.author_code,
                "content": p.content,
                "timestamp": p.timestamp,
            },
            from_record=lambda rec: Post(**rec),
        )


class FriendshipsRepo(JsonlRepository[tuple, Friendship]):
    """Repository for friendship edges in JSONL format."""

    def __init__(self, path: str):
        super().__init__(
            path,
            key=friendship_key,
            to_record=lambda f: {"code_a": f.code_a, "code_b": f.code_b},
            from_record=lambda rec: Friendship(**rec),
        )
