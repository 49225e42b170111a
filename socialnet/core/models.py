from dataclasses import dataclass, field
from typing import Set, Tuple

@dataclass(frozen=True)
class Person:
    """Represents an account in the social network.

    Friends and authored posts are not stored here: friendships live in
    Friendship edges and posts reference their author by code.

    Attributes:
        code (str): Unique account code, immutable after creation
        name (str): First name
        surname (str): Last name
    """
    code: str
    name: str
    surname: str

@dataclass
class Friendship:
    """An undirected friendship edge between two persons.

    Codes are stored in sorted order so that (a, b) and (b, a) map to
    the same record.

    Attributes:
        code_a (str): Lexicographically smaller code of the pair
        code_b (str): Lexicographically larger code of the pair
    """
    code_a: str
    code_b: str

    def __post_init__(self):
        if self.code_b < self.code_a:
            self.code_a, self.code_b = self.code_b, self.code_a

    @property
    def key(self) -> Tuple[str, str]:
        return (self.code_a, self.code_b)

@dataclass
class Group:
    """Represents a named group of persons.

    Attributes:
        name (str): Unique group name
        member_codes (Set[str]): Codes of the persons in this group
    """
    name: str
    member_codes: Set[str] = field(default_factory=set)

@dataclass(frozen=True)
class Post:
    """Represents a post in the feed.

    Attributes:
        post_id (str): Generated unique identifier
        author_code (str): Code of the person who wrote the post
        content (str): Text of the post
        timestamp (int): Unix timestamp in milliseconds when the post was created
    """
    post_id: str
    author_code: str
    content: str
    timestamp: int
