import time, uuid
from typing import Callable, List, Optional
from .models import Person, Post
from .errors import NotFoundError, InvalidPageError
from .graph import SocialGraph
from .repo import Repository
from ..utils.logger import setup_logger

logger = setup_logger('socialnet.feed')

def now_ms() -> int:
    return int(time.time() * 1000)

def new_post_id() -> str:
    return uuid.uuid4().hex

def _page(items: list, page_no: int, page_length: int) -> list:
    """Slice one 1-based page of at most page_length items."""
    if page_no < 1:
        raise InvalidPageError(f"Page number must be at least 1, got {page_no}")
    if page_length < 1:
        raise InvalidPageError(f"Page length must be at least 1, got {page_length}")
    start = (page_no - 1) * page_length
    return items[start:start + page_length]

def _newest_first(posts: List[Post]) -> List[Post]:
    # sorted() is stable, so equal timestamps keep repository order
    return sorted(posts, key=lambda p: p.timestamp, reverse=True)


class Feed:
    """Post creation and paginated feeds.

    Args:
        persons (Repository): Person repository keyed by code
        posts (Repository): Post repository keyed by post id
        graph (SocialGraph): Source of friend sets for the friend feed
        clock (Callable, optional): Returns the current time in milliseconds
        id_factory (Callable, optional): Returns a fresh post id
    """

    def __init__(self, persons: Repository[str, Person], posts: Repository[str, Post],
                 graph: SocialGraph, clock: Optional[Callable[[], int]] = None,
                 id_factory: Optional[Callable[[], str]] = None):
        self.persons = persons
        self.posts = posts
        self.graph = graph
        self.clock = clock or now_ms
        self.id_factory = id_factory or new_post_id

    def _require_post(self, post_id: str) -> Post:
        post = self.posts.find_by_id(post_id)
        if post is None:
            raise NotFoundError(f"Post {post_id} does not exist")
        return post

    def post(self, author_code: str, text: str) -> str:
        """Publish a new post.

        Args:
            author_code (str): Code of the author
            text (str): Content of the post

        Returns:
            str: Identifier of the new post

        Raises:
            NotFoundError: If the author does not exist
        """
        if self.persons.find_by_id(author_code) is None:
            raise NotFoundError(f"Person {author_code} does not exist")
        post = Post(post_id=self.id_factory(), author_code=author_code,
                    content=text, timestamp=self.clock())
        self.posts.save(post)
        logger.info(f"New post saved: {post.post_id} by {author_code}")
        return post.post_id

    def get_post_content(self, post_id: str) -> str:
        return self._require_post(post_id).content

    def get_timestamp(self, post_id: str) -> int:
        return self._require_post(post_id).timestamp

    def posts_by(self, author_codes) -> List[Post]:
        return [p for p in self.posts.find_all() if p.author_code in author_codes]

    def get_paginated_user_posts(self, author_code: str, page_no: int, page_length: int) -> List[str]:
        """Return one page of a person's own posts, most recent first.

        Raises:
            NotFoundError: If the author does not exist
            InvalidPageError: If page_no or page_length is below 1
        """
        if self.persons.find_by_id(author_code) is None:
            raise NotFoundError(f"Person {author_code} does not exist")
        posts = _newest_first(self.posts_by({author_code}))
        return [p.post_id for p in _page(posts, page_no, page_length)]

    def get_paginated_friend_posts(self, author_code: str, page_no: int, page_length: int) -> List[str]:
        """Return one page of the posts of a person's friends, most recent first.

        Each entry is formatted as "<authorCode>:<postId>". An unknown
        person yields an empty page rather than an error.

        Raises:
            InvalidPageError: If page_no or page_length is below 1
        """
        if self.persons.find_by_id(author_code) is None:
            logger.debug(f"Friend feed requested for unknown person {author_code}")
            return []
        # a self-friendship must not pull the author's own posts into the feed
        friends = self.graph.friends_of(author_code) - {author_code}
        posts = _newest_first(self.posts_by(friends))
        return [f"{p.author_code}:{p.post_id}" for p in _page(posts, page_no, page_length)]
