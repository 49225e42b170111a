class SocialError(ValueError):
    """Base class for errors raised by the social network core."""


class NotFoundError(SocialError):
    """A referenced person, group or post does not exist."""


class AlreadyExistsError(SocialError):
    """A person code or group name is already taken."""


class DuplicateKeyError(SocialError):
    """A repository already holds an entity with the same key."""


class InvalidPageError(SocialError):
    """Page number or page length is below 1."""
