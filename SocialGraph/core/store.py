"""
Account & social-graph store backing the SocialGraph API.

Holds two collections, users and posts, keyed by identifier and guarded by a
single re-entrant lock so that read-then-write operations (follow, post
creation) stay consistent when request handlers run on a threadpool.

Behaviour worth knowing:
- Identifiers are strings of monotonically increasing counters ("1", "2", ...).
- Registration does not reject duplicate emails or usernames; login matches the
  first account registered with the email.
- Self-follow is allowed.
- `get_user` and `get_posts_by_user` never raise for unknown ids, every other
  lookup raises `NotFoundError`.

Nothing is persisted; state lives as long as the store object.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .errors import InvalidCredentialsError, InvalidInputError, NotFoundError
from .passwords import PasswordHasher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Post:
    id: str
    content: str
    author_id: str


@dataclass
class User:
    id: str
    username: str
    email: str
    password_hash: str = field(repr=False)
    following: List[str] = field(default_factory=list)

    def is_following(self, user_id: str) -> bool:
        return user_id in self.following


class AccountGraphStore:
    """In-memory users, posts and the follow graph between users."""

    def __init__(self, hasher: Optional[PasswordHasher] = None) -> None:
        self._users: Dict[str, User] = {}
        self._posts: Dict[str, Post] = {}
        self._user_seq = 0
        self._post_seq = 0
        self._hasher = hasher or PasswordHasher()
        self._lock = threading.RLock()

    # --- accounts --------------------------------------------------------

    def register_user(self, username: str, email: str, password: str) -> User:
        for name, value in (("username", username), ("email", email), ("password", password)):
            if not isinstance(value, str) or not value:
                raise InvalidInputError(f"{name} must be a non-empty string")
        # Hash before taking the lock; the record only becomes visible once stored.
        credential = self._hasher.hash(password)
        with self._lock:
            self._user_seq += 1
            user = User(
                id=str(self._user_seq),
                username=username,
                email=email,
                password_hash=credential,
            )
            self._users[user.id] = user
        logger.info("Registered user id=%s username=%s", user.id, username)
        return user

    def authenticate(self, email: str, password: str) -> User:
        with self._lock:
            user = next((u for u in self._users.values() if u.email == email), None)
        if user is None:
            logger.warning("Login failed: no account for email")
            raise NotFoundError(f"user with email {email} not found")
        if not self._hasher.verify(password, user.password_hash):
            logger.warning("Login failed: bad password for user id=%s", user.id)
            raise InvalidCredentialsError("invalid password")
        logger.debug("User id=%s authenticated", user.id)
        return user

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def _require_user(self, user_id: str) -> User:
        try:
            return self._users[user_id]
        except KeyError as exc:
            raise NotFoundError(f"user {user_id} not found") from exc

    def following_of(self, user_id: str) -> List[User]:
        """Resolve the users `user_id` follows, in follow order."""
        with self._lock:
            user = self._require_user(user_id)
            return [self._users[fid] for fid in user.following if fid in self._users]

    # --- posts -----------------------------------------------------------

    def create_post(self, user_id: str, content: str) -> Post:
        with self._lock:
            author = self._require_user(user_id)
            self._post_seq += 1
            post = Post(id=str(self._post_seq), content=content, author_id=author.id)
            self._posts[post.id] = post
        logger.info("User id=%s created post id=%s", user_id, post.id)
        return post

    def get_posts_by_user(self, user_id: str) -> List[Post]:
        with self._lock:
            return [post for post in self._posts.values() if post.author_id == user_id]

    def get_feed(self, user_id: str) -> List[Post]:
        with self._lock:
            user = self._require_user(user_id)
            visible = {user.id, *user.following}
            return [post for post in self._posts.values() if post.author_id in visible]

    # --- graph -----------------------------------------------------------

    def follow_user(self, user_id: str, follow_id: str) -> User:
        with self._lock:
            user = self._require_user(user_id)
            self._require_user(follow_id)
            if not user.is_following(follow_id):
                user.following.append(follow_id)
                logger.info("User id=%s now follows id=%s", user_id, follow_id)
            return user

    def unfollow_user(self, user_id: str, unfollow_id: str) -> User:
        with self._lock:
            user = self._require_user(user_id)
            if user.is_following(unfollow_id):
                user.following.remove(unfollow_id)
                logger.info("User id=%s unfollowed id=%s", user_id, unfollow_id)
            return user


def _demo() -> None:
    store = AccountGraphStore()
    alice = store.register_user("alice", "a@x.com", "pw1")
    bob = store.register_user("bob", "b@x.com", "pw2")

    store.create_post(alice.id, "hello")
    print("alice feed:", [p.content for p in store.get_feed(alice.id)])
    print("bob feed before follow:", [p.content for p in store.get_feed(bob.id)])

    store.follow_user(bob.id, alice.id)
    print("bob feed after follow:", [p.content for p in store.get_feed(bob.id)])

    for email, password in (("a@x.com", "wrong"), ("nobody@x.com", "x")):
        try:
            store.authenticate(email, password)
        except (NotFoundError, InvalidCredentialsError) as exc:
            print(f"login({email!r}) failed: {type(exc).__name__}: {exc}")


if __name__ == "__main__":
    _demo()
