"""
Named queries and commands exposed through the single `/query` entry point.

Each operation pairs an argument model with a resolver that calls into the
store and renders the result. `execute` validates variables, runs the resolver
and turns store failures into error entries, so callers always receive a
`(data, errors)` pair for known operations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from SocialGraph.core.errors import InvalidInputError, SocialGraphError
from SocialGraph.core.store import AccountGraphStore, Post, User

from .schemas import (
    CreatePostArgs,
    CreateUserArgs,
    FollowArgs,
    GetUserArgs,
    LoginArgs,
    OperationError,
    PostRef,
    PostView,
    UnfollowArgs,
    UserIdArgs,
    UserRef,
    UserView,
)

logger = logging.getLogger(__name__)

QUERY = "query"
COMMAND = "command"


class UnknownOperationError(LookupError):
    pass


@dataclass(frozen=True)
class Operation:
    name: str
    kind: str
    args_model: Type[BaseModel]
    resolve: Callable[[AccountGraphStore, Any], Any]


# ---- Rendering ----


def render_user(store: AccountGraphStore, user: User) -> Dict[str, Any]:
    # Fixed depth: followed users and posts are rendered one level deep, never recursively.
    view = UserView(
        id=user.id,
        username=user.username,
        email=user.email,
        following=[
            UserRef(id=f.id, username=f.username, email=f.email)
            for f in store.following_of(user.id)
        ],
        posts=[PostRef(id=p.id, content=p.content) for p in store.get_posts_by_user(user.id)],
    )
    return view.model_dump()


def render_post(store: AccountGraphStore, post: Post) -> Dict[str, Any]:
    author = store.get_user(post.author_id)
    view = PostView(id=post.id, content=post.content, author=render_user(store, author))
    return view.model_dump()


def _render_posts(store: AccountGraphStore, posts: List[Post]) -> List[Dict[str, Any]]:
    return [render_post(store, post) for post in posts]


# ---- Resolvers ----


def _get_user(store: AccountGraphStore, args: GetUserArgs) -> Optional[Dict[str, Any]]:
    user = store.get_user(args.id)
    return render_user(store, user) if user is not None else None


def _get_posts_by_user(store: AccountGraphStore, args: UserIdArgs) -> List[Dict[str, Any]]:
    return _render_posts(store, store.get_posts_by_user(args.user_id))


def _get_feed(store: AccountGraphStore, args: UserIdArgs) -> List[Dict[str, Any]]:
    return _render_posts(store, store.get_feed(args.user_id))


def _create_user(store: AccountGraphStore, args: CreateUserArgs) -> Dict[str, Any]:
    user = store.register_user(args.username, args.email, args.password)
    return render_user(store, user)


def _login(store: AccountGraphStore, args: LoginArgs) -> Dict[str, Any]:
    return render_user(store, store.authenticate(args.email, args.password))


def _create_post(store: AccountGraphStore, args: CreatePostArgs) -> Dict[str, Any]:
    return render_post(store, store.create_post(args.user_id, args.content))


def _follow_user(store: AccountGraphStore, args: FollowArgs) -> Dict[str, Any]:
    return render_user(store, store.follow_user(args.user_id, args.follow_id))


def _unfollow_user(store: AccountGraphStore, args: UnfollowArgs) -> Dict[str, Any]:
    return render_user(store, store.unfollow_user(args.user_id, args.unfollow_id))


OPERATIONS: Dict[str, Operation] = {
    op.name: op
    for op in (
        Operation("getUser", QUERY, GetUserArgs, _get_user),
        Operation("getPostsByUser", QUERY, UserIdArgs, _get_posts_by_user),
        Operation("getFeed", QUERY, UserIdArgs, _get_feed),
        Operation("createUser", COMMAND, CreateUserArgs, _create_user),
        Operation("login", COMMAND, LoginArgs, _login),
        Operation("createPost", COMMAND, CreatePostArgs, _create_post),
        Operation("followUser", COMMAND, FollowArgs, _follow_user),
        Operation("unfollowUser", COMMAND, UnfollowArgs, _unfollow_user),
    )
}


def get_operation(name: str) -> Operation:
    try:
        return OPERATIONS[name]
    except KeyError as exc:
        raise UnknownOperationError(f"unknown operation {name!r}") from exc


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(item) for item in err["loc"]) or "variables"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


def execute(
    store: AccountGraphStore,
    name: str,
    variables: Optional[Dict[str, Any]] = None,
) -> Tuple[Dict[str, Any], List[OperationError]]:
    operation = get_operation(name)
    try:
        args = operation.args_model.model_validate(variables or {})
    except ValidationError as exc:
        message = _describe_validation_error(exc)
        return {name: None}, [OperationError(message=message, code=InvalidInputError.code)]

    try:
        result = operation.resolve(store, args)
    except SocialGraphError as exc:
        logger.info("Operation %s failed: %s", name, exc.code)
        return {name: None}, [OperationError(message=str(exc), code=exc.code)]
    return {name: result}, []
