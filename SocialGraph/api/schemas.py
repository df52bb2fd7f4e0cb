from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OperationRequest(BaseModel):
    operation: str = Field(min_length=1)
    variables: Optional[Dict[str, Any]] = None


class OperationError(BaseModel):
    message: str
    code: str


# ---- Operation arguments ----
# Variables arrive camelCased (userId, followId); ids accept numbers as well as strings.


class _Arguments(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="forbid",
    )


class GetUserArgs(_Arguments):
    id: str


class UserIdArgs(_Arguments):
    user_id: str


class CreateUserArgs(_Arguments):
    username: str
    email: str
    password: str


class LoginArgs(_Arguments):
    email: str
    password: str


class CreatePostArgs(_Arguments):
    user_id: str
    content: str


class FollowArgs(_Arguments):
    user_id: str
    follow_id: str


class UnfollowArgs(_Arguments):
    user_id: str
    unfollow_id: str


# ---- Output shapes ----


class UserRef(BaseModel):
    id: str
    username: str
    email: str


class PostRef(BaseModel):
    id: str
    content: str


class UserView(UserRef):
    following: List[UserRef]
    posts: List[PostRef]


class PostView(BaseModel):
    id: str
    content: str
    author: UserView
