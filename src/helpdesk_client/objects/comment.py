"""Comments and the component giving a resource its comments."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, ClassVar, Generic, TypeVar

from ..common.coercion import (
    assure_constant,
    assure_int,
    assure_positive_int,
    assure_string,
)
from ..common.fields import api_field
from ..common.lazy import Lazy
from ..common.result_set import ResultSet
from ..common.wire import build_numeric, build_string
from ..errors import ValidationError
from .base import ObjectBase
from .staff import Staff
from .user import User

C = TypeVar("C", bound="CommentBase")


class CreatorType(IntEnum):
    STAFF = 1
    USER = 2


class CommentStatus(IntEnum):
    PENDING = 1
    APPROVED = 2
    SPAM = 3


@dataclass(eq=False)
class CommentBase(ObjectBase):
    """
    Comment left on a commentable resource.

    The author is either a staff member, a user, or just a display name;
    setting one form clears the others. Comments cannot be edited.
    """

    constant_groups = {"CREATOR_TYPE": CreatorType, "STATUS": CommentStatus}

    # Subclasses name the attribute holding the parent id and the parent type
    parent_id_field: ClassVar[str] = ""
    parent_type: ClassVar[type[ObjectBase] | None] = None

    id: int | None = api_field()
    creator_type: int | None = api_field(name="creatortype", required_create=True)
    creator_id: int | None = api_field(name="creatorid")
    full_name: str | None = api_field(name="fullname")
    email: str | None = api_field()
    ip_address: str | None = api_field(name="ipaddress")
    dateline: int | None = api_field()
    parent_comment_id: int | None = api_field(name="parentcommentid")
    comment_status: int | None = api_field(name="commentstatus")
    user_agent: str | None = api_field(name="useragent", filter=False, order=False)
    referrer: str | None = api_field(filter=False, order=False)
    parent_url: str | None = api_field(name="parenturl", filter=False, order=False)
    contents: str | None = api_field(required=True)

    _creator: Lazy[Staff | User] = field(init=False, repr=False)
    _parent: Lazy[ObjectBase] = field(init=False, repr=False)

    def __post_init__(self):
        self._creator = Lazy(self._load_creator)
        self._parent = Lazy(self._load_parent)

    def _load_creator(self) -> Staff | User | None:
        if self.creator_id is None:
            return None
        if self.creator_type == CreatorType.STAFF:
            return Staff.get(self.creator_id)
        if self.creator_type == CreatorType.USER:
            return User.get(self.creator_id)
        return None

    def _load_parent(self) -> ObjectBase | None:
        parent_id = self.get_parent_id()
        if parent_id is None or self.parent_type is None:
            return None
        return self.parent_type.get(parent_id)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.creator_type = assure_constant(assure_int(data.get("creatortype")), self, "CREATOR_TYPE")
        self.creator_id = assure_positive_int(data.get("creatorid"))
        self.full_name = assure_string(data.get("fullname"))
        self.email = assure_string(data.get("email"))
        self.ip_address = assure_string(data.get("ipaddress"))
        self.dateline = assure_positive_int(data.get("dateline"))
        self.parent_comment_id = assure_positive_int(data.get("parentcommentid"))
        self.comment_status = assure_constant(assure_int(data.get("commentstatus")), self, "STATUS")
        self.user_agent = assure_string(data.get("useragent"))
        self.referrer = assure_string(data.get("referrer"))
        self.parent_url = assure_string(data.get("parenturl"))
        self.contents = assure_string(data.get("contents"))
        self._creator.reset()
        self._parent.reset()

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        if self.creator_id is None and not self.full_name:
            raise ValidationError(
                f"A creator or a full name is required to {'create' if create else 'update'} "
                f"{type(self).__name__}",
                field_name="creator_id",
                resource_type=type(self).__name__,
                operation="create" if create else "update",
            )

        data: dict[str, Any] = {}
        build_string(data, "contents", self.contents)
        build_numeric(data, "creatortype", self.creator_type)
        if self.creator_id is not None:
            build_numeric(data, "creatorid", self.creator_id)
        else:
            build_string(data, "fullname", self.full_name)
        build_string(data, "email", self.email)
        build_numeric(data, "parentcommentid", self.parent_comment_id)
        return data

    def update(self) -> CommentBase:
        raise self._unsupported("update", "comments cannot be edited")

    @classmethod
    def get_all(cls: type[C], parent: ObjectBase | int) -> ResultSet[C]:
        parent_id = parent.get_id() if isinstance(parent, ObjectBase) else parent
        return cls.generic_get_all(["ListAll", parent_id])

    @classmethod
    def create_new(cls: type[C], parent: ObjectBase | int, creator: Staff | User | str, contents: str) -> C:
        """Build an unsaved comment on ``parent`` (an object or its id)."""
        comment = cls()
        comment.set_parent(parent)
        comment.set_creator(creator)
        comment.set_contents(contents)
        return comment

    def get_parent_id(self) -> int | None:
        return getattr(self, self.parent_id_field, None)

    def get_parent(self, reload: bool = False) -> ObjectBase | None:
        return self._parent.get(reload)

    def set_parent(self, parent: ObjectBase | int | None) -> CommentBase:
        if isinstance(parent, ObjectBase):
            setattr(self, self.parent_id_field, parent.get_id())
            self._parent.set(parent)
        else:
            setattr(self, self.parent_id_field, assure_positive_int(parent))
            self._parent.reset()
        return self

    def get_creator(self, reload: bool = False) -> Staff | User | None:
        return self._creator.get(reload)

    def set_creator(self, creator: Staff | User | str | None) -> CommentBase:
        """Set the author from a Staff, a User, or a display name."""
        if isinstance(creator, Staff):
            self.creator_type = CreatorType.STAFF.value
            self.creator_id = creator.id
            self.full_name = None
            self._creator.set(creator)
        elif isinstance(creator, User):
            self.creator_type = CreatorType.USER.value
            self.creator_id = creator.id
            self.full_name = None
            self._creator.set(creator)
        else:
            self.creator_type = CreatorType.USER.value
            self.creator_id = None
            self.full_name = assure_string(creator)
            self._creator.reset()
        return self

    def set_full_name(self, full_name: str | None) -> CommentBase:
        return self.set_creator(full_name)

    def set_email(self, email: str | None) -> CommentBase:
        self.email = assure_string(email)
        return self

    def set_contents(self, contents: str | None) -> CommentBase:
        self.contents = assure_string(contents)
        return self

    def set_parent_comment(self, comment: CommentBase | int | None) -> CommentBase:
        self.parent_comment_id = (
            comment.id if isinstance(comment, CommentBase) else assure_positive_int(comment)
        )
        return self

    def set_comment_status(self, status: Any) -> CommentBase:
        self.comment_status = assure_constant(status, self, "STATUS")
        return self

    def summary(self) -> str:
        contents = self.contents or ""
        if len(contents) > 50:
            contents = contents[:50] + "..."
        return f"{contents} (author: {self.full_name})"


class Comments(Generic[C]):
    """
    Comments of one resource.

    The list is fetched for the owner's id on first access and cached until
    reloaded. A new owner has no comments to fetch.
    """

    def __init__(self, owner: ObjectBase, comment_class: type[C]):
        self._owner = owner
        self._comment_class = comment_class
        self._comments: Lazy[ResultSet[C]] = Lazy(self._load)

    def _load(self) -> ResultSet[C] | None:
        owner_id = self._owner.get_id()
        if owner_id is None:
            return None
        return self._comment_class.get_all(owner_id)

    def get(self, reload: bool = False) -> ResultSet[C]:
        comments = self._comments.get(reload)
        if comments is None:
            return ResultSet((), object_type=self._comment_class)
        return comments

    def new(self, creator: Staff | User | str, contents: str) -> C:
        return self._comment_class.create_new(self._owner, creator, contents)
