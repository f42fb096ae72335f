"""News categories, news items, their comments and news subscribers."""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from ..common.coercion import (
    assure_array,
    assure_bool,
    assure_constant,
    assure_positive_int,
    assure_string,
)
from ..common.fields import api_field, filterable
from ..common.lazy import Lazy
from ..common.result_set import ResultSet
from ..common.wire import (
    build_bool,
    build_date,
    build_list,
    build_numeric,
    build_string,
    timestamp_from,
)
from .base import ObjectBase, parse_id_list
from .comment import CommentBase, Comments
from .staff import Staff
from .user import User


class NewsCategoryVisibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class NewsType(IntEnum):
    GLOBAL = 1
    PUBLIC = 2
    PRIVATE = 3


class NewsStatus(IntEnum):
    DRAFT = 1
    PUBLISHED = 2


def _positive_ids(values: Iterable[Any] | Any) -> list[int]:
    ids = (assure_positive_int(value) for value in assure_array(values))
    return [value for value in ids if value is not None]


@dataclass(eq=False)
class NewsCategory(ObjectBase):
    controller = "/News/Category"
    object_xml_name = "newscategory"
    constant_groups = {"VISIBILITY_TYPE": NewsCategoryVisibility}

    id: int | None = api_field()
    title: str | None = api_field(required=True)
    visibility_type: str | None = api_field(name="visibilitytype", required=True)
    news_item_count: int = api_field(0, name="newsitemcount")

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.title = assure_string(data.get("title"))
        self.visibility_type = assure_string(data.get("visibilitytype"))
        self.news_item_count = assure_positive_int(data.get("newsitemcount"), 0)

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_string(data, "title", self.title)
        build_string(data, "visibilitytype", self.visibility_type)
        return data

    @classmethod
    def create_new(cls, title: str, visibility_type: str = NewsCategoryVisibility.PUBLIC.value) -> NewsCategory:
        return cls().set_title(title).set_visibility_type(visibility_type)

    def set_title(self, title: str | None) -> NewsCategory:
        self.title = assure_string(title)
        return self

    def set_visibility_type(self, visibility_type: Any) -> NewsCategory:
        self.visibility_type = assure_constant(visibility_type, self, "VISIBILITY_TYPE")
        return self

    def new_news_item(self, subject: str, contents: str, staff: Staff | int) -> NewsItem:
        """Build an unsaved news item in this category."""
        return NewsItem.create_new(subject, contents, staff).add_category(self)

    def summary(self) -> str:
        return f"{self.title} (visibility type: {self.visibility_type})"


@dataclass(eq=False)
class NewsItem(ObjectBase):
    """News article; can be commented on."""

    controller = "/News/NewsItem"
    object_xml_name = "newsitem"
    constant_groups = {"TYPE": NewsType, "STATUS": NewsStatus}

    id: int | None = api_field()
    staff_id: int | None = api_field(name="staffid", required_create=True)
    edited_staff_id: int | None = api_field(name="editedstaffid", required_update=True)
    type: int | None = api_field(name="newstype")
    status: int | None = api_field(name="newsstatus")
    author: str | None = api_field()
    author_email: str | None = api_field(name="email")
    from_name: str | None = api_field(name="fromname", filter=False, order=False)
    email: str | None = api_field(filter=False, order=False)
    subject: str | None = api_field(required=True)
    email_subject: str | None = api_field(name="emailsubject")
    dateline: int | None = api_field()
    expiry: int | None = api_field()
    is_synced: bool = api_field(False, name="issynced")
    total_comments: int = api_field(0, name="totalcomments")
    allow_comments: bool = api_field(True, name="allowcomments")
    send_email: bool | None = api_field(None, name="sendemail", filter=False, order=False)
    contents: str | None = api_field(required=True)
    category_ids: list[int] = api_field(default_factory=list, name="newscategoryidlist", order=False)
    user_visibility_custom: bool = api_field(False, name="uservisibilitycustom")
    user_group_ids: list[int] = api_field(default_factory=list, name="usergroupidlist", order=False)
    staff_visibility_custom: bool = api_field(False, name="staffvisibilitycustom")
    staff_group_ids: list[int] = api_field(default_factory=list, name="staffgroupidlist", order=False)

    comments: Comments[NewsComment] = field(init=False, repr=False)
    _staff: Lazy[Staff] = field(init=False, repr=False)
    _categories: Lazy[ResultSet[NewsCategory]] = field(init=False, repr=False)

    def __post_init__(self):
        self.comments = Comments(self, NewsComment)
        self._staff = Lazy(lambda: Staff.get(self.staff_id) if self.staff_id else None)
        self._categories = Lazy(self._load_categories)

    def _load_categories(self) -> ResultSet[NewsCategory] | None:
        if not self.category_ids:
            return None
        return NewsCategory.get_all().filter_by_id(self.category_ids)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.staff_id = assure_positive_int(data.get("staffid"))
        self.type = assure_positive_int(data.get("newstype"))
        self.status = assure_positive_int(data.get("newsstatus"))
        self.author = assure_string(data.get("author"))
        self.author_email = assure_string(data.get("email"))
        self.subject = assure_string(data.get("subject"))
        self.email_subject = assure_string(data.get("emailsubject"))
        self.dateline = assure_positive_int(data.get("dateline"))
        self.expiry = assure_positive_int(data.get("expiry"))
        self.is_synced = assure_bool(data.get("issynced"))
        self.total_comments = assure_positive_int(data.get("totalcomments"), 0)
        self.allow_comments = assure_bool(data.get("allowcomments"))
        self.contents = assure_string(data.get("contents"))
        self.category_ids = parse_id_list(data, "categories", "categoryid")
        self.user_visibility_custom = assure_bool(data.get("uservisibilitycustom"))
        self.user_group_ids = (
            parse_id_list(data, "usergroupidlist", "usergroupid") if self.user_visibility_custom else []
        )
        self.staff_visibility_custom = assure_bool(data.get("staffvisibilitycustom"))
        self.staff_group_ids = (
            parse_id_list(data, "staffgroupidlist", "staffgroupid") if self.staff_visibility_custom else []
        )
        self._staff.reset()
        self._categories.reset()

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_string(data, "subject", self.subject)
        build_string(data, "contents", self.contents)
        if create:
            build_numeric(data, "staffid", self.staff_id)
            build_numeric(data, "newstype", self.type)
        else:
            build_numeric(data, "editedstaffid", self.edited_staff_id)
        build_numeric(data, "newsstatus", self.status)
        build_string(data, "fromname", self.from_name)
        build_string(data, "email", self.email)
        build_string(data, "customemailsubject", self.email_subject)
        build_bool(data, "sendemail", self.send_email)
        build_bool(data, "allowcomments", self.allow_comments)
        build_bool(data, "uservisibilitycustom", self.user_visibility_custom)
        if self.user_visibility_custom:
            build_list(data, "usergroupidlist", self.user_group_ids)
        build_bool(data, "staffvisibilitycustom", self.staff_visibility_custom)
        if self.staff_visibility_custom:
            build_list(data, "staffgroupidlist", self.staff_group_ids)
        build_date(data, "expiry", self.expiry)
        build_list(data, "newscategoryidlist", self.category_ids)
        return data

    @classmethod
    def get_all(cls, news_category: NewsCategory | int | None = None) -> ResultSet[NewsItem]:
        """All news items, or those of one category."""
        if news_category is None:
            return cls.generic_get_all()
        category_id = news_category.id if isinstance(news_category, NewsCategory) else news_category
        return cls.generic_get_all(["ListAll", category_id])

    @classmethod
    def create_new(cls, subject: str, contents: str, staff: Staff | int) -> NewsItem:
        return cls().set_subject(subject).set_contents(contents).set_staff(staff)

    @filterable()
    def is_expired(self, now: float | None = None) -> bool:
        if not self.expiry:
            return False
        return self.expiry < (now if now is not None else time.time())

    def get_comments(self, reload: bool = False) -> ResultSet[NewsComment]:
        return self.comments.get(reload)

    def new_comment(self, creator: Staff | User | str, contents: str) -> NewsComment:
        return self.comments.new(creator, contents)

    def get_staff(self, reload: bool = False) -> Staff | None:
        return self._staff.get(reload)

    def set_staff(self, staff: Staff | int | None) -> NewsItem:
        if isinstance(staff, Staff):
            self.staff_id = staff.id
            self._staff.set(staff)
        else:
            self.staff_id = assure_positive_int(staff)
            self._staff.reset()
        return self

    def set_edited_staff(self, staff: Staff | int | None) -> NewsItem:
        self.edited_staff_id = staff.id if isinstance(staff, Staff) else assure_positive_int(staff)
        return self

    def set_type(self, type: Any) -> NewsItem:
        self.type = assure_constant(type, self, "TYPE")
        return self

    def set_status(self, status: Any) -> NewsItem:
        self.status = assure_constant(status, self, "STATUS")
        return self

    def set_from_name(self, from_name: str | None) -> NewsItem:
        self.from_name = assure_string(from_name)
        return self

    def set_email(self, email: str | None) -> NewsItem:
        self.email = assure_string(email)
        return self

    def set_subject(self, subject: str | None) -> NewsItem:
        self.subject = assure_string(subject)
        return self

    def set_email_subject(self, email_subject: str | None) -> NewsItem:
        self.email_subject = assure_string(email_subject)
        return self

    def set_send_email(self, send_email: Any) -> NewsItem:
        self.send_email = assure_bool(send_email)
        return self

    def set_allow_comments(self, allow_comments: Any) -> NewsItem:
        self.allow_comments = assure_bool(allow_comments)
        return self

    def set_expiry(self, expiry: Any) -> NewsItem:
        """Set from a unix timestamp, a datetime or a date string such as ``12/31/2030``."""
        self.expiry = timestamp_from(expiry)
        return self

    def set_contents(self, contents: str | None) -> NewsItem:
        self.contents = assure_string(contents)
        return self

    def get_categories(self, reload: bool = False) -> ResultSet[NewsCategory]:
        categories = self._categories.get(reload)
        return categories if categories is not None else ResultSet((), object_type=NewsCategory)

    def set_category_ids(self, category_ids: Iterable[Any] | Any) -> NewsItem:
        self.category_ids = _positive_ids(category_ids)
        self._categories.reset()
        return self

    def add_category(self, category: NewsCategory | int, clear: bool = False) -> NewsItem:
        if clear:
            self.category_ids = []
        category_id = category.id if isinstance(category, NewsCategory) else assure_positive_int(category)
        if category_id is not None and category_id not in self.category_ids:
            self.category_ids.append(category_id)
        self._categories.reset()
        return self

    def set_user_visibility_custom(self, user_visibility_custom: Any) -> NewsItem:
        self.user_visibility_custom = assure_bool(user_visibility_custom)
        if not self.user_visibility_custom:
            self.user_group_ids = []
        return self

    def set_user_group_ids(self, user_group_ids: Iterable[Any] | Any) -> NewsItem:
        self.user_group_ids = _positive_ids(user_group_ids)
        return self

    def set_staff_visibility_custom(self, staff_visibility_custom: Any) -> NewsItem:
        self.staff_visibility_custom = assure_bool(staff_visibility_custom)
        if not self.staff_visibility_custom:
            self.staff_group_ids = []
        return self

    def set_staff_group_ids(self, staff_group_ids: Iterable[Any] | Any) -> NewsItem:
        self.staff_group_ids = _positive_ids(staff_group_ids)
        return self

    def summary(self) -> str:
        return f"{self.subject} (type: {self.type}, status: {self.status}, expiry: {self.expiry})"


@dataclass(eq=False)
class NewsComment(CommentBase):
    controller = "/News/Comment"
    object_xml_name = "newsitemcomment"
    parent_id_field = "news_item_id"
    parent_type = NewsItem

    news_item_id: int | None = api_field(name="newsitemid", required_create=True)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        super().parse_data(data)
        self.news_item_id = assure_positive_int(data.get("newsitemid"))

    def build_data(self, create: bool) -> dict[str, Any]:
        data = super().build_data(create)
        build_numeric(data, "newsitemid", self.news_item_id)
        return data

    def get_news_item(self, reload: bool = False) -> NewsItem | None:
        return self.get_parent(reload)


@dataclass(eq=False)
class NewsSubscriber(ObjectBase):
    controller = "/News/Subscriber"
    object_xml_name = "newssubscriber"

    id: int | None = api_field()
    template_group_id: int | None = api_field(name="tgroupid")
    user_id: int | None = api_field(name="userid")
    email: str | None = api_field(required=True)
    is_validated: bool = api_field(False, name="isvalidated")
    user_group_id: int | None = api_field(name="usergroupid")

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.template_group_id = assure_positive_int(data.get("tgroupid"))
        self.user_id = assure_positive_int(data.get("userid"))
        self.email = assure_string(data.get("email"))
        self.is_validated = assure_bool(data.get("isvalidated"))
        self.user_group_id = assure_positive_int(data.get("usergroupid"))

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_string(data, "email", self.email)
        # the API treats any isvalidated value as true, so it is only sent when set
        if create and self.is_validated:
            build_bool(data, "isvalidated", self.is_validated)
        return data

    @classmethod
    def create_new(cls, email: str, is_validated: Any = False) -> NewsSubscriber:
        return cls().set_email(email).set_is_validated(is_validated)

    def set_email(self, email: str | None) -> NewsSubscriber:
        self.email = assure_string(email)
        return self

    def set_is_validated(self, is_validated: Any) -> NewsSubscriber:
        self.is_validated = assure_bool(is_validated)
        return self

    def summary(self) -> str:
        return f"{self.email} ({'' if self.is_validated else 'not '}validated)"
