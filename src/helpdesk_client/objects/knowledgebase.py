"""Knowledgebase articles, their comments and attachments."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any

from ..common.coercion import (
    assure_array,
    assure_bool,
    assure_constant,
    assure_int,
    assure_positive_int,
    assure_string,
)
from ..common.fields import api_field
from ..common.lazy import Lazy
from ..common.result_set import ResultSet
from ..common.wire import build_bool, build_list, build_numeric, build_string
from .attachment import AttachmentBase
from .base import ObjectBase, parse_id_list
from .comment import CommentBase, Comments
from .staff import Staff
from .user import User


class ArticleStatus(IntEnum):
    PUBLISHED = 1
    DRAFT = 2


# Page size used when only a starting article id is given
DEFAULT_PAGE_SIZE = 1000


@dataclass(eq=False)
class KnowledgebaseArticle(ObjectBase):
    """Knowledgebase article; can be commented on and carry attachments."""

    controller = "/Knowledgebase/Article"
    object_xml_name = "kbarticle"
    constant_groups = {"STATUS": ArticleStatus}

    id: int | None = api_field(name="kbarticleid")
    subject: str | None = api_field(required=True)
    contents: str | None = api_field(required=True)
    creator_id: int | None = api_field(name="creatorid", required_create=True)
    edited_staff_id: int | None = api_field(name="editedstaffid", required_update=True)
    status: int | None = api_field(name="articlestatus")
    is_featured: bool = api_field(False, name="isfeatured")
    allow_comments: bool = api_field(True, name="allowcomments")
    total_comments: int = api_field(0, name="totalcomments")
    has_attachments: bool = api_field(False, name="hasattachments")
    category_ids: list[int] = api_field(default_factory=list, name="categoryid", order=False)

    comments: Comments[KnowledgebaseComment] = field(init=False, repr=False)
    _creator: Lazy[Staff] = field(init=False, repr=False)
    _attachments: Lazy[ResultSet[KnowledgebaseAttachment]] = field(init=False, repr=False)

    def __post_init__(self):
        self.comments = Comments(self, KnowledgebaseComment)
        self._creator = Lazy(lambda: Staff.get(self.creator_id) if self.creator_id else None)
        self._attachments = Lazy(
            lambda: KnowledgebaseAttachment.get_all(self.id) if self.id and self.has_attachments else None
        )

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("kbarticleid"))
        self.subject = assure_string(data.get("subject"))
        self.contents = assure_string(data.get("contents"))
        self.creator_id = assure_positive_int(data.get("creatorid"))
        self.status = assure_constant(assure_int(data.get("articlestatus")), self, "STATUS")
        self.is_featured = assure_bool(data.get("isfeatured"))
        self.allow_comments = assure_bool(data.get("allowcomments"))
        self.total_comments = assure_int(data.get("totalcomments"), 0)
        self.has_attachments = assure_bool(data.get("hasattachments"))
        self.category_ids = parse_id_list(data, "categories", "categoryid")
        self._creator.reset()
        self._attachments.reset()

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_string(data, "subject", self.subject)
        build_string(data, "contents", self.contents)
        if create:
            build_numeric(data, "creatorid", self.creator_id)
        else:
            build_numeric(data, "editedstaffid", self.edited_staff_id)
        build_numeric(data, "articlestatus", self.status)
        build_bool(data, "isfeatured", self.is_featured)
        build_bool(data, "allowcomments", self.allow_comments)
        build_list(data, "categoryid", self.category_ids)
        return data

    @classmethod
    def get_all(
        cls,
        category_id: int | None = None,
        max_items: int | None = None,
        starting_article_id: int | None = None,
    ) -> ResultSet[KnowledgebaseArticle]:
        """
        List articles of a category, optionally paged on the server.

        Args:
            category_id: Category to list; None lists every article
            max_items: Maximum number of articles returned
            starting_article_id: Only articles with this id or higher
        """
        if category_id is None:
            return cls.generic_get_all()
        parameters: list[Any] = ["ListAll", category_id]
        if assure_positive_int(max_items):
            parameters.append(max_items)
        if assure_positive_int(starting_article_id):
            if not assure_positive_int(max_items):
                parameters.append(DEFAULT_PAGE_SIZE)
            parameters.append(starting_article_id)
        return cls.generic_get_all(parameters)

    @classmethod
    def create_new(cls, subject: str, contents: str, staff: Staff | int) -> KnowledgebaseArticle:
        return cls().set_subject(subject).set_contents(contents).set_creator(staff)

    def get_comments(self, reload: bool = False) -> ResultSet[KnowledgebaseComment]:
        return self.comments.get(reload)

    def new_comment(self, creator: Staff | User | str, contents: str) -> KnowledgebaseComment:
        return self.comments.new(creator, contents)

    def get_attachments(self, reload: bool = False) -> ResultSet[KnowledgebaseAttachment]:
        attachments = self._attachments.get(reload)
        if attachments is None:
            return ResultSet((), object_type=KnowledgebaseAttachment)
        return attachments

    def new_attachment(self, contents: bytes, file_name: str) -> KnowledgebaseAttachment:
        return KnowledgebaseAttachment.create_new(self, contents, file_name)

    def new_attachment_from_file(self, path: str | Path, file_name: str | None = None) -> KnowledgebaseAttachment:
        attachment = KnowledgebaseAttachment(article_id=self.id)
        attachment.set_contents_from_file(path, file_name)
        return attachment

    def get_creator(self, reload: bool = False) -> Staff | None:
        return self._creator.get(reload)

    def set_creator(self, staff: Staff | int | None) -> KnowledgebaseArticle:
        if isinstance(staff, Staff):
            self.creator_id = staff.id
            self._creator.set(staff)
        else:
            self.creator_id = assure_positive_int(staff)
            self._creator.reset()
        return self

    def set_edited_staff(self, staff: Staff | int | None) -> KnowledgebaseArticle:
        self.edited_staff_id = staff.id if isinstance(staff, Staff) else assure_positive_int(staff)
        return self

    def set_subject(self, subject: str | None) -> KnowledgebaseArticle:
        self.subject = assure_string(subject)
        return self

    def set_contents(self, contents: str | None) -> KnowledgebaseArticle:
        self.contents = assure_string(contents)
        return self

    def set_status(self, status: Any) -> KnowledgebaseArticle:
        self.status = assure_constant(status, self, "STATUS")
        return self

    def set_is_featured(self, is_featured: Any) -> KnowledgebaseArticle:
        self.is_featured = assure_bool(is_featured)
        return self

    def set_allow_comments(self, allow_comments: Any) -> KnowledgebaseArticle:
        self.allow_comments = assure_bool(allow_comments)
        return self

    def set_category_ids(self, category_ids: Iterable[Any] | Any) -> KnowledgebaseArticle:
        ids = (assure_positive_int(value) for value in assure_array(category_ids))
        self.category_ids = [value for value in ids if value is not None]
        return self

    def summary(self) -> str:
        return f"{self.subject} (status: {self.status})"


@dataclass(eq=False)
class KnowledgebaseComment(CommentBase):
    controller = "/Knowledgebase/Comment"
    object_xml_name = "kbarticlecomment"
    parent_id_field = "article_id"
    parent_type = KnowledgebaseArticle

    article_id: int | None = api_field(name="knowledgebasearticleid", required_create=True)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        super().parse_data(data)
        self.article_id = assure_positive_int(data.get("kbarticleid"))

    def build_data(self, create: bool) -> dict[str, Any]:
        data = super().build_data(create)
        build_numeric(data, "knowledgebasearticleid", self.article_id)
        return data

    def get_article(self, reload: bool = False) -> KnowledgebaseArticle | None:
        return self.get_parent(reload)


@dataclass(eq=False)
class KnowledgebaseAttachment(AttachmentBase):
    controller = "/Knowledgebase/Attachment"
    object_xml_name = "kbattachment"
    parent_id_field = "article_id"
    parent_wire_name = "kbarticleid"

    article_id: int | None = api_field(name="kbarticleid", required_create=True)

    @classmethod
    def create_new(
        cls, article: KnowledgebaseArticle | int, contents: bytes, file_name: str
    ) -> KnowledgebaseAttachment:
        article_id = article.id if isinstance(article, KnowledgebaseArticle) else article
        attachment = cls(article_id=article_id)
        attachment.set_contents(contents).set_file_name(file_name)
        return attachment
