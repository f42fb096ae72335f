"""Troubleshooter categories, steps and step comments."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum
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
from .base import ObjectBase, parse_id_list
from .comment import CommentBase, Comments
from .department import Department
from .staff import Staff
from .user import User


class TroubleshooterCategoryType(str, Enum):
    GLOBAL = "1"
    PUBLIC = "2"
    PRIVATE = "3"


class StepStatus(IntEnum):
    DRAFT = 1
    PUBLISHED = 2


def _positive_ids(values: Iterable[Any] | Any) -> list[int]:
    ids = (assure_positive_int(value) for value in assure_array(values))
    return [value for value in ids if value is not None]


@dataclass(eq=False)
class TroubleshooterCategory(ObjectBase):
    controller = "/Troubleshooter/Category"
    object_xml_name = "troubleshootercategory"
    constant_groups = {"CATEGORY_TYPE": TroubleshooterCategoryType}

    id: int | None = api_field()
    title: str | None = api_field(required=True)
    category_type: str | None = api_field(name="categorytype", required=True)
    display_order: int | None = api_field(name="displayorder")
    description: str | None = api_field()
    user_visibility_custom: bool = api_field(False, name="uservisibilitycustom")
    user_group_ids: list[int] = api_field(default_factory=list, name="usergroupidlist", order=False)
    staff_visibility_custom: bool = api_field(False, name="staffvisibilitycustom")
    staff_group_ids: list[int] = api_field(default_factory=list, name="staffgroupidlist", order=False)
    staff_id: int | None = api_field(name="staffid", required_create=True)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.title = assure_string(data.get("title"))
        self.category_type = assure_constant(data.get("categorytype"), self, "CATEGORY_TYPE")
        self.description = assure_string(data.get("description"))
        self.display_order = assure_positive_int(data.get("displayorder"))
        self.user_visibility_custom = assure_bool(data.get("uservisibilitycustom"))
        self.user_group_ids = (
            parse_id_list(data, "usergroupidlist", "usergroupid") if self.user_visibility_custom else []
        )
        self.staff_visibility_custom = assure_bool(data.get("staffvisibilitycustom"))
        self.staff_group_ids = (
            parse_id_list(data, "staffgroupidlist", "staffgroupid") if self.staff_visibility_custom else []
        )
        self.staff_id = assure_positive_int(data.get("staffid"))

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_string(data, "title", self.title)
        build_string(data, "categorytype", self.category_type)
        build_string(data, "description", self.description)
        build_numeric(data, "displayorder", self.display_order)
        build_bool(data, "uservisibilitycustom", self.user_visibility_custom)
        if self.user_visibility_custom:
            build_list(data, "usergroupidlist", self.user_group_ids)
        build_bool(data, "staffvisibilitycustom", self.staff_visibility_custom)
        if self.staff_visibility_custom:
            build_list(data, "staffgroupidlist", self.staff_group_ids)
        build_numeric(data, "staffid", self.staff_id)
        return data

    @classmethod
    def create_new(
        cls,
        title: str,
        staff: Staff | int,
        category_type: str = TroubleshooterCategoryType.GLOBAL.value,
    ) -> TroubleshooterCategory:
        category = cls().set_title(title).set_category_type(category_type)
        category.staff_id = staff.id if isinstance(staff, Staff) else assure_positive_int(staff)
        return category

    def set_title(self, title: str | None) -> TroubleshooterCategory:
        self.title = assure_string(title)
        return self

    def set_category_type(self, category_type: Any) -> TroubleshooterCategory:
        self.category_type = assure_constant(category_type, self, "CATEGORY_TYPE")
        return self

    def set_description(self, description: str | None) -> TroubleshooterCategory:
        self.description = assure_string(description)
        return self

    def set_display_order(self, display_order: Any) -> TroubleshooterCategory:
        self.display_order = assure_positive_int(display_order)
        return self

    def set_user_group_ids(self, user_group_ids: Iterable[Any] | Any) -> TroubleshooterCategory:
        self.user_group_ids = _positive_ids(user_group_ids)
        self.user_visibility_custom = bool(self.user_group_ids)
        return self

    def set_staff_group_ids(self, staff_group_ids: Iterable[Any] | Any) -> TroubleshooterCategory:
        self.staff_group_ids = _positive_ids(staff_group_ids)
        self.staff_visibility_custom = bool(self.staff_group_ids)
        return self

    def new_step(self, subject: str, contents: str, staff: Staff | int) -> TroubleshooterStep:
        """Build an unsaved step in this category."""
        return TroubleshooterStep.create_new(self, subject, contents, staff)

    def summary(self) -> str:
        return f"{self.title} (type: {self.category_type})"


@dataclass(eq=False)
class TroubleshooterStep(ObjectBase):
    """
    One step of a troubleshooter guide; can be commented on.

    A step may redirect the user to open a ticket in a chosen department.
    """

    controller = "/Troubleshooter/Step"
    object_xml_name = "troubleshooterstep"
    constant_groups = {"STATUS": StepStatus}

    id: int | None = api_field()
    category_id: int | None = api_field(name="categoryid", required_create=True)
    staff_id: int | None = api_field(name="staffid", required_create=True)
    edited_staff_id: int | None = api_field(name="editedstaffid", required_update=True)
    subject: str | None = api_field(required=True)
    contents: str | None = api_field(required=True)
    display_order: int | None = api_field(name="displayorder")
    allow_comments: bool = api_field(True, name="allowcomments")
    has_attachments: bool = api_field(False, name="hasattachments")
    enable_ticket_redirection: bool = api_field(False, name="redirecttickets")
    redirect_department_id: int | None = api_field(name="redirectdepartmentid")
    ticket_type_id: int | None = api_field(name="tickettypeid")
    ticket_priority_id: int | None = api_field(name="priorityid")
    ticket_subject: str | None = api_field(name="ticketsubject")
    status: int | None = api_field(name="stepstatus")
    parent_step_ids: list[int] = api_field(default_factory=list, name="parentstepidlist", order=False)
    child_step_ids: list[int] = api_field(default_factory=list, name="childsteps", order=False)

    comments: Comments[TroubleshooterComment] = field(init=False, repr=False)
    _category: Lazy[TroubleshooterCategory] = field(init=False, repr=False)
    _redirect_department: Lazy[Department] = field(init=False, repr=False)

    def __post_init__(self):
        self.comments = Comments(self, TroubleshooterComment)
        self._category = Lazy(
            lambda: TroubleshooterCategory.get(self.category_id) if self.category_id else None
        )
        self._redirect_department = Lazy(
            lambda: Department.get(self.redirect_department_id) if self.redirect_department_id else None
        )

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.category_id = assure_positive_int(data.get("categoryid"))
        self.staff_id = assure_positive_int(data.get("staffid"))
        self.subject = assure_string(data.get("subject"))
        self.display_order = assure_int(data.get("displayorder"))
        self.allow_comments = assure_bool(data.get("allowcomments"))
        self.has_attachments = assure_bool(data.get("hasattachments"))
        self.enable_ticket_redirection = assure_bool(data.get("redirecttickets"))
        self.redirect_department_id = assure_positive_int(data.get("redirectdepartmentid"))
        self.ticket_type_id = assure_positive_int(data.get("tickettypeid"))
        self.ticket_priority_id = assure_positive_int(data.get("priorityid"))
        self.ticket_subject = assure_string(data.get("ticketsubject"))
        self.status = assure_constant(assure_int(data.get("stepstatus")), self, "STATUS")
        self.contents = assure_string(data.get("contents"))
        self.parent_step_ids = parse_id_list(data, "parentsteps", "id")
        self.child_step_ids = parse_id_list(data, "childsteps", "id")
        self._category.reset()
        self._redirect_department.reset()

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_numeric(data, "categoryid", self.category_id)
        build_string(data, "subject", self.subject)
        build_string(data, "contents", self.contents)
        if create:
            build_numeric(data, "staffid", self.staff_id)
        else:
            build_numeric(data, "editedstaffid", self.edited_staff_id)
        build_numeric(data, "displayorder", self.display_order)
        build_numeric(data, "stepstatus", self.status)
        build_bool(data, "allowcomments", self.allow_comments)
        build_bool(data, "enableticketredirection", self.enable_ticket_redirection)
        if self.enable_ticket_redirection:
            build_numeric(data, "redirectdepartmentid", self.redirect_department_id)
            build_numeric(data, "tickettypeid", self.ticket_type_id)
            build_numeric(data, "ticketpriorityid", self.ticket_priority_id)
            build_string(data, "ticketsubject", self.ticket_subject)
        build_list(data, "parentstepidlist", self.parent_step_ids)
        return data

    @classmethod
    def create_new(
        cls,
        category: TroubleshooterCategory | int,
        subject: str,
        contents: str,
        staff: Staff | int,
    ) -> TroubleshooterStep:
        step = cls().set_category(category).set_subject(subject).set_contents(contents)
        step.staff_id = staff.id if isinstance(staff, Staff) else assure_positive_int(staff)
        return step

    def get_comments(self, reload: bool = False) -> ResultSet[TroubleshooterComment]:
        return self.comments.get(reload)

    def new_comment(self, creator: Staff | User | str, contents: str) -> TroubleshooterComment:
        return self.comments.new(creator, contents)

    def get_category(self, reload: bool = False) -> TroubleshooterCategory | None:
        return self._category.get(reload)

    def set_category(self, category: TroubleshooterCategory | int | None) -> TroubleshooterStep:
        if isinstance(category, TroubleshooterCategory):
            self.category_id = category.id
            self._category.set(category)
        else:
            self.category_id = assure_positive_int(category)
            self._category.reset()
        return self

    def set_edited_staff(self, staff: Staff | int | None) -> TroubleshooterStep:
        self.edited_staff_id = staff.id if isinstance(staff, Staff) else assure_positive_int(staff)
        return self

    def set_subject(self, subject: str | None) -> TroubleshooterStep:
        self.subject = assure_string(subject)
        return self

    def set_contents(self, contents: str | None) -> TroubleshooterStep:
        self.contents = assure_string(contents)
        return self

    def set_display_order(self, display_order: Any) -> TroubleshooterStep:
        self.display_order = assure_int(display_order)
        return self

    def set_status(self, status: Any) -> TroubleshooterStep:
        self.status = assure_constant(status, self, "STATUS")
        return self

    def set_allow_comments(self, allow_comments: Any) -> TroubleshooterStep:
        self.allow_comments = assure_bool(allow_comments)
        return self

    def get_redirect_department(self, reload: bool = False) -> Department | None:
        return self._redirect_department.get(reload)

    def set_ticket_redirection(
        self,
        department: Department | int | None,
        ticket_type_id: int | None = None,
        ticket_priority_id: int | None = None,
        ticket_subject: str | None = None,
    ) -> TroubleshooterStep:
        """Redirect users to a new ticket in ``department``; None turns redirection off."""
        if department is None:
            self.enable_ticket_redirection = False
            self.redirect_department_id = None
            self._redirect_department.reset()
            return self
        self.enable_ticket_redirection = True
        if isinstance(department, Department):
            self.redirect_department_id = department.id
            self._redirect_department.set(department)
        else:
            self.redirect_department_id = assure_positive_int(department)
            self._redirect_department.reset()
        self.ticket_type_id = assure_positive_int(ticket_type_id)
        self.ticket_priority_id = assure_positive_int(ticket_priority_id)
        self.ticket_subject = assure_string(ticket_subject)
        return self

    def set_parent_step_ids(self, parent_step_ids: Iterable[Any] | Any) -> TroubleshooterStep:
        self.parent_step_ids = _positive_ids(parent_step_ids)
        return self

    def add_parent_step(self, step: TroubleshooterStep | int) -> TroubleshooterStep:
        step_id = step.id if isinstance(step, TroubleshooterStep) else assure_positive_int(step)
        if step_id is not None and step_id not in self.parent_step_ids:
            self.parent_step_ids.append(step_id)
        return self

    def get_child_steps(self) -> ResultSet[TroubleshooterStep]:
        if not self.child_step_ids:
            return ResultSet((), object_type=TroubleshooterStep)
        return TroubleshooterStep.get_all().filter_by_id(self.child_step_ids)

    def summary(self) -> str:
        return f"{self.subject} (status: {self.status})"


@dataclass(eq=False)
class TroubleshooterComment(CommentBase):
    controller = "/Troubleshooter/Comment"
    object_xml_name = "troubleshooterstepcomment"
    parent_id_field = "step_id"
    parent_type = TroubleshooterStep

    step_id: int | None = api_field(name="troubleshooterstepid", required_create=True)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        super().parse_data(data)
        self.step_id = assure_positive_int(data.get("troubleshooterstepid"))

    def build_data(self, create: bool) -> dict[str, Any]:
        data = super().build_data(create)
        build_numeric(data, "troubleshooterstepid", self.step_id)
        return data

    def get_step(self, reload: bool = False) -> TroubleshooterStep | None:
        return self.get_parent(reload)
