"""Tickets and their types, posts, attachments and custom fields."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum
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
from ..common.fields import api_field, filterable
from ..common.lazy import Lazy
from ..common.result_set import ResultSet
from ..common.wire import build_bool, build_numeric, build_string
from ..errors import ValidationError
from ..transport.decoder import ATTRIBUTES_KEY
from .attachment import AttachmentBase
from .base import ObjectBase, extract_objects
from .custom_field import CustomField, CustomFieldGroup, CustomFieldGroups
from .department import Department
from .staff import Staff
from .user import User


class TicketTypeVisibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class CreationType(str, Enum):
    DEFAULT = "default"
    PHONE = "phone"


class PostCreator(IntEnum):
    STAFF = 1
    USER = 2
    CC = 3
    BCC = 4
    THIRD_PARTY = 5


# Placeholder for "any" in ticket list filters
ANY = -1


def _id_filter(values: Any, object_type: type[ObjectBase]) -> str:
    """Comma separated ids for a list filter path segment, or ANY."""
    if values is None:
        return str(ANY)
    if isinstance(values, (ObjectBase, int, str)):
        values = [values]
    ids = [value.get_id() if isinstance(value, object_type) else value for value in values]
    ids = [str(value) for value in ids if assure_positive_int(value) is not None]
    return ",".join(ids) if ids else str(ANY)


@dataclass(eq=False)
class TicketType(ObjectBase):
    controller = "/Tickets/TicketType"
    object_xml_name = "tickettype"
    read_only = True
    constant_groups = {"TYPE": TicketTypeVisibility}

    id: int | None = api_field()
    title: str | None = api_field()
    display_order: int | None = api_field(name="displayorder")
    department_id: int | None = api_field(name="departmentid")
    display_icon: str | None = api_field(name="displayicon", filter=False, order=False)
    type: str | None = api_field()
    user_visibility_custom: bool = api_field(False, name="uservisibilitycustom")
    user_group_ids: list[int] = api_field(default_factory=list, name="usergroupid", order=False)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.title = assure_string(data.get("title"))
        self.display_order = assure_int(data.get("displayorder"))
        self.department_id = assure_positive_int(data.get("departmentid"))
        self.display_icon = assure_string(data.get("displayicon"))
        self.type = assure_constant(data.get("type"), self, "TYPE")
        self.user_visibility_custom = assure_bool(data.get("uservisibilitycustom"))
        self.user_group_ids = []
        if self.user_visibility_custom:
            ids = (assure_positive_int(value) for value in assure_array(data.get("usergroupid")))
            self.user_group_ids = [value for value in ids if value is not None]

    def build_data(self, create: bool) -> dict[str, Any]:
        raise self._unsupported("create" if create else "update", "the resource is read-only")

    def is_visible_to_user_group(self, user_group_id: int) -> bool:
        if self.type != TicketTypeVisibility.PUBLIC.value:
            return False
        return not self.user_visibility_custom or user_group_id in self.user_group_ids

    def summary(self) -> str:
        return f"{self.title} (type: {self.type})"


@dataclass(eq=False)
class TicketCustomFieldGroup(CustomFieldGroup):
    controller = "/Tickets/TicketCustomField"


@dataclass(eq=False)
class Ticket(ObjectBase):
    """
    Helpdesk ticket.

    A ticket is opened by a staff member, an existing user, or an
    unregistered requester identified by name and email, in which case the
    server creates the user.
    """

    controller = "/Tickets/Ticket"
    object_xml_name = "ticket"
    constant_groups = {"CREATION_TYPE": CreationType}

    id: int | None = api_field()
    display_id: str | None = api_field(name="displayid")
    department_id: int | None = api_field(name="departmentid", required_create=True)
    status_id: int | None = api_field(name="ticketstatusid")
    priority_id: int | None = api_field(name="ticketpriorityid")
    type_id: int | None = api_field(name="tickettypeid")
    user_id: int | None = api_field(name="userid")
    user_organization_id: int | None = api_field(name="userorganizationid")
    owner_staff_id: int | None = api_field(name="ownerstaffid")
    owner_staff_name: str | None = api_field(name="ownerstaffname")
    staff_id: int | None = api_field(name="staffid")
    full_name: str | None = api_field(name="fullname", required=True)
    email: str | None = api_field(required=True)
    last_replier: str | None = api_field(name="lastreplier")
    subject: str | None = api_field(required=True)
    contents: str | None = api_field(required_create=True, filter=False, order=False)
    creation_time: int | None = api_field(name="creationtime")
    last_activity: int | None = api_field(name="lastactivity")
    replies: int = api_field(0)
    is_escalated: bool = api_field(False, name="isescalated")
    tags: list[str] = api_field(default_factory=list, order=False)
    creation_type: str | None = api_field(CreationType.DEFAULT.value, name="type", filter=False, order=False)
    auto_create_user: bool = api_field(False, name="autouserid", filter=False, order=False)
    ignore_auto_responder: bool = api_field(False, name="ignoreautoresponder", filter=False, order=False)

    custom_fields: CustomFieldGroups[TicketCustomFieldGroup] = field(init=False, repr=False)
    _department: Lazy[Department] = field(init=False, repr=False)
    _owner_staff: Lazy[Staff] = field(init=False, repr=False)
    _user: Lazy[User] = field(init=False, repr=False)
    _posts: Lazy[ResultSet[TicketPost]] = field(init=False, repr=False)
    _attachments: Lazy[ResultSet[TicketAttachment]] = field(init=False, repr=False)

    def __post_init__(self):
        self.custom_fields = CustomFieldGroups(self, TicketCustomFieldGroup)
        self._department = Lazy(lambda: Department.get(self.department_id) if self.department_id else None)
        self._owner_staff = Lazy(lambda: Staff.get(self.owner_staff_id) if self.owner_staff_id else None)
        self._user = Lazy(lambda: User.get(self.user_id) if self.user_id else None)
        self._posts = Lazy(lambda: TicketPost.get_all(self.id) if self.id else None)
        self._attachments = Lazy(lambda: TicketAttachment.get_all(self.id) if self.id else None)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        attributes = data.get(ATTRIBUTES_KEY) or {}
        self.id = assure_positive_int(attributes.get("id", data.get("id")))
        self.display_id = assure_string(data.get("displayid"))
        self.department_id = assure_positive_int(data.get("departmentid"))
        self.status_id = assure_positive_int(data.get("statusid"))
        self.priority_id = assure_positive_int(data.get("priorityid"))
        self.type_id = assure_positive_int(data.get("typeid"))
        self.user_id = assure_positive_int(data.get("userid"))
        self.user_organization_id = assure_positive_int(data.get("userorganizationid"))
        self.owner_staff_id = assure_positive_int(data.get("ownerstaffid"))
        self.owner_staff_name = assure_string(data.get("ownerstaffname"))
        self.full_name = assure_string(data.get("fullname"))
        self.email = assure_string(data.get("email"))
        self.last_replier = assure_string(data.get("lastreplier"))
        self.subject = assure_string(data.get("subject"))
        self.creation_time = assure_positive_int(data.get("creationtime"))
        self.last_activity = assure_positive_int(data.get("lastactivity"))
        self.replies = assure_int(data.get("replies"), 0)
        self.is_escalated = assure_bool(data.get("isescalated"))
        tags = assure_string(data.get("tags"), "")
        self.tags = [tag for tag in tags.split() if tag]

        self._department.reset()
        self._owner_staff.reset()
        self._user.reset()
        self._attachments.reset()
        self._posts.reset()
        posts = data.get("posts")
        if isinstance(posts, list) and posts and isinstance(posts[0], Mapping):
            entries = extract_objects(posts[0], TicketPost.object_xml_name, "TicketPost")
            self._posts.set(ResultSet(
                [TicketPost.from_data(entry) for entry in entries], object_type=TicketPost
            ))

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_string(data, "subject", self.subject)
        build_string(data, "fullname", self.full_name)
        build_string(data, "email", self.email)
        build_numeric(data, "departmentid", self.department_id)
        build_numeric(data, "ticketstatusid", self.status_id)
        build_numeric(data, "ticketpriorityid", self.priority_id)
        build_numeric(data, "tickettypeid", self.type_id)
        build_numeric(data, "ownerstaffid", self.owner_staff_id)
        if not create:
            build_numeric(data, "userid", self.user_id)
            return data

        build_string(data, "contents", self.contents)
        build_string(data, "type", self.creation_type)
        if self.staff_id is not None:
            build_numeric(data, "staffid", self.staff_id)
        elif self.user_id is not None:
            build_numeric(data, "userid", self.user_id)
        elif self.auto_create_user:
            build_bool(data, "autouserid", True)
        else:
            raise ValidationError(
                "A staff member, a user, or automatic user creation is required to create Ticket",
                field_name="user_id",
                resource_type=type(self).__name__,
                operation="create",
            )
        if self.ignore_auto_responder:
            build_bool(data, "ignoreautoresponder", True)
        return data

    @classmethod
    def get_all(
        cls,
        departments: Any,
        statuses: Any = None,
        owner_staff: Any = None,
        users: Any = None,
        max_items: int | None = None,
        starting_ticket_id: int | None = None,
        sort_field: str | None = None,
        sort_order: str | None = None,
    ) -> ResultSet[Ticket]:
        """
        List tickets of one or more departments.

        Args:
            departments: Department(s) or id(s) to list
            statuses: Limit to these ticket status ids
            owner_staff: Limit to tickets owned by these staff members
            users: Limit to tickets of these users
            max_items: Maximum number of tickets returned
            starting_ticket_id: Offset on the server
            sort_field: Server-side sort field
            sort_order: ASC or DESC
        """
        parameters: list[Any] = [
            "ListAll",
            _id_filter(departments, Department),
            _id_filter(statuses, ObjectBase),
            _id_filter(owner_staff, Staff),
            _id_filter(users, User),
        ]
        if assure_positive_int(max_items):
            parameters.append(max_items)
            if assure_positive_int(starting_ticket_id):
                parameters.append(starting_ticket_id)
                if sort_field:
                    parameters.append(sort_field)
                    parameters.append(sort_order or "ASC")
        return cls.generic_get_all(parameters)

    @classmethod
    def create_new(cls, department: Department | int, creator: Staff | User, contents: str, subject: str) -> Ticket:
        """Build an unsaved ticket opened by a staff member or an existing user."""
        ticket = cls().set_department(department).set_contents(contents).set_subject(subject)
        if isinstance(creator, Staff):
            ticket.staff_id = creator.id
            ticket.full_name = creator.full_name
            ticket.email = creator.email
        else:
            ticket.set_user(creator)
            ticket.full_name = creator.full_name
            ticket.email = creator.email[0] if creator.email else None
        return ticket

    @classmethod
    def create_new_auto(
        cls, department: Department | int, full_name: str, email: str, contents: str, subject: str
    ) -> Ticket:
        """Build an unsaved ticket for a requester the server will register as a user."""
        ticket = cls().set_department(department).set_contents(contents).set_subject(subject)
        ticket.full_name = assure_string(full_name)
        ticket.email = assure_string(email)
        ticket.auto_create_user = True
        return ticket

    @filterable()
    def has_owner(self) -> bool:
        return self.owner_staff_id is not None

    def get_department(self, reload: bool = False) -> Department | None:
        return self._department.get(reload)

    def set_department(self, department: Department | int | None) -> Ticket:
        if isinstance(department, Department):
            self.department_id = department.id
            self._department.set(department)
        else:
            self.department_id = assure_positive_int(department)
            self._department.reset()
        return self

    def get_owner_staff(self, reload: bool = False) -> Staff | None:
        return self._owner_staff.get(reload)

    def set_owner_staff(self, staff: Staff | int | None) -> Ticket:
        if isinstance(staff, Staff):
            self.owner_staff_id = staff.id
            self._owner_staff.set(staff)
        else:
            self.owner_staff_id = assure_positive_int(staff)
            self._owner_staff.reset()
        return self

    def get_user(self, reload: bool = False) -> User | None:
        return self._user.get(reload)

    def set_user(self, user: User | int | None) -> Ticket:
        if isinstance(user, User):
            self.user_id = user.id
            self._user.set(user)
        else:
            self.user_id = assure_positive_int(user)
            self._user.reset()
        return self

    def set_status_id(self, status_id: Any) -> Ticket:
        self.status_id = assure_positive_int(status_id)
        return self

    def set_priority_id(self, priority_id: Any) -> Ticket:
        self.priority_id = assure_positive_int(priority_id)
        return self

    def set_type(self, ticket_type: TicketType | int | None) -> Ticket:
        self.type_id = ticket_type.id if isinstance(ticket_type, TicketType) else assure_positive_int(ticket_type)
        return self

    def set_subject(self, subject: str | None) -> Ticket:
        self.subject = assure_string(subject)
        return self

    def set_contents(self, contents: str | None) -> Ticket:
        self.contents = assure_string(contents)
        return self

    def set_full_name(self, full_name: str | None) -> Ticket:
        self.full_name = assure_string(full_name)
        return self

    def set_email(self, email: str | None) -> Ticket:
        self.email = assure_string(email)
        return self

    def set_creation_type(self, creation_type: Any) -> Ticket:
        self.creation_type = assure_constant(creation_type, self, "CREATION_TYPE", CreationType.DEFAULT.value)
        return self

    def set_ignore_auto_responder(self, ignore_auto_responder: Any) -> Ticket:
        self.ignore_auto_responder = assure_bool(ignore_auto_responder)
        return self

    def get_posts(self, reload: bool = False) -> ResultSet[TicketPost]:
        posts = self._posts.get(reload)
        return posts if posts is not None else ResultSet((), object_type=TicketPost)

    def new_post(self, creator: Staff | User, contents: str) -> TicketPost:
        return TicketPost.create_new(self, creator, contents)

    def get_attachments(self, reload: bool = False) -> ResultSet[TicketAttachment]:
        attachments = self._attachments.get(reload)
        return attachments if attachments is not None else ResultSet((), object_type=TicketAttachment)

    def get_custom_field_groups(self, reload: bool = False) -> ResultSet[TicketCustomFieldGroup]:
        return self.custom_fields.get(reload)

    def get_custom_field(self, name: str) -> CustomField | None:
        return self.custom_fields.get_field(name)

    def get_custom_field_value(self, name: str) -> Any:
        return self.custom_fields.get_field_value(name)

    def set_custom_field_value(self, name: str, value: Any) -> Ticket:
        self.custom_fields.set_field_value(name, value)
        return self

    def update_custom_fields(self) -> Ticket:
        self.custom_fields.update()
        return self

    def summary(self) -> str:
        return f"{self.subject} (display id: {self.display_id}, requester: {self.full_name})"


@dataclass(eq=False)
class TicketPost(ObjectBase):
    """Message in a ticket thread, written by a staff member or a user."""

    controller = "/Tickets/TicketPost"
    object_xml_name = "post"
    constant_groups = {"CREATOR": PostCreator}

    id: int | None = api_field()
    ticket_id: int | None = api_field(name="ticketid", required_create=True)
    dateline: int | None = api_field()
    user_id: int | None = api_field(name="userid")
    full_name: str | None = api_field(name="fullname")
    email: str | None = api_field()
    email_to: str | None = api_field(name="emailto")
    ip_address: str | None = api_field(name="ipaddress")
    has_attachments: bool = api_field(False, name="hasattachments")
    creator: int | None = api_field()
    is_third_party: bool = api_field(False, name="isthirdparty")
    is_html: bool = api_field(False, name="ishtml")
    is_emailed: bool = api_field(False, name="isemailed")
    staff_id: int | None = api_field(name="staffid")
    is_survey_comment: bool = api_field(False, name="issurveycomment")
    subject: str | None = api_field()
    contents: str | None = api_field(required=True)
    is_private: bool | None = api_field(False, name="isprivate")

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.ticket_id = assure_positive_int(data.get("ticketid"))
        self.dateline = assure_positive_int(data.get("dateline"))
        self.user_id = assure_positive_int(data.get("userid"))
        self.full_name = assure_string(data.get("fullname"))
        self.email = assure_string(data.get("email"))
        self.email_to = assure_string(data.get("emailto"))
        self.ip_address = assure_string(data.get("ipaddress"))
        self.has_attachments = assure_bool(data.get("hasattachments"))
        self.creator = assure_constant(assure_int(data.get("creator")), self, "CREATOR")
        self.is_third_party = assure_bool(data.get("isthirdparty"))
        self.is_html = assure_bool(data.get("ishtml"))
        self.is_emailed = assure_bool(data.get("isemailed"))
        self.staff_id = assure_positive_int(data.get("staffid"))
        self.is_survey_comment = assure_bool(data.get("issurveycomment"))
        self.contents = assure_string(data.get("contents"))
        # not returned when listing all posts of a ticket
        self.is_private = assure_bool(data["isprivate"]) if "isprivate" in data else None

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        if self.staff_id is None and self.user_id is None:
            raise ValidationError(
                "Value for API fields 'staffid' or 'userid' is required to create TicketPost",
                field_name="staff_id",
                resource_type=type(self).__name__,
                operation="create" if create else "update",
            )
        data: dict[str, Any] = {}
        build_numeric(data, "ticketid", self.ticket_id)
        data["subject"] = self.subject or ""
        build_string(data, "contents", self.contents)
        build_bool(data, "isprivate", self.is_private)
        if self.staff_id is not None:
            build_numeric(data, "staffid", self.staff_id)
        else:
            build_numeric(data, "userid", self.user_id)
        return data

    def get_id(self, complete: bool = False) -> Any:
        return [self.ticket_id, self.id] if complete else self.id

    def update(self) -> TicketPost:
        raise self._unsupported("update", "ticket posts cannot be edited")

    @classmethod
    def get_all(cls, ticket: Ticket | int) -> ResultSet[TicketPost]:
        ticket_id = ticket.id if isinstance(ticket, Ticket) else ticket
        return cls.generic_get_all(["ListAll", ticket_id])

    @classmethod
    def get(cls, ticket_id: int, object_id: int) -> TicketPost | None:
        return cls.generic_get([ticket_id, object_id])

    @classmethod
    def create_new(cls, ticket: Ticket | int, creator: Staff | User, contents: str) -> TicketPost:
        post = cls().set_creator(creator).set_contents(contents)
        post.ticket_id = ticket.id if isinstance(ticket, Ticket) else assure_positive_int(ticket)
        return post

    def set_creator(self, creator: Staff | User | int, creator_type: int | None = None) -> TicketPost:
        """Set the author; a bare id needs ``creator_type`` (STAFF or USER)."""
        if isinstance(creator, Staff):
            self.staff_id, self.user_id = creator.id, None
            self.creator = PostCreator.STAFF.value
        elif isinstance(creator, User):
            self.user_id, self.staff_id = creator.id, None
            self.creator = PostCreator.USER.value
        elif creator_type == PostCreator.STAFF:
            self.staff_id, self.user_id = assure_positive_int(creator), None
            self.creator = PostCreator.STAFF.value
        elif creator_type == PostCreator.USER:
            self.user_id, self.staff_id = assure_positive_int(creator), None
            self.creator = PostCreator.USER.value
        return self

    def set_subject(self, subject: str | None) -> TicketPost:
        self.subject = assure_string(subject)
        return self

    def set_contents(self, contents: str | None) -> TicketPost:
        self.contents = assure_string(contents)
        return self

    def set_is_private(self, is_private: Any) -> TicketPost:
        self.is_private = assure_bool(is_private)
        return self

    def new_attachment(self, contents: bytes, file_name: str) -> TicketAttachment:
        return TicketAttachment.create_new(self, contents, file_name)

    def new_attachment_from_file(self, path: str | Path, file_name: str | None = None) -> TicketAttachment:
        attachment = TicketAttachment(ticket_id=self.ticket_id, ticket_post_id=self.id)
        attachment.set_contents_from_file(path, file_name)
        return attachment

    def summary(self) -> str:
        contents = self.contents or ""
        if len(contents) > 50:
            contents = contents[:50] + "..."
        return f"{contents} (creator: {self.full_name})"


@dataclass(eq=False)
class TicketAttachment(AttachmentBase):
    controller = "/Tickets/TicketAttachment"
    object_xml_name = "attachment"
    parent_id_field = "ticket_id"
    parent_wire_name = "ticketid"

    ticket_id: int | None = api_field(name="ticketid", required_create=True)
    ticket_post_id: int | None = api_field(name="ticketpostid", required_create=True)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        super().parse_data(data)
        self.ticket_post_id = assure_positive_int(data.get("ticketpostid"))

    def build_data(self, create: bool) -> dict[str, Any]:
        data = super().build_data(create)
        build_numeric(data, "ticketpostid", self.ticket_post_id)
        return data

    @classmethod
    def create_new(cls, ticket_post: TicketPost, contents: bytes, file_name: str) -> TicketAttachment:
        attachment = cls(ticket_id=ticket_post.ticket_id, ticket_post_id=ticket_post.id)
        attachment.set_contents(contents).set_file_name(file_name)
        return attachment
