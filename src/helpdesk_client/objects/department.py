"""Departments."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
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
from ..common.wire import build_bool, build_numeric, build_repeated, build_string
from .base import ObjectBase, parse_id_list
from .user import UserGroup


class DepartmentType(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class DepartmentModule(str, Enum):
    TICKETS = "tickets"
    LIVECHAT = "livechat"


@dataclass(eq=False)
class Department(ObjectBase):
    """
    Ticket or live chat department.

    Public departments can be limited to chosen user groups by turning on
    ``user_visibility_custom`` and listing the groups.
    """

    controller = "/Base/Department"
    object_xml_name = "department"
    constant_groups = {"TYPE": DepartmentType, "MODULE": DepartmentModule}

    id: int | None = api_field()
    title: str | None = api_field(required=True)
    type: str | None = api_field(required_create=True)
    module: str | None = api_field(required_create=True)
    display_order: int | None = api_field(name="displayorder")
    parent_department_id: int | None = api_field(name="parentdepartmentid")
    user_visibility_custom: bool = api_field(False, name="uservisibilitycustom")
    user_group_ids: list[int] = api_field(default_factory=list, name="usergroupid", order=False)

    _parent_department: Lazy[Department] = field(init=False, repr=False)
    _user_groups: dict[int, UserGroup] = field(init=False, repr=False)

    def __post_init__(self):
        self._parent_department = Lazy(self._load_parent_department)
        self._user_groups = {}

    def _load_parent_department(self) -> Department | None:
        if not self.parent_department_id:
            return None
        return Department.get(self.parent_department_id)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.title = assure_string(data.get("title"))
        self.type = assure_constant(data.get("type"), self, "TYPE")
        self.module = assure_constant(data.get("module"), self, "MODULE")
        self.display_order = assure_int(data.get("displayorder"))
        self.parent_department_id = assure_positive_int(data.get("parentdepartmentid"))
        self.user_visibility_custom = assure_int(data.get("uservisibilitycustom"), 0) != 0
        self.user_group_ids = (
            parse_id_list(data, "usergroups", "id") if self.user_visibility_custom else []
        )
        self._parent_department.reset()
        self._user_groups = {}

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_string(data, "title", self.title)
        build_string(data, "type", self.type)
        build_string(data, "module", self.module)
        build_numeric(data, "displayorder", self.display_order)
        build_numeric(data, "parentdepartmentid", self.parent_department_id)
        build_bool(data, "uservisibilitycustom", self.user_visibility_custom)
        if self.user_visibility_custom:
            build_repeated(data, "usergroupid", self.user_group_ids)
        return data

    @classmethod
    def create_new(
        cls,
        title: str,
        type: str = DepartmentType.PUBLIC.value,
        module: str = DepartmentModule.TICKETS.value,
    ) -> Department:
        return cls().set_title(title).set_type(type).set_module(module)

    def new_subdepartment(self, title: str, type: str = DepartmentType.PUBLIC.value) -> Department:
        """Build an unsaved department under this one, in the same module."""
        return Department.create_new(title, type, self.module).set_parent_department(self)

    def set_title(self, title: str | None) -> Department:
        self.title = assure_string(title)
        return self

    def set_type(self, type: Any) -> Department:
        self.type = assure_constant(type, self, "TYPE")
        return self

    def set_module(self, module: Any) -> Department:
        self.module = assure_constant(module, self, "MODULE")
        return self

    def set_display_order(self, display_order: Any) -> Department:
        self.display_order = assure_int(display_order, 0)
        return self

    def set_parent_department_id(self, parent_department_id: Any) -> Department:
        self.parent_department_id = assure_positive_int(parent_department_id)
        self._parent_department.reset()
        return self

    def get_parent_department(self, reload: bool = False) -> Department | None:
        return self._parent_department.get(reload)

    def set_parent_department(self, parent: Department | None) -> Department:
        if isinstance(parent, Department):
            self.parent_department_id = parent.id
            self._parent_department.set(parent)
        else:
            self.parent_department_id = None
            self._parent_department.reset()
        return self

    def set_user_visibility_custom(self, user_visibility_custom: Any) -> Department:
        self.user_visibility_custom = assure_bool(user_visibility_custom)
        if not self.user_visibility_custom:
            self.user_group_ids = []
            self._user_groups = {}
        return self

    def set_user_group_ids(self, user_group_ids: Iterable[Any] | Any) -> Department:
        ids = (assure_positive_int(value) for value in assure_array(user_group_ids))
        self.user_group_ids = [value for value in ids if value is not None]
        return self

    def get_user_groups(self, reload: bool = False) -> ResultSet[UserGroup]:
        """User groups this department is limited to, fetched per id as needed."""
        for user_group_id in self.user_group_ids:
            if reload or user_group_id not in self._user_groups:
                user_group = UserGroup.get(user_group_id)
                if user_group is not None:
                    self._user_groups[user_group_id] = user_group
        self._user_groups = {
            key: value for key, value in self._user_groups.items() if key in self.user_group_ids
        }
        return ResultSet(
            [self._user_groups[key] for key in self.user_group_ids if key in self._user_groups],
            object_type=UserGroup,
        )

    def add_user_group(self, user_group: UserGroup, clear: bool = False) -> Department:
        """Limit visibility to ``user_group`` as well (or only, with ``clear``)."""
        if clear:
            self.user_group_ids = []
            self._user_groups = {}
        if user_group.id not in self.user_group_ids:
            self.user_group_ids.append(user_group.id)
            self._user_groups[user_group.id] = user_group
            self.user_visibility_custom = True
        return self

    def is_visible_to_user_group(self, user_group: UserGroup | int) -> bool:
        if self.type != DepartmentType.PUBLIC.value:
            return False
        if not self.user_visibility_custom:
            return True
        user_group_id = user_group.id if isinstance(user_group, UserGroup) else assure_int(user_group)
        return user_group_id in self.user_group_ids

    def new_ticket(self, creator: Any, contents: str, subject: str):
        """Build an unsaved ticket in this department."""
        from .ticket import Ticket
        return Ticket.create_new(self, creator, contents, subject)

    def summary(self) -> str:
        return f"{self.title} (type: {self.type}, module: {self.module})"
