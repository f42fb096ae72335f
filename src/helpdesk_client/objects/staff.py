"""Staff members and staff groups."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..common.coercion import assure_bool, assure_positive_int, assure_string
from ..common.fields import api_field
from ..common.lazy import Lazy
from ..common.wire import build_bool, build_numeric, build_string
from .base import ObjectBase


@dataclass(eq=False)
class StaffGroup(ObjectBase):
    controller = "/Base/StaffGroup"
    object_xml_name = "staffgroup"

    id: int | None = api_field()
    title: str | None = api_field(required=True)
    is_admin: bool = api_field(False, name="isadmin")

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.title = assure_string(data.get("title"))
        self.is_admin = assure_bool(data.get("isadmin"))

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_string(data, "title", self.title)
        build_bool(data, "isadmin", self.is_admin)
        return data

    @classmethod
    def create_new(cls, title: str, is_admin: bool = False) -> StaffGroup:
        return cls().set_title(title).set_is_admin(is_admin)

    def set_title(self, title: str | None) -> StaffGroup:
        self.title = assure_string(title)
        return self

    def set_is_admin(self, is_admin: Any) -> StaffGroup:
        self.is_admin = assure_bool(is_admin)
        return self

    def new_staff(self, first_name: str, last_name: str, user_name: str, email: str, password: str) -> Staff:
        """Build an unsaved staff member in this group."""
        return Staff.create_new(first_name, last_name, user_name, email, self, password)

    def summary(self) -> str:
        return f"{self.title} (admin: {'yes' if self.is_admin else 'no'})"


@dataclass(eq=False)
class Staff(ObjectBase):
    controller = "/Base/Staff"
    object_xml_name = "staff"

    id: int | None = api_field()
    staff_group_id: int | None = api_field(name="staffgroupid", required_create=True)
    first_name: str | None = api_field(name="firstname", required=True)
    last_name: str | None = api_field(name="lastname", required=True)
    full_name: str | None = api_field(name="fullname")
    user_name: str | None = api_field(name="username", required_create=True)
    email: str | None = api_field(required_create=True)
    designation: str | None = api_field()
    greeting: str | None = api_field()
    signature: str | None = api_field(name="staffsignature", filter=False, order=False)
    mobile_number: str | None = api_field(name="mobilenumber")
    is_enabled: bool = api_field(True, name="isenabled")
    timezone: str | None = api_field("GMT")
    enable_dst: bool = api_field(False, name="enabledst")
    password: str | None = api_field(required_create=True, filter=False, order=False, repr=False)

    _staff_group: Lazy[StaffGroup] = field(init=False, repr=False)

    def __post_init__(self):
        self._staff_group = Lazy(
            lambda: StaffGroup.get(self.staff_group_id) if self.staff_group_id else None
        )

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.staff_group_id = assure_positive_int(data.get("staffgroupid"))
        self.first_name = assure_string(data.get("firstname"))
        self.last_name = assure_string(data.get("lastname"))
        self.full_name = assure_string(data.get("fullname"))
        self.user_name = assure_string(data.get("username"))
        self.email = assure_string(data.get("email"))
        self.designation = assure_string(data.get("designation"))
        self.greeting = assure_string(data.get("greeting"))
        self.mobile_number = assure_string(data.get("mobilenumber"))
        self.is_enabled = assure_bool(data.get("isenabled"))
        self.timezone = assure_string(data.get("timezone"))
        self.enable_dst = assure_bool(data.get("enabledst"))
        self._staff_group.reset()

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_numeric(data, "staffgroupid", self.staff_group_id)
        build_string(data, "firstname", self.first_name)
        build_string(data, "lastname", self.last_name)
        build_string(data, "username", self.user_name)
        build_string(data, "email", self.email)
        build_string(data, "designation", self.designation)
        build_string(data, "greeting", self.greeting)
        if self.signature:
            data["staffsignature"] = self.signature
        build_string(data, "mobilenumber", self.mobile_number)
        build_bool(data, "isenabled", self.is_enabled)
        build_string(data, "timezone", self.timezone)
        build_bool(data, "enabledst", self.enable_dst)
        if self.password:
            data["password"] = self.password
        return data

    @classmethod
    def create_new(
        cls,
        first_name: str,
        last_name: str,
        user_name: str,
        email: str,
        staff_group: StaffGroup | int,
        password: str,
    ) -> Staff:
        return (
            cls()
            .set_first_name(first_name)
            .set_last_name(last_name)
            .set_user_name(user_name)
            .set_email(email)
            .set_staff_group(staff_group)
            .set_password(password)
        )

    def get_staff_group(self, reload: bool = False) -> StaffGroup | None:
        return self._staff_group.get(reload)

    def set_staff_group(self, staff_group: StaffGroup | int | None) -> Staff:
        if isinstance(staff_group, StaffGroup):
            self.staff_group_id = staff_group.id
            self._staff_group.set(staff_group)
        else:
            self.staff_group_id = assure_positive_int(staff_group)
            self._staff_group.reset()
        return self

    def set_first_name(self, first_name: str | None) -> Staff:
        self.first_name = assure_string(first_name)
        return self

    def set_last_name(self, last_name: str | None) -> Staff:
        self.last_name = assure_string(last_name)
        return self

    def set_user_name(self, user_name: str | None) -> Staff:
        self.user_name = assure_string(user_name)
        return self

    def set_email(self, email: str | None) -> Staff:
        self.email = assure_string(email)
        return self

    def set_designation(self, designation: str | None) -> Staff:
        self.designation = assure_string(designation)
        return self

    def set_greeting(self, greeting: str | None) -> Staff:
        self.greeting = assure_string(greeting)
        return self

    def set_signature(self, signature: str | None) -> Staff:
        self.signature = assure_string(signature)
        return self

    def set_mobile_number(self, mobile_number: str | None) -> Staff:
        self.mobile_number = assure_string(mobile_number)
        return self

    def set_is_enabled(self, is_enabled: Any) -> Staff:
        self.is_enabled = assure_bool(is_enabled)
        return self

    def set_timezone(self, timezone: str | None) -> Staff:
        self.timezone = assure_string(timezone)
        return self

    def set_enable_dst(self, enable_dst: Any) -> Staff:
        self.enable_dst = assure_bool(enable_dst)
        return self

    def set_password(self, password: str | None) -> Staff:
        self.password = assure_string(password)
        return self

    def summary(self) -> str:
        return f"{self.full_name} (username: {self.user_name}, email: {self.email})"
