"""Users, user groups and user organizations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..common.coercion import (
    assure_array,
    assure_bool,
    assure_constant,
    assure_positive_int,
    assure_string,
)
from ..common.fields import api_field
from ..common.lazy import Lazy
from ..common.result_set import ResultSet
from ..common.wire import build_bool, build_numeric, build_repeated, build_string
from .base import ObjectBase, extract_objects


class UserGroupType(str, Enum):
    GUEST = "guest"
    REGISTERED = "registered"


class UserRole(str, Enum):
    USER = "user"
    MANAGER = "manager"


class Salutation(str, Enum):
    MR = "Mr."
    MS = "Ms."
    MRS = "Mrs."
    DR = "Dr."


class OrganizationType(str, Enum):
    RESTRICTED = "restricted"
    SHARED = "shared"


@dataclass(eq=False)
class UserGroup(ObjectBase):
    controller = "/Base/UserGroup"
    object_xml_name = "usergroup"
    constant_groups = {"TYPE": UserGroupType}

    id: int | None = api_field()
    title: str | None = api_field(required=True)
    type: str | None = api_field(name="grouptype", required_create=True)
    is_master: bool = api_field(False, name="ismaster")

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.title = assure_string(data.get("title"))
        self.type = assure_constant(data.get("grouptype"), self, "TYPE")
        self.is_master = assure_bool(data.get("ismaster"))

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_string(data, "title", self.title)
        build_string(data, "grouptype", self.type)
        return data

    @classmethod
    def create_new(cls, title: str, type: str = UserGroupType.REGISTERED.value) -> UserGroup:
        return cls().set_title(title).set_type(type)

    def set_title(self, title: str | None) -> UserGroup:
        self.title = assure_string(title)
        return self

    def set_type(self, type: Any) -> UserGroup:
        self.type = assure_constant(type, self, "TYPE")
        return self

    def new_user(self, full_name: str, email: str, password: str) -> User:
        """Build an unsaved user in this group."""
        return User.create_new(full_name, email, self, password)

    def summary(self) -> str:
        return f"{self.title} (type: {self.type})"


@dataclass(eq=False)
class UserOrganization(ObjectBase):
    controller = "/Base/UserOrganization"
    object_xml_name = "userorganization"
    constant_groups = {"TYPE": OrganizationType}

    id: int | None = api_field()
    name: str | None = api_field(required=True)
    type: str | None = api_field(OrganizationType.RESTRICTED.value, name="organizationtype", required=True)
    address: str | None = api_field()
    city: str | None = api_field()
    state: str | None = api_field()
    postal_code: str | None = api_field(name="postalcode")
    country: str | None = api_field()
    phone: str | None = api_field()
    fax: str | None = api_field()
    website: str | None = api_field()
    dateline: int | None = api_field()
    last_update: int | None = api_field(name="lastupdate")
    sla_plan_id: int | None = api_field(name="slaplanid")
    sla_plan_expiry: int | None = api_field(name="slaplanexpiry")

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.name = assure_string(data.get("name"))
        self.type = assure_constant(data.get("organizationtype"), self, "TYPE")
        self.address = assure_string(data.get("address"))
        self.city = assure_string(data.get("city"))
        self.state = assure_string(data.get("state"))
        self.postal_code = assure_string(data.get("postalcode"))
        self.country = assure_string(data.get("country"))
        self.phone = assure_string(data.get("phone"))
        self.fax = assure_string(data.get("fax"))
        self.website = assure_string(data.get("website"))
        self.dateline = assure_positive_int(data.get("dateline"))
        self.last_update = assure_positive_int(data.get("lastupdate"))
        self.sla_plan_id = assure_positive_int(data.get("slaplanid"))
        self.sla_plan_expiry = assure_positive_int(data.get("slaplanexpiry"))

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_string(data, "name", self.name)
        build_string(data, "organizationtype", self.type)
        for wire_name, value in (
            ("address", self.address),
            ("city", self.city),
            ("state", self.state),
            ("postalcode", self.postal_code),
            ("country", self.country),
            ("phone", self.phone),
            ("fax", self.fax),
            ("website", self.website),
        ):
            build_string(data, wire_name, value)
        build_numeric(data, "slaplanid", self.sla_plan_id)
        data["slaplanexpiry"] = self.sla_plan_expiry or 0
        return data

    @classmethod
    def create_new(cls, name: str, type: str = OrganizationType.RESTRICTED.value) -> UserOrganization:
        return cls().set_name(name).set_type(type)

    def set_name(self, name: str | None) -> UserOrganization:
        self.name = assure_string(name)
        return self

    def set_type(self, type: Any) -> UserOrganization:
        self.type = assure_constant(type, self, "TYPE")
        return self

    def set_address(self, address: str | None) -> UserOrganization:
        self.address = assure_string(address)
        return self

    def set_city(self, city: str | None) -> UserOrganization:
        self.city = assure_string(city)
        return self

    def set_country(self, country: str | None) -> UserOrganization:
        self.country = assure_string(country)
        return self

    def set_phone(self, phone: str | None) -> UserOrganization:
        self.phone = assure_string(phone)
        return self

    def set_website(self, website: str | None) -> UserOrganization:
        self.website = assure_string(website)
        return self

    def summary(self) -> str:
        return f"{self.title} (type: {self.type})"


@dataclass(eq=False)
class User(ObjectBase):
    controller = "/Base/User"
    object_xml_name = "user"
    search_controller = "/Base/UserSearch"
    constant_groups = {"ROLE": UserRole, "SALUTATION": Salutation}

    id: int | None = api_field()
    user_group_id: int | None = api_field(name="usergroupid", required_create=True)
    user_role: str | None = api_field(UserRole.USER.value, name="userrole")
    user_organization_id: int | None = api_field(name="userorganizationid")
    salutation: str | None = api_field()
    user_expiry: int | None = api_field(name="userexpiry")
    full_name: str | None = api_field(name="fullname", required=True)
    email: list[str] = api_field(default_factory=list, required=True, order=False)
    designation: str | None = api_field()
    phone: str | None = api_field()
    dateline: int | None = api_field()
    last_visit: int | None = api_field(name="lastvisit")
    is_enabled: bool = api_field(True, name="isenabled")
    timezone: str | None = api_field()
    enable_dst: bool = api_field(False, name="enabledst")
    sla_plan_id: int | None = api_field(name="slaplanid")
    sla_plan_expiry: int | None = api_field(name="slaplanexpiry")
    send_welcome_email: bool | None = api_field(True, name="sendwelcomeemail", filter=False, order=False)
    password: str | None = api_field(required_create=True, filter=False, order=False, repr=False)

    _user_group: Lazy[UserGroup] = field(init=False, repr=False)
    _user_organization: Lazy[UserOrganization] = field(init=False, repr=False)

    def __post_init__(self):
        self._user_group = Lazy(
            lambda: UserGroup.get(self.user_group_id) if self.user_group_id else None
        )
        self._user_organization = Lazy(
            lambda: UserOrganization.get(self.user_organization_id) if self.user_organization_id else None
        )

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        self.user_group_id = assure_positive_int(data.get("usergroupid"))
        self.user_role = assure_constant(data.get("userrole"), self, "ROLE")
        self.user_organization_id = assure_positive_int(data.get("userorganizationid"))
        self.salutation = assure_constant(data.get("salutation"), self, "SALUTATION")
        self.user_expiry = assure_positive_int(data.get("userexpiry"))
        self.full_name = assure_string(data.get("fullname"))
        self.email = [str(email) for email in assure_array(data.get("email")) if email]
        self.designation = assure_string(data.get("designation"))
        self.phone = assure_string(data.get("phone"))
        self.dateline = assure_positive_int(data.get("dateline"))
        self.last_visit = assure_positive_int(data.get("lastvisit"))
        self.is_enabled = assure_bool(data.get("isenabled"))
        self.timezone = assure_string(data.get("timezone"))
        self.enable_dst = assure_bool(data.get("enabledst"))
        self.sla_plan_id = assure_positive_int(data.get("slaplanid"))
        self.sla_plan_expiry = assure_positive_int(data.get("slaplanexpiry"))
        self._user_group.reset()
        self._user_organization.reset()

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_numeric(data, "usergroupid", self.user_group_id)
        build_string(data, "userrole", self.user_role)
        build_numeric(data, "userorganizationid", self.user_organization_id)
        build_string(data, "salutation", self.salutation)
        data["userexpiry"] = self.user_expiry or 0
        build_string(data, "fullname", self.full_name)
        build_repeated(data, "email", self.email)
        build_string(data, "designation", self.designation)
        build_string(data, "phone", self.phone)
        build_bool(data, "isenabled", self.is_enabled)
        build_string(data, "timezone", self.timezone)
        build_bool(data, "enabledst", self.enable_dst)
        build_numeric(data, "slaplanid", self.sla_plan_id)
        data["slaplanexpiry"] = self.sla_plan_expiry or 0
        if create:
            build_string(data, "password", self.password)
            build_bool(data, "sendwelcomeemail", self.send_welcome_email)
        return data

    @classmethod
    def get_all(cls, starting_user_id: int | None = None, max_items: int | None = None) -> ResultSet[User]:
        """
        List users, optionally paged on the server.

        Args:
            starting_user_id: Only users with this id or higher
            max_items: Maximum number of users returned
        """
        parameters: list[Any] = ["Filter"]
        if assure_positive_int(starting_user_id):
            parameters.append(starting_user_id)
            if assure_positive_int(max_items):
                parameters.append(max_items)
        return cls.generic_get_all(parameters)

    @classmethod
    def search(cls, query: str) -> ResultSet[User]:
        """Server-side search by name, email, phone or organization."""
        result = cls.transport().post(cls.search_controller, [], {"query": query})
        objects = [cls.from_data(data) for data in extract_objects(result, cls.object_xml_name, cls.__name__)]
        return ResultSet(objects, object_type=cls)

    @classmethod
    def create_new(
        cls, full_name: str, email: str, user_group: UserGroup | int, password: str
    ) -> User:
        return (
            cls()
            .set_full_name(full_name)
            .set_email(email)
            .set_user_group(user_group)
            .set_password(password)
        )

    def get_user_group(self, reload: bool = False) -> UserGroup | None:
        return self._user_group.get(reload)

    def set_user_group(self, user_group: UserGroup | int | None) -> User:
        if isinstance(user_group, UserGroup):
            self.user_group_id = user_group.id
            self._user_group.set(user_group)
        else:
            self.user_group_id = assure_positive_int(user_group)
            self._user_group.reset()
        return self

    def get_user_organization(self, reload: bool = False) -> UserOrganization | None:
        return self._user_organization.get(reload)

    def set_user_organization(self, organization: UserOrganization | int | None) -> User:
        if isinstance(organization, UserOrganization):
            self.user_organization_id = organization.id
            self._user_organization.set(organization)
        else:
            self.user_organization_id = assure_positive_int(organization)
            self._user_organization.reset()
        return self

    def set_user_role(self, user_role: Any) -> User:
        self.user_role = assure_constant(user_role, self, "ROLE", UserRole.USER.value)
        return self

    def set_salutation(self, salutation: Any) -> User:
        self.salutation = assure_constant(salutation, self, "SALUTATION")
        return self

    def set_user_expiry(self, user_expiry: Any) -> User:
        self.user_expiry = assure_positive_int(user_expiry)
        return self

    def set_full_name(self, full_name: str | None) -> User:
        self.full_name = assure_string(full_name)
        return self

    def set_email(self, email: str | list[str] | None) -> User:
        """Replace all email addresses."""
        self.email = [str(item) for item in assure_array(email) if item]
        return self

    def add_email(self, email: str) -> User:
        if email not in self.email:
            self.email.append(email)
        return self

    def set_designation(self, designation: str | None) -> User:
        self.designation = assure_string(designation)
        return self

    def set_phone(self, phone: str | None) -> User:
        self.phone = assure_string(phone)
        return self

    def set_is_enabled(self, is_enabled: Any) -> User:
        self.is_enabled = assure_bool(is_enabled)
        return self

    def set_timezone(self, timezone: str | None) -> User:
        self.timezone = assure_string(timezone)
        return self

    def set_enable_dst(self, enable_dst: Any) -> User:
        self.enable_dst = assure_bool(enable_dst)
        return self

    def set_sla_plan_id(self, sla_plan_id: Any) -> User:
        self.sla_plan_id = assure_positive_int(sla_plan_id)
        return self

    def set_send_welcome_email(self, send_welcome_email: Any) -> User:
        self.send_welcome_email = assure_bool(send_welcome_email)
        return self

    def set_password(self, password: str | None) -> User:
        self.password = assure_string(password)
        return self

    def summary(self) -> str:
        return f"{self.full_name} (email: {', '.join(self.email)})"
