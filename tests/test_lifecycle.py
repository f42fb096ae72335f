"""Tests for the create / update / delete / refresh lifecycle of domain objects."""

import pytest

from helpdesk_client.errors import DataFormatError, UnsupportedOperationError, ValidationError
from helpdesk_client.objects import Department, TicketType

DEPARTMENT_XML = """
<departments>
  <department>
    <id>7</id>
    <title>{title}</title>
    <type>public</type>
    <module>tickets</module>
    <displayorder>1</displayorder>
    <parentdepartmentid>0</parentdepartmentid>
    <uservisibilitycustom>0</uservisibilitycustom>
    <usergroups></usergroups>
  </department>
</departments>
"""


def persisted_department() -> Department:
    return Department(id=7, title="Support", type="public", module="tickets")


class TestCreate:
    """Test creating objects."""

    def test_create_posts_and_loads_response(self, transport):
        transport.respond_xml(DEPARTMENT_XML.format(title="Support"))
        department = Department.create_new("Support").create()

        assert department.id == 7
        assert department.display_order == 1
        assert len(transport.calls) == 1
        call = transport.calls[0]
        assert call.method == "POST"
        assert call.controller == "/Base/Department"
        assert call.parameters == []
        assert call.data == {
            "title": "Support",
            "type": "public",
            "module": "tickets",
            "uservisibilitycustom": 0,
        }
        assert call.files is None

    def test_create_persisted_object_is_rejected(self, transport):
        with pytest.raises(UnsupportedOperationError) as exc_info:
            persisted_department().create()
        assert exc_info.value.operation == "create"
        assert transport.calls == []

    def test_missing_required_field(self, transport):
        department = Department.create_new(None)
        with pytest.raises(ValidationError) as exc_info:
            department.create()
        assert exc_info.value.field_name == "title"
        assert exc_info.value.resource_type == "Department"
        assert exc_info.value.operation == "create"
        assert transport.calls == []

    def test_create_only_requirement(self, transport):
        """type is required on create but not on update."""
        department = Department(title="Support", module="tickets")
        with pytest.raises(ValidationError) as exc_info:
            department.create()
        assert exc_info.value.field_name == "type"

        transport.respond_xml(DEPARTMENT_XML.format(title="Support"))
        Department(id=7, title="Support").update()
        assert transport.calls[0].method == "PUT"


class TestPersistedOperations:
    """Test update, delete and refresh."""

    def test_update_puts_full_state(self, transport):
        transport.respond_xml(DEPARTMENT_XML.format(title="Renamed"))
        department = persisted_department().set_title("Renamed").update()

        call = transport.calls[0]
        assert (call.method, call.controller, call.parameters) == ("PUT", "/Base/Department", [7])
        assert call.data["title"] == "Renamed"
        assert department.title == "Renamed"

    def test_delete(self, transport):
        persisted_department().delete()
        call = transport.calls[0]
        assert (call.method, call.controller, call.parameters) == ("DELETE", "/Base/Department", [7])

    def test_refresh_discards_local_changes(self, transport):
        transport.respond_xml(DEPARTMENT_XML.format(title="Support"))
        department = persisted_department().set_title("Local edit").refresh()

        assert department.title == "Support"
        call = transport.calls[0]
        assert (call.method, call.parameters) == ("GET", [7])

    @pytest.mark.parametrize("operation", ["update", "delete", "refresh"])
    def test_new_object_cannot_use_persisted_operations(self, transport, operation):
        with pytest.raises(UnsupportedOperationError):
            getattr(Department.create_new("Support"), operation)()
        assert transport.calls == []

    def test_is_new(self):
        assert Department().is_new
        assert not persisted_department().is_new


class TestReadOnly:
    """Test read-only resource types."""

    @pytest.mark.parametrize("operation", ["create", "update", "delete"])
    def test_writes_rejected(self, transport, operation):
        ticket_type = TicketType(id=None if operation == "create" else 1, title="Bug")
        with pytest.raises(UnsupportedOperationError) as exc_info:
            getattr(ticket_type, operation)()
        assert exc_info.value.resource_type == "TicketType"
        assert transport.calls == []


class TestFetching:
    """Test class-level fetching."""

    def test_get(self, transport):
        transport.respond_xml(DEPARTMENT_XML.format(title="Support"))
        department = Department.get(7)
        assert department.title == "Support"
        assert transport.calls[0].parameters == [7]

    def test_get_missing_returns_none(self, transport):
        transport.respond_xml("<departments></departments>")
        assert Department.get(99) is None

    def test_get_all(self, transport):
        transport.respond_xml(
            "<departments>"
            "<department><id>1</id><title>A</title></department>"
            "<department><id>2</id><title>B</title></department>"
            "</departments>"
        )
        departments = Department.get_all()
        assert departments.collect_id() == [1, 2]
        assert departments.object_type is Department
        assert transport.calls[0].parameters == []

    def test_malformed_response(self, transport):
        transport.respond({"department": "oops"})
        with pytest.raises(DataFormatError):
            Department.get_all()

    def test_from_data_requires_mapping(self):
        with pytest.raises(DataFormatError):
            Department.from_data(["not", "a", "mapping"])

    def test_available_methods(self):
        assert "filter_by_title" in Department.available_filter_methods()
        assert "filter_by_user_group_ids" in Department.available_filter_methods()
        assert "order_by_user_group_ids" not in Department.available_order_methods()


def test_str():
    assert str(persisted_department()) == "Department (id: 7): Support (type: public, module: tickets)"
