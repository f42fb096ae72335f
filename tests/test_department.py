"""Tests for departments and their user group visibility."""

import pytest

from helpdesk_client.objects import Department, Staff, Ticket, UserGroup

LIMITED_DEPARTMENT_XML = """
<departments>
  <department>
    <id>3</id>
    <title>Sales</title>
    <type>public</type>
    <module>tickets</module>
    <displayorder>2</displayorder>
    <parentdepartmentid>1</parentdepartmentid>
    <uservisibilitycustom>1</uservisibilitycustom>
    <usergroups>
      <id>1</id>
      <id>2</id>
    </usergroups>
  </department>
</departments>
"""


def user_group_xml(group_id: int, title: str) -> str:
    return (
        f"<usergroups><usergroup><id>{group_id}</id><title>{title}</title>"
        f"<grouptype>registered</grouptype><ismaster>0</ismaster></usergroup></usergroups>"
    )


@pytest.fixture
def sales(transport) -> Department:
    transport.respond_xml(LIMITED_DEPARTMENT_XML)
    department = Department.get(3)
    transport.calls.clear()
    return department


class TestParsing:
    """Test reading departments."""

    def test_fields(self, sales):
        assert sales.title == "Sales"
        assert sales.type == "public"
        assert sales.module == "tickets"
        assert sales.parent_department_id == 1
        assert sales.user_visibility_custom is True
        assert sales.user_group_ids == [1, 2]

    def test_round_trip(self, sales):
        assert sales.build_data(False) == {
            "title": "Sales",
            "type": "public",
            "module": "tickets",
            "displayorder": 2,
            "parentdepartmentid": 1,
            "uservisibilitycustom": 1,
            "usergroupid": [1, 2],
        }

    def test_unknown_constants_dropped(self, transport):
        transport.respond_xml(
            "<departments><department><id>4</id><type>secret</type>"
            "<module>tickets</module></department></departments>"
        )
        assert Department.get(4).type is None


class TestVisibility:
    """Test user group visibility."""

    def test_limited_public_department(self, sales):
        assert sales.is_visible_to_user_group(1)
        assert sales.is_visible_to_user_group(UserGroup(id=2))
        assert not sales.is_visible_to_user_group(3)

    def test_private_department_hidden(self):
        department = Department.create_new("Internal", "private")
        assert not department.is_visible_to_user_group(1)

    def test_unrestricted_public_department(self):
        assert Department.create_new("Support").is_visible_to_user_group(42)

    def test_user_groups_fetched_per_id_once(self, sales, transport):
        transport.respond_xml(user_group_xml(1, "Registered"), user_group_xml(2, "VIP"))
        groups = sales.get_user_groups()
        sales.get_user_groups()

        assert [group.title for group in groups] == ["Registered", "VIP"]
        assert [call.parameters for call in transport.calls] == [[1], [2]]

    def test_add_user_group(self, transport):
        department = Department.create_new("Support")
        vip = UserGroup(id=9, title="VIP")
        department.add_user_group(vip)

        assert department.user_visibility_custom is True
        assert department.build_data(True)["usergroupid"] == [9]
        assert department.get_user_groups().first() is vip
        assert transport.calls == []

    def test_add_user_group_with_clear(self, sales):
        sales.add_user_group(UserGroup(id=5), clear=True)
        assert sales.user_group_ids == [5]

    def test_turning_visibility_off_clears_groups(self, sales):
        sales.set_user_visibility_custom(False)
        assert sales.user_group_ids == []
        assert "usergroupid" not in sales.build_data(False)


class TestHierarchy:
    """Test parent departments and factories."""

    def test_subdepartment(self, sales, transport):
        child = sales.new_subdepartment("Renewals")
        assert child.parent_department_id == 3
        assert child.module == "tickets"
        assert child.get_parent_department() is sales
        assert transport.calls == []

    def test_parent_fetched_on_demand(self, sales, transport):
        transport.respond_xml(
            "<departments><department><id>1</id><title>Root</title></department></departments>"
        )
        assert sales.get_parent_department().title == "Root"
        assert transport.calls[0].parameters == [1]

    def test_new_ticket(self, sales):
        ticket = sales.new_ticket(Staff(id=2, full_name="Sam", email="sam@example.com"), "Help", "Printer")
        assert isinstance(ticket, Ticket)
        assert ticket.department_id == 3
        assert ticket.staff_id == 2
        assert ticket.get_department() is sales
