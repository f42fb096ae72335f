"""Tests for tickets, ticket types, posts and attachments."""

import pytest

from helpdesk_client.common import ResultSet
from helpdesk_client.errors import UnsupportedOperationError, ValidationError
from helpdesk_client.objects import (
    Department,
    PostCreator,
    Staff,
    Ticket,
    TicketAttachment,
    TicketPost,
    TicketType,
    User,
)

TICKET_XML = """
<tickets>
  <ticket id="12" flagtype="0">
    <displayid>ABC-123-4567</displayid>
    <departmentid>2</departmentid>
    <statusid>1</statusid>
    <priorityid>3</priorityid>
    <typeid>1</typeid>
    <userid>4</userid>
    <ownerstaffid>0</ownerstaffid>
    <fullname>Jo Requester</fullname>
    <email>jo@example.com</email>
    <subject>Printer jammed</subject>
    <creationtime>1700000000</creationtime>
    <lastactivity>1700003600</lastactivity>
    <replies>1</replies>
    <isescalated>0</isescalated>
    <tags>printer urgent</tags>
    <posts>
      <post>
        <id>30</id>
        <ticketid>12</ticketid>
        <userid>4</userid>
        <fullname>Jo Requester</fullname>
        <creator>2</creator>
        <contents>It is jammed again</contents>
      </post>
      <post>
        <id>31</id>
        <ticketid>12</ticketid>
        <staffid>1</staffid>
        <creator>1</creator>
        <isprivate>1</isprivate>
        <contents>Looking into it</contents>
      </post>
    </posts>
  </ticket>
</tickets>
"""

TICKET_TYPES_XML = """
<tickettypes>
  <tickettype>
    <id>1</id>
    <title>Issue</title>
    <displayorder>1</displayorder>
    <departmentid>0</departmentid>
    <type>public</type>
    <uservisibilitycustom>1</uservisibilitycustom>
    <usergroupid>1</usergroupid>
    <usergroupid>2</usergroupid>
  </tickettype>
  <tickettype>
    <id>2</id>
    <title>Internal</title>
    <type>private</type>
    <uservisibilitycustom>0</uservisibilitycustom>
  </tickettype>
</tickettypes>
"""


@pytest.fixture
def staff() -> Staff:
    return Staff(id=1, full_name="Ann Admin", email="ann@example.com")


class TestTicketParse:
    """Test decoding tickets."""

    def test_fields(self, transport):
        transport.respond_xml(TICKET_XML)
        ticket = Ticket.get(12)

        assert ticket.id == 12
        assert ticket.display_id == "ABC-123-4567"
        assert ticket.status_id == 1
        assert ticket.priority_id == 3
        assert ticket.owner_staff_id is None
        assert ticket.tags == ["printer", "urgent"]
        assert ticket.is_escalated is False
        assert transport.calls[0].parameters == [12]

    def test_embedded_posts(self, transport):
        transport.respond_xml(TICKET_XML)
        ticket = Ticket.get(12)

        posts = ticket.get_posts()
        assert posts.collect_id() == [30, 31]
        assert posts[0].creator == PostCreator.USER
        assert posts[0].is_private is None
        assert posts[1].is_private is True
        assert len(transport.calls) == 1

    def test_posts_fetched_without_embedding(self, transport):
        ticket = Ticket(id=12)
        ticket.get_posts()
        call = transport.calls[0]
        assert (call.controller, call.parameters) == ("/Tickets/TicketPost", ["ListAll", 12])

    def test_has_owner_filter(self):
        tickets = ResultSet([Ticket(id=1, owner_staff_id=3), Ticket(id=2)], object_type=Ticket)
        assert tickets.filter_by_has_owner(True).collect_id() == [1]
        assert "filter_by_has_owner" in tickets.available_filter_methods()


class TestTicketBuild:
    """Test encoding tickets."""

    def test_created_by_staff(self, staff):
        ticket = Ticket.create_new(Department(id=2), staff, "Paper everywhere", "Printer jammed")
        data = ticket.build_data(True)

        assert data["staffid"] == 1
        assert data["fullname"] == "Ann Admin"
        assert data["email"] == "ann@example.com"
        assert data["departmentid"] == 2
        assert data["contents"] == "Paper everywhere"
        assert data["type"] == "default"
        assert "userid" not in data
        assert "autouserid" not in data

    def test_created_by_user(self):
        user = User(id=4, full_name="Jo Requester", email=["jo@example.com", "jo@home.example"])
        ticket = Ticket.create_new(2, user, "Paper everywhere", "Printer jammed")
        data = ticket.build_data(True)

        assert data["userid"] == 4
        assert data["email"] == "jo@example.com"
        assert ticket.get_user() is user

    def test_created_for_new_user(self):
        ticket = Ticket.create_new_auto(2, "Sam New", "sam@example.com", "Hello", "First contact")
        ticket.set_ignore_auto_responder(True)
        data = ticket.build_data(True)

        assert data["autouserid"] == 1
        assert data["ignoreautoresponder"] == 1

    def test_creator_required(self):
        ticket = Ticket(
            department_id=2, full_name="Sam", email="sam@example.com", subject="Hi", contents="Hello"
        )
        with pytest.raises(ValidationError) as exc_info:
            ticket.build_data(True)
        assert exc_info.value.field_name == "user_id"

    def test_update_omits_creation_fields(self):
        ticket = Ticket(
            id=12, department_id=2, user_id=4, full_name="Jo", email="jo@example.com", subject="Hi"
        )
        data = ticket.build_data(False)

        assert data["userid"] == 4
        assert "contents" not in data
        assert "type" not in data

    def test_creation_type_falls_back_to_default(self):
        ticket = Ticket().set_creation_type("phone")
        assert ticket.creation_type == "phone"
        assert ticket.set_creation_type("fax").creation_type == "default"


class TestTicketList:
    """Test listing tickets."""

    def test_department_only(self, transport):
        Ticket.get_all(Department(id=2))
        assert transport.calls[0].parameters == ["ListAll", "2", "-1", "-1", "-1"]

    def test_filters_and_paging(self, transport):
        Ticket.get_all(
            [2, 3], statuses=[1, 0], owner_staff=Staff(id=5), users=None,
            max_items=10, starting_ticket_id=50, sort_field="lastactivity",
        )
        assert transport.calls[0].parameters == [
            "ListAll", "2,3", "1", "5", "-1", 10, 50, "lastactivity", "ASC",
        ]

    def test_start_needs_max_items(self, transport):
        Ticket.get_all(2, starting_ticket_id=50)
        assert transport.calls[0].parameters == ["ListAll", "2", "-1", "-1", "-1"]


class TestTicketType:
    """Test ticket types."""

    def test_visibility(self, transport):
        transport.respond_xml(TICKET_TYPES_XML)
        issue, internal = TicketType.get_all()

        assert issue.user_group_ids == [1, 2]
        assert issue.is_visible_to_user_group(1)
        assert not issue.is_visible_to_user_group(3)
        assert internal.user_group_ids == []
        assert not internal.is_visible_to_user_group(1)

    def test_read_only(self):
        with pytest.raises(UnsupportedOperationError):
            TicketType(title="Issue").create()


class TestTicketPost:
    """Test ticket posts."""

    def test_staff_reply(self, staff):
        post = Ticket(id=12).new_post(staff, "Looking into it")
        assert post.build_data(True) == {
            "ticketid": 12,
            "subject": "",
            "contents": "Looking into it",
            "isprivate": 0,
            "staffid": 1,
        }

    def test_user_reply_by_id(self):
        post = TicketPost(ticket_id=12, contents="Thanks").set_creator(4, PostCreator.USER)
        data = post.build_data(True)
        assert data["userid"] == 4
        assert "staffid" not in data
        assert post.creator == PostCreator.USER

    def test_creator_required(self):
        with pytest.raises(ValidationError) as exc_info:
            TicketPost(ticket_id=12, contents="Anonymous").build_data(True)
        assert exc_info.value.field_name == "staff_id"

    def test_composite_key(self, transport):
        post = TicketPost(id=30, ticket_id=12)
        assert post.get_id(True) == [12, 30]
        post.delete()
        assert transport.calls[0].parameters == [12, 30]

    def test_cannot_be_edited(self):
        with pytest.raises(UnsupportedOperationError):
            TicketPost(id=30, ticket_id=12, contents="x", staff_id=1).update()


class TestTicketAttachment:
    """Test ticket attachments."""

    def test_create_data(self):
        post = TicketPost(id=30, ticket_id=12)
        attachment = post.new_attachment(b"data", "log.txt")
        assert attachment.build_data(True) == {
            "ticketid": 12,
            "filename": "log.txt",
            "contents": "ZGF0YQ==",
            "ticketpostid": 30,
        }

    def test_post_required(self):
        attachment = TicketAttachment(ticket_id=12).set_contents(b"data").set_file_name("log.txt")
        with pytest.raises(ValidationError) as exc_info:
            attachment.build_data(True)
        assert exc_info.value.field_name == "ticket_post_id"

    def test_list_by_ticket(self, transport):
        Ticket(id=12).get_attachments()
        call = transport.calls[0]
        assert (call.controller, call.parameters) == ("/Tickets/TicketAttachment", ["ListAll", 12])
