"""Tests for troubleshooter categories and steps."""

from helpdesk_client.objects import (
    Department,
    StepStatus,
    TroubleshooterCategory,
    TroubleshooterStep,
)

STEP_XML = """
<troubleshootersteps>
  <troubleshooterstep>
    <id>6</id>
    <categoryid>2</categoryid>
    <staffid>1</staffid>
    <subject>Restart</subject>
    <displayorder>1</displayorder>
    <allowcomments>1</allowcomments>
    <hasattachments>0</hasattachments>
    <redirecttickets>1</redirecttickets>
    <redirectdepartmentid>3</redirectdepartmentid>
    <tickettypeid>1</tickettypeid>
    <priorityid>2</priorityid>
    <ticketsubject>Still broken</ticketsubject>
    <stepstatus>2</stepstatus>
    <contents>Turn it off and on</contents>
    <parentsteps>
      <id>4</id>
    </parentsteps>
    <childsteps>
      <id>7</id>
      <id>8</id>
    </childsteps>
  </troubleshooterstep>
</troubleshootersteps>
"""


class TestCategory:
    """Test troubleshooter categories."""

    def test_create_data(self):
        category = TroubleshooterCategory.create_new("Printers", 1).set_user_group_ids([2, 3])
        data = category.build_data(True)
        assert data["categorytype"] == "1"
        assert data["staffid"] == 1
        assert data["uservisibilitycustom"] == 1
        assert data["usergroupidlist[0]"] == 2
        assert data["usergroupidlist[1]"] == 3
        assert data["staffvisibilitycustom"] == 0

    def test_new_step(self):
        category = TroubleshooterCategory(id=2, title="Printers", category_type="1")
        step = category.new_step("Restart", "Turn it off", 1)
        assert step.category_id == 2
        assert step.get_category() is category


class TestStep:
    """Test troubleshooter steps."""

    def test_parse(self, transport):
        transport.respond_xml(STEP_XML)
        step = TroubleshooterStep.get(6)
        assert step.status == StepStatus.PUBLISHED
        assert step.enable_ticket_redirection is True
        assert step.redirect_department_id == 3
        assert step.ticket_priority_id == 2
        assert step.parent_step_ids == [4]
        assert step.child_step_ids == [7, 8]

    def test_redirection_data(self):
        step = TroubleshooterStep.create_new(2, "Restart", "Turn it off", 1)
        step.set_ticket_redirection(Department(id=3), ticket_type_id=1, ticket_subject="Help")
        data = step.build_data(True)
        assert data["enableticketredirection"] == 1
        assert data["redirectdepartmentid"] == 3
        assert data["tickettypeid"] == 1
        assert data["ticketsubject"] == "Help"
        assert "ticketpriorityid" not in data

    def test_redirection_off(self):
        step = TroubleshooterStep.create_new(2, "Restart", "Turn it off", 1)
        step.set_ticket_redirection(3).set_ticket_redirection(None)
        data = step.build_data(True)
        assert data["enableticketredirection"] == 0
        assert "redirectdepartmentid" not in data

    def test_parent_steps(self):
        step = TroubleshooterStep.create_new(2, "Restart", "Turn it off", 1)
        step.add_parent_step(TroubleshooterStep(id=4)).add_parent_step(4).add_parent_step(5)
        data = step.build_data(True)
        assert data["parentstepidlist[0]"] == 4
        assert data["parentstepidlist[1]"] == 5
        assert "parentstepidlist[2]" not in data

    def test_child_steps(self, transport):
        transport.respond_xml(
            "<troubleshootersteps>"
            "<troubleshooterstep><id>7</id><subject>A</subject></troubleshooterstep>"
            "<troubleshooterstep><id>8</id><subject>B</subject></troubleshooterstep>"
            "<troubleshooterstep><id>9</id><subject>C</subject></troubleshooterstep>"
            "</troubleshootersteps>"
        )
        step = TroubleshooterStep(id=6, child_step_ids=[7, 8])
        assert step.get_child_steps().collect_id() == [7, 8]

    def test_no_child_steps(self, transport):
        assert len(TroubleshooterStep(id=6).get_child_steps()) == 0
        assert transport.calls == []
