"""Tests for knowledgebase articles and attachments."""

import pytest

from helpdesk_client.errors import DataFormatError, UnsupportedOperationError, ValidationError
from helpdesk_client.objects import ArticleStatus, KnowledgebaseArticle, KnowledgebaseAttachment, Staff

ARTICLE_XML = """
<kbarticles>
  <kbarticle>
    <kbarticleid>8</kbarticleid>
    <contents>Steps</contents>
    <creatorid>1</creatorid>
    <subject>How to reset</subject>
    <articlestatus>1</articlestatus>
    <isfeatured>1</isfeatured>
    <allowcomments>1</allowcomments>
    <totalcomments>0</totalcomments>
    <hasattachments>1</hasattachments>
    <categories>
      <categoryid>2</categoryid>
    </categories>
  </kbarticle>
</kbarticles>
"""

ATTACHMENTS_XML = """
<kbattachments>
  <kbattachment>
    <id>3</id>
    <kbarticleid>8</kbarticleid>
    <filename>steps.txt</filename>
    <filesize>5</filesize>
    <filetype>text/plain</filetype>
    <dateline>1700000000</dateline>
    <contents>aGVsbG8=</contents>
  </kbattachment>
</kbattachments>
"""


@pytest.fixture
def article(transport) -> KnowledgebaseArticle:
    transport.respond_xml(ARTICLE_XML)
    article = KnowledgebaseArticle.get(8)
    transport.calls.clear()
    return article


class TestArticle:
    """Test articles."""

    def test_parse(self, article):
        assert article.id == 8
        assert article.status == ArticleStatus.PUBLISHED
        assert article.is_featured is True
        assert article.category_ids == [2]

    def test_create_data(self):
        article = KnowledgebaseArticle.create_new("How to", "Steps", Staff(id=1)).set_category_ids([2, 4])
        data = article.build_data(True)
        assert data["creatorid"] == 1
        assert data["categoryid[0]"] == 2
        assert data["categoryid[1]"] == 4
        assert "editedstaffid" not in data

    def test_update_requires_editing_staff(self, article):
        with pytest.raises(ValidationError) as exc_info:
            article.build_data(False)
        assert exc_info.value.field_name == "edited_staff_id"
        assert article.set_edited_staff(1).build_data(False)["editedstaffid"] == 1

    @pytest.mark.parametrize("arguments, expected", [
        ((), []),
        ((5,), ["ListAll", 5]),
        ((5, 20), ["ListAll", 5, 20]),
        ((5, None, 100), ["ListAll", 5, 1000, 100]),
        ((5, 20, 100), ["ListAll", 5, 20, 100]),
    ])
    def test_get_all_paging(self, transport, arguments, expected):
        KnowledgebaseArticle.get_all(*arguments)
        assert transport.calls[0].parameters == expected

    def test_attachments_fetched_once(self, article, transport):
        transport.respond_xml(ATTACHMENTS_XML)
        attachments = article.get_attachments()
        article.get_attachments()

        attachment = attachments.first()
        assert attachment.contents == b"hello"
        assert attachment.article_id == 8
        assert len(transport.calls) == 1
        call = transport.calls[0]
        assert (call.controller, call.parameters) == ("/Knowledgebase/Attachment", ["ListAll", 8])

    def test_no_attachments_not_fetched(self, transport):
        article = KnowledgebaseArticle(id=8, has_attachments=False)
        assert len(article.get_attachments()) == 0
        assert transport.calls == []


class TestAttachment:
    """Test attachments."""

    def test_create_data(self, article):
        attachment = article.new_attachment(b"data", "notes.txt")
        assert attachment.file_size == 4
        assert attachment.build_data(True) == {
            "kbarticleid": 8,
            "filename": "notes.txt",
            "contents": "ZGF0YQ==",
        }

    def test_from_file(self, article, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_bytes(b"data")
        attachment = article.new_attachment_from_file(path)
        assert attachment.file_name == "notes.txt"
        assert attachment.contents == b"data"

    def test_composite_id(self, transport):
        attachment = KnowledgebaseAttachment(id=3, article_id=8, file_name="a.txt")
        assert attachment.get_id() == 3
        assert attachment.get_id(True) == [8, 3]
        attachment.delete()
        assert transport.calls[0].parameters == [8, 3]

    def test_get(self, transport):
        transport.respond_xml(ATTACHMENTS_XML)
        attachment = KnowledgebaseAttachment.get(8, 3)
        assert attachment.file_name == "steps.txt"
        assert transport.calls[0].parameters == [8, 3]

    def test_cannot_be_edited(self):
        with pytest.raises(UnsupportedOperationError):
            KnowledgebaseAttachment(id=3, article_id=8, file_name="a.txt").update()

    def test_wrapped_contents(self, transport):
        transport.respond_xml(ATTACHMENTS_XML.replace("aGVsbG8=", "aGVs\n        bG8="))
        assert KnowledgebaseAttachment.get(8, 3).contents == b"hello"

    def test_invalid_contents(self, transport):
        transport.respond_xml(ATTACHMENTS_XML.replace("aGVsbG8=", "not base64!"))
        with pytest.raises(DataFormatError):
            KnowledgebaseAttachment.get(8, 3)
