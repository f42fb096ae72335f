"""Tests for comments on news items, articles and troubleshooter steps."""

import pytest

from helpdesk_client.common import ResultSet
from helpdesk_client.errors import UnsupportedOperationError, ValidationError
from helpdesk_client.objects import (
    CommentStatus,
    CreatorType,
    KnowledgebaseArticle,
    KnowledgebaseComment,
    NewsComment,
    NewsItem,
    Staff,
    TroubleshooterComment,
    TroubleshooterStep,
    User,
)

NEWS_COMMENTS_XML = """
<newsitemcomments>
  <newsitemcomment>
    <id>1</id>
    <newsitemid>4</newsitemid>
    <creatortype>2</creatortype>
    <creatorid>0</creatorid>
    <fullname>Ann</fullname>
    <email>ann@example.com</email>
    <ipaddress>10.0.0.1</ipaddress>
    <dateline>1700000000</dateline>
    <parentcommentid>0</parentcommentid>
    <commentstatus>2</commentstatus>
    <useragent></useragent>
    <referrer></referrer>
    <parenturl></parenturl>
    <contents>Nice update</contents>
  </newsitemcomment>
</newsitemcomments>
"""


@pytest.fixture
def news_item() -> NewsItem:
    return NewsItem(id=4, subject="Release", contents="Out now", staff_id=1)


class TestCommentList:
    """Test the comments component of a commentable object."""

    def test_fetched_once(self, news_item, transport):
        transport.respond_xml(NEWS_COMMENTS_XML)
        comments = news_item.get_comments()
        news_item.get_comments()

        assert len(comments) == 1
        comment = comments.first()
        assert comment.full_name == "Ann"
        assert comment.creator_type == CreatorType.USER
        assert comment.comment_status == CommentStatus.APPROVED
        assert comment.news_item_id == 4
        assert len(transport.calls) == 1
        call = transport.calls[0]
        assert (call.controller, call.parameters) == ("/News/Comment", ["ListAll", 4])

    def test_reload(self, news_item, transport):
        transport.respond_xml(NEWS_COMMENTS_XML, NEWS_COMMENTS_XML)
        news_item.get_comments()
        news_item.get_comments(reload=True)
        assert len(transport.calls) == 2

    def test_new_owner_has_no_comments(self, transport):
        comments = NewsItem().get_comments()
        assert isinstance(comments, ResultSet)
        assert len(comments) == 0
        assert comments.object_type is NewsComment
        assert transport.calls == []

    @pytest.mark.parametrize("owner, comment_class", [
        (KnowledgebaseArticle(), KnowledgebaseComment),
        (TroubleshooterStep(), TroubleshooterComment),
    ])
    def test_new_articles_and_steps_have_no_comments(self, transport, owner, comment_class):
        comments = owner.get_comments()
        assert len(comments) == 0
        assert comments.object_type is comment_class
        assert transport.calls == []


class TestNewComment:
    """Test building and creating comments."""

    def test_staff_author(self, news_item):
        comment = news_item.new_comment(Staff(id=2, full_name="Sam"), "Thanks")
        assert comment.build_data(True) == {
            "contents": "Thanks",
            "creatortype": 1,
            "creatorid": 2,
            "newsitemid": 4,
        }

    def test_named_guest_author(self, news_item):
        comment = news_item.new_comment("Guest", "Hello").set_email("guest@example.com")
        assert comment.build_data(True) == {
            "contents": "Hello",
            "creatortype": 2,
            "fullname": "Guest",
            "email": "guest@example.com",
            "newsitemid": 4,
        }

    def test_author_forms_are_exclusive(self, news_item):
        comment = news_item.new_comment(User(id=3), "Hi")
        assert comment.creator_id == 3
        comment.set_creator("Bob")
        assert comment.creator_id is None
        assert comment.full_name == "Bob"
        comment.set_creator(Staff(id=2))
        assert comment.full_name is None
        assert comment.creator_type == CreatorType.STAFF

    def test_author_required(self):
        comment = NewsComment(news_item_id=4, creator_type=2, contents="Hi")
        with pytest.raises(ValidationError) as exc_info:
            comment.build_data(True)
        assert exc_info.value.field_name == "creator_id"

    def test_parent_required(self):
        comment = NewsComment(creator_type=2, full_name="Bob", contents="Hi")
        with pytest.raises(ValidationError) as exc_info:
            comment.build_data(True)
        assert exc_info.value.field_name == "news_item_id"

    def test_reply(self, news_item):
        parent = NewsComment(id=9, news_item_id=4)
        comment = news_item.new_comment("Guest", "Agreed").set_parent_comment(parent)
        assert comment.build_data(True)["parentcommentid"] == 9

    def test_create(self, news_item, transport):
        transport.respond_xml(NEWS_COMMENTS_XML)
        comment = news_item.new_comment("Ann", "Nice update").create()
        assert comment.id == 1
        call = transport.calls[0]
        assert (call.method, call.controller, call.parameters) == ("POST", "/News/Comment", [])

    def test_comments_cannot_be_edited(self, transport):
        with pytest.raises(UnsupportedOperationError):
            NewsComment(id=1, news_item_id=4, full_name="Ann", contents="x").update()
        assert transport.calls == []

    def test_set_comment_status(self):
        comment = NewsComment().set_comment_status(3)
        assert comment.comment_status == CommentStatus.SPAM
        assert NewsComment().set_comment_status(7).comment_status is None


class TestParent:
    """Test navigation from a comment to its parent."""

    def test_known_parent_not_fetched(self, news_item, transport):
        comment = news_item.new_comment("Guest", "Hello")
        assert comment.get_parent() is news_item
        assert comment.get_news_item() is news_item
        assert transport.calls == []

    def test_parent_fetched_by_id(self, transport):
        transport.respond_xml(
            "<newsitems><newsitem><id>4</id><subject>Release</subject></newsitem></newsitems>"
        )
        comment = NewsComment(id=1, news_item_id=4)
        assert comment.get_parent().subject == "Release"
        call = transport.calls[0]
        assert (call.controller, call.parameters) == ("/News/NewsItem", [4])

    def test_creator_fetched_by_type(self, transport):
        transport.respond_xml("<staff><staff><id>2</id><fullname>Sam</fullname></staff></staff>")
        comment = NewsComment(creator_type=CreatorType.STAFF.value, creator_id=2)
        assert comment.get_creator().full_name == "Sam"
        assert transport.calls[0].controller == "/Base/Staff"


class TestOtherCommentables:
    """Test the parent wire names of the other comment types."""

    def test_knowledgebase(self):
        article = KnowledgebaseArticle(id=8, subject="How to", contents="Steps")
        comment = article.new_comment("Guest", "Useful")
        assert isinstance(comment, KnowledgebaseComment)
        assert comment.build_data(True)["knowledgebasearticleid"] == 8
        assert comment.get_article() is article

    def test_troubleshooter(self, transport):
        step = TroubleshooterStep(id=6, subject="Restart", contents="Turn it off")
        comment = step.new_comment("Guest", "Worked")
        assert isinstance(comment, TroubleshooterComment)
        assert comment.build_data(True)["troubleshooterstepid"] == 6

        step.get_comments()
        call = transport.calls[0]
        assert (call.controller, call.parameters) == ("/Troubleshooter/Comment", ["ListAll", 6])
