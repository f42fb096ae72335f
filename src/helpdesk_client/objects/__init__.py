"""Helpdesk domain objects."""

from .attachment import AttachmentBase
from .base import ObjectBase
from .comment import CommentBase, Comments, CommentStatus, CreatorType
from .department import Department, DepartmentModule, DepartmentType
from .knowledgebase import (
    ArticleStatus,
    KnowledgebaseArticle,
    KnowledgebaseAttachment,
    KnowledgebaseComment,
)
from .news import (
    NewsCategory,
    NewsCategoryVisibility,
    NewsComment,
    NewsItem,
    NewsStatus,
    NewsSubscriber,
    NewsType,
)
from .staff import Staff, StaffGroup
from .ticket import (
    CreationType,
    PostCreator,
    Ticket,
    TicketAttachment,
    TicketCustomFieldGroup,
    TicketPost,
    TicketType,
    TicketTypeVisibility,
)
from .troubleshooter import (
    StepStatus,
    TroubleshooterCategory,
    TroubleshooterCategoryType,
    TroubleshooterComment,
    TroubleshooterStep,
)
from .user import (
    OrganizationType,
    Salutation,
    User,
    UserGroup,
    UserGroupType,
    UserOrganization,
    UserRole,
)

__all__ = [
    "ObjectBase",
    "AttachmentBase",
    "CommentBase",
    "Comments",
    "CommentStatus",
    "CreatorType",
    "Department",
    "DepartmentModule",
    "DepartmentType",
    "ArticleStatus",
    "KnowledgebaseArticle",
    "KnowledgebaseAttachment",
    "KnowledgebaseComment",
    "NewsCategory",
    "NewsCategoryVisibility",
    "NewsComment",
    "NewsItem",
    "NewsStatus",
    "NewsSubscriber",
    "NewsType",
    "Staff",
    "StaffGroup",
    "CreationType",
    "PostCreator",
    "Ticket",
    "TicketAttachment",
    "TicketCustomFieldGroup",
    "TicketPost",
    "TicketType",
    "TicketTypeVisibility",
    "StepStatus",
    "TroubleshooterCategory",
    "TroubleshooterCategoryType",
    "TroubleshooterComment",
    "TroubleshooterStep",
    "OrganizationType",
    "Salutation",
    "User",
    "UserGroup",
    "UserGroupType",
    "UserOrganization",
    "UserRole",
]
