"""ORM models; importing this package registers every table on ``Base``."""

from folio.models.admin import Admin
from folio.models.blog import BlogPost
from folio.models.contact import Contact
from folio.models.project import Project

__all__ = ["Admin", "BlogPost", "Contact", "Project"]
