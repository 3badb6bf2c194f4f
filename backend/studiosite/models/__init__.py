from studiosite.models.blog import BlogComment, BlogPost, Category, Tag
from studiosite.models.contact import ContactSubmission
from studiosite.models.user import User

__all__ = [
    "BlogComment",
    "BlogPost",
    "Category",
    "ContactSubmission",
    "Tag",
    "User",
]
