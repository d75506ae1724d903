# fau_portal/models/__init__.py
# Importing every model here registers it on Base.metadata.

from .user import User
from .event import Event
from .registration import EventRegistration
from .reminder import EventReminder
from .contact_message import ContactMessage
from .board_member import BoardMember
from .blog_post import BlogPost
from .email_domain_blacklist import EmailDomainBlacklist
