# fau_portal/crud/__init__.py

from .crud_blog_post import blog_post
from .crud_board_member import board_member
from .crud_contact_message import contact_message
from .crud_email_domain_blacklist import email_domain_blacklist
from .crud_event import event
from .crud_event_reminder import event_reminder
from .crud_registration import registration
from .crud_user import user
