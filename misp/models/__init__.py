from .base import Base
from .org import Org
from .person import Person
from .person_mail_org import MAIL_LENGTH, PersonMailOrg
