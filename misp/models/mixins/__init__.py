from .audit import AuditMixin
from .identity import SurrogateKeyEqualityMixin
