from sqlalchemy import Column, ForeignKey, Index, String, UniqueConstraint, text
from sqlalchemy.orm import relationship

import misp.models.mixins as mixins
import misp.models.types as types
from misp.models.base import Base


class Org(
    Base,
    mixins.AuditMixin,
    mixins.SurrogateKeyEqualityMixin,
):
    __tablename__ = "org"

    id = types.Id("org_id_seq")
    member_class = Column(String(16), nullable=False)
    member_code = Column(String(50), nullable=False)
    subsystem_code = Column(String(64))
    name = Column(String(256))

    # Subsystems point at the organization that is the X-Road member
    sup_org_id = Column(ForeignKey("org.id"))
    sup_org = relationship("Org", remote_side=[id], backref="sub_orgs")

    __table_args__ = (
        UniqueConstraint(
            "member_class",
            "member_code",
            "subsystem_code",
            name="org_member_class_member_code_subsystem_code_key",
        ),
        # NULL subsystem codes never collide in the constraint above
        Index(
            "org_member_class_member_code_key",
            "member_class",
            "member_code",
            unique=True,
            postgresql_where=text("subsystem_code IS NULL"),
            sqlite_where=text("subsystem_code IS NULL"),
        ),
    )

    @property
    def x_road_identifier(self):
        parts = [self.member_class, self.member_code]
        if self.subsystem_code:
            parts.append(self.subsystem_code)
        return ":".join(parts)

    @property
    def is_subsystem(self):
        return self.subsystem_code is not None

    def __repr__(self):
        return "<Org(identifier='{}', id='{}')>".format(
            self.x_road_identifier, self.id
        )
