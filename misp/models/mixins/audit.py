from sqlalchemy import TIMESTAMP, Column, String, func


class AuditMixin(object):
    """When a row was created and last changed, and by which portal user"""

    time_created = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )
    time_updated = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
    # Login of the portal user who last saved the row
    username = Column(String(20))
