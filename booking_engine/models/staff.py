# booking_engine/models/staff.py
from sqlalchemy import Column, String, Integer, Boolean, Text, ForeignKey, Table
from sqlalchemy.orm import relationship
from booking_engine.models.base import Base


# Staff capability: a missing link means the staff member cannot perform the service
staff_services = Table(
    "staff_services",
    Base.metadata,
    Column("staff_member_id", Integer, ForeignKey("staff_members.id", ondelete="CASCADE"), primary_key=True),
    Column("service_id", Integer, ForeignKey("services.id", ondelete="CASCADE"), primary_key=True),
)


class StaffMember(Base):
    __tablename__ = "staff_members"

    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    email = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)

    business = relationship("Business", back_populates="staff_members")
    services = relationship("Service", secondary=staff_services, back_populates="staff_members")

    def __repr__(self):
        return f"<StaffMember(id={self.id}, name={self.name})>"

    def can_perform(self, service_id: int) -> bool:
        return any(service.id == service_id for service in self.services)
