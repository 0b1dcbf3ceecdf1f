# app/models/report.py
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from ..db import Base, utcnow


class Report(Base):
    __tablename__ = "reports"

    id = Column(String, primary_key=True)
    # プロフィール削除後も通報履歴は残す
    profile_id = Column(
        String, ForeignKey("profiles.id", ondelete="SET NULL"), index=True, nullable=True
    )
    profile_url = Column(String, nullable=True)

    reason = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    reporter_name = Column(String, nullable=True)
    reporter_email = Column(String, nullable=True)
    reporter_ip = Column(String, nullable=True)

    status = Column(String, nullable=False, default="pending")
    admin_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    profile = relationship("Profile", back_populates="reports")
