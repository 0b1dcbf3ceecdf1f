# app/models/analytics.py
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from ..db import Base, utcnow


class ProfileView(Base):
    __tablename__ = "profile_views"

    id = Column(String, primary_key=True)
    profile_id = Column(
        String, ForeignKey("profiles.id", ondelete="CASCADE"), index=True, nullable=False
    )
    viewer_ip = Column(String, nullable=True)
    viewed_at = Column(DateTime, default=utcnow, nullable=False)

    profile = relationship("Profile", back_populates="views")


class ProfileInteraction(Base):
    __tablename__ = "profile_interactions"

    id = Column(String, primary_key=True)
    profile_id = Column(
        String, ForeignKey("profiles.id", ondelete="CASCADE"), index=True, nullable=False
    )
    type = Column(String, nullable=False)  # 'phone','whatsapp','viber','instagram', ...
    interactor_ip = Column(String, nullable=True)
    interacted_at = Column(DateTime, default=utcnow, nullable=False)

    profile = relationship("Profile", back_populates="interactions")
