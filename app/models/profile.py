# app/models/profile.py

from sqlalchemy import Column, String, Boolean, Text, DateTime
from sqlalchemy.orm import relationship

from ..db import Base, utcnow


class Profile(Base):
    """
    掲載プロフィール（escort / admin 共通のユーザー行）。
    gold / silver などのティア状態は boolean では持たず、
    各 *_expires_at / *_expiry と現在時刻の比較で毎回導出する。
    """

    __tablename__ = "profiles"

    id = Column(String, primary_key=True, index=True)
    role = Column(String, nullable=False, default="escort")  # 'escort' or 'admin'
    email = Column(String, nullable=False, unique=True)
    slug = Column(String, nullable=False, unique=True)

    name = Column(String, nullable=True)
    phone = Column(String, nullable=False, default="")
    whatsapp_available = Column(Boolean, nullable=False, default=False)
    viber_available = Column(Boolean, nullable=False, default=False)

    city = Column(String, nullable=False)
    district = Column(String, nullable=True)
    gender = Column(String, nullable=False)  # 'female','male','transsexual'
    about = Column(Text, nullable=True)

    # ティア期限（複数同時に有効になりうる）
    gold_expires_at = Column(DateTime, nullable=True)
    silver_expires_at = Column(DateTime, nullable=True)
    featured_expires_at = Column(DateTime, nullable=True)
    verified_photos_expiry = Column(DateTime, nullable=True)
    public_expiry = Column(DateTime, nullable=True)

    last_active = Column(DateTime, default=utcnow, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    views = relationship("ProfileView", back_populates="profile", cascade="all, delete-orphan")
    interactions = relationship(
        "ProfileInteraction", back_populates="profile", cascade="all, delete-orphan"
    )
    # 通報は削除しない（profile_id が NULL になる）
    reports = relationship("Report", back_populates="profile")
