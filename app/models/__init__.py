from .profile import Profile
from .analytics import ProfileView, ProfileInteraction
from .report import Report

__all__ = [
    "Profile",
    "ProfileView",
    "ProfileInteraction",
    "Report",
]
