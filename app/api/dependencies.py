from app.services.profile.service import ProfileService
from app.services.store import get_store


def get_profile_service() -> ProfileService:
    return ProfileService(get_store())
