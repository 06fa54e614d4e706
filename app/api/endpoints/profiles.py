from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from pydantic import BaseModel

from app.api.dependencies import get_profile_service
from app.core.exceptions import NotFoundError
from app.models.profile import ProfileProjection, PropertyQuery
from app.services.profile.service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


class UserScoreResponse(BaseModel):
    user_id: int
    score: int


@router.get("/search", response_model=list[ProfileProjection])
async def search_profiles(
    name: str | None = Query(default=None, description="Substring of the member's full name"),
    skill: str | None = None,
    company: str | None = None,
    industry: str | None = None,
    tool: str | None = None,
    role: str | None = None,
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileProjection]:
    query = PropertyQuery(skill=skill, company=company, industry=industry, tool=tool, role=role)
    try:
        return await service.search_profiles(name=name, query=query)
    except Exception as e:
        logger.exception(f"Profile search failed: {e}")
        raise HTTPException(status_code=500, detail="Profile search failed.")


@router.get("/{user_id}", response_model=ProfileProjection)
async def get_profile(user_id: int, service: ProfileService = Depends(get_profile_service)) -> ProfileProjection:
    try:
        return await service.get_profile(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception(f"Error building profile for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to build profile.")


@router.get("/{user_id}/score", response_model=UserScoreResponse)
async def get_user_score(user_id: int, service: ProfileService = Depends(get_profile_service)) -> UserScoreResponse:
    try:
        score = await service.get_user_score(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception(f"Error scoring user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to compute score.")
    return UserScoreResponse(user_id=user_id, score=score)
