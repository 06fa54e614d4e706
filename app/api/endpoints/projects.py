from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel

from app.api.dependencies import get_profile_service
from app.core.exceptions import NotFoundError
from app.services.profile.service import ProfileService

router = APIRouter(prefix="/projects", tags=["projects"])


class ProjectScoreResponse(BaseModel):
    project_id: int
    score: int


@router.get("/{project_id}/score", response_model=ProjectScoreResponse)
async def get_project_score(
    project_id: int, service: ProfileService = Depends(get_profile_service)
) -> ProjectScoreResponse:
    try:
        score = await service.get_project_score(project_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception(f"Error scoring project {project_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to compute score.")
    return ProjectScoreResponse(project_id=project_id, score=score)
