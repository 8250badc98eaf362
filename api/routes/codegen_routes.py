"""
Code generation demo endpoints: template generation and saved history.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.schemas.codegen_schemas import BookmarkRequest, GenerateRequest, GenerateResponse, GenerationListResponse
from api.schemas.user_schemas import User
from api.services.codegen_service import CodeGenService
from api.utils.auth import get_current_user
from api.utils.services import get_codegen_service

codegen_routes = APIRouter()


@codegen_routes.post("/codegen", response_model=GenerateResponse)
async def generate(
    body: GenerateRequest,
    current_user: User = Depends(get_current_user),
    codegen: CodeGenService = Depends(get_codegen_service),
) -> GenerateResponse:
    generated = codegen.generate(body.prompt, body.language)
    saved = codegen.save_generation(current_user.user_id, body.prompt, generated) if body.save else None
    return GenerateResponse(generated=generated, saved=saved)


@codegen_routes.get("/codegen/history", response_model=GenerationListResponse)
async def history(
    limit: Optional[int] = Query(None, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    codegen: CodeGenService = Depends(get_codegen_service),
) -> GenerationListResponse:
    """Saved generations, newest first."""
    return GenerationListResponse(generations=codegen.get_user_generations(current_user.user_id, limit))


@codegen_routes.patch("/codegen/{generation_id}/bookmark", status_code=status.HTTP_204_NO_CONTENT)
async def set_bookmark(
    generation_id: str,
    body: BookmarkRequest,
    current_user: User = Depends(get_current_user),
    codegen: CodeGenService = Depends(get_codegen_service),
) -> Response:
    codegen.toggle_bookmark(current_user.user_id, generation_id, body.is_bookmarked)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@codegen_routes.delete("/codegen/{generation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_generation(
    generation_id: str,
    current_user: User = Depends(get_current_user),
    codegen: CodeGenService = Depends(get_codegen_service),
) -> Response:
    codegen.delete_generation(current_user.user_id, generation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
