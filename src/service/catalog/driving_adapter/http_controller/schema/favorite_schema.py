from typing import Any, Dict, List

from pydantic import BaseModel


class FavoriteToggleRequest(BaseModel):
    movie_id: str = ''

    class Config:
        json_schema_extra = {'example': {'movie_id': '1232546'}}


class FavoriteToggleResponse(BaseModel):
    success: bool = True
    message: str
    is_favorite: bool


class FavoriteListResponse(BaseModel):
    success: bool = True
    movies: List[Dict[str, Any]]
