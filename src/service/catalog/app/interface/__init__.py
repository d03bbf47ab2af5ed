"""Catalog Service Interfaces"""

from src.service.catalog.app.interface.i_favorite_movie_repo import IFavoriteMovieRepo
from src.service.catalog.app.interface.i_movie_metadata_provider import IMovieMetadataProvider
from src.service.catalog.app.interface.i_movie_repo import IMovieRepo
from src.service.catalog.app.interface.i_show_command_repo import IShowCommandRepo
from src.service.catalog.app.interface.i_show_query_repo import IShowQueryRepo

__all__ = [
    'IFavoriteMovieRepo',
    'IMovieMetadataProvider',
    'IMovieRepo',
    'IShowCommandRepo',
    'IShowQueryRepo',
]
