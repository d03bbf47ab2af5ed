"""
TMDB Movie Metadata Provider

REST client over httpx. Connection resets and timeouts are retried with
exponential backoff; every other failure is reported immediately.
"""

from typing import Any, Dict, List, Optional

import anyio
import httpx

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import NotFoundError, ServiceUnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface import IMovieMetadataProvider
from src.service.catalog.domain.entity.movie_entity import Movie


_RETRYABLE_ERRORS = (httpx.ConnectError, httpx.TimeoutException, httpx.RemoteProtocolError)


class TmdbMovieProviderImpl(IMovieMetadataProvider):
    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        max_retries: Optional[int] = None,
        initial_delay_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.max_retries = max_retries or settings.TMDB_MAX_RETRIES
        self.initial_delay_seconds = (
            initial_delay_seconds
            if initial_delay_seconds is not None
            else settings.TMDB_RETRY_INITIAL_DELAY_SECONDS
        )
        token = api_key if api_key is not None else settings.TMDB_API_KEY.get_secret_value()
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.TMDB_API_BASE_URL,
            headers={'Authorization': f'Bearer {token}', 'Accept': 'application/json'},
            timeout=timeout_seconds or settings.TMDB_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def _get(self, path: str) -> Dict[str, Any]:
        for attempt in range(1, self.max_retries + 1):
            try:
                response = await self._client.get(path)
            except _RETRYABLE_ERRORS as e:
                if attempt == self.max_retries:
                    Logger.base.error(f'❌ [TMDB] {path} failed after {attempt} attempts: {e!r}')
                    raise ServiceUnavailableError('Movie metadata provider unavailable') from e
                delay = self.initial_delay_seconds * 2 ** (attempt - 1)
                Logger.base.warning(
                    f'🔁 [TMDB] Retry {attempt}/{self.max_retries} for {path} in {delay}s: {e!r}'
                )
                await anyio.sleep(delay)
                continue
            except httpx.HTTPError as e:
                raise ServiceUnavailableError(f'Movie metadata request failed: {e}') from e

            if response.status_code == 404:
                raise NotFoundError(f'Movie not found at provider: {path}')
            if response.is_error:
                Logger.base.error(f'❌ [TMDB] {path} returned {response.status_code}')
                raise ServiceUnavailableError(
                    f'Movie metadata provider returned {response.status_code}'
                )
            return response.json()

        raise ServiceUnavailableError('Movie metadata provider unavailable')

    @Logger.io(truncate_content=True)
    async def list_now_playing(self) -> List[Dict[str, Any]]:
        data = await self._get('/movie/now_playing')
        return list(data.get('results') or [])

    @Logger.io(truncate_content=True)
    async def get_movie(self, *, movie_id: str) -> Movie:
        details = await self._get(f'/movie/{movie_id}')
        credits = await self._get(f'/movie/{movie_id}/credits')

        return Movie(
            id=str(movie_id),
            title=details.get('title') or '',
            overview=details.get('overview') or '',
            poster_path=details.get('poster_path') or '',
            backdrop_path=details.get('backdrop_path') or '',
            genres=list(details.get('genres') or []),
            casts=list(credits.get('cast') or []),
            release_date=details.get('release_date') or '',
            original_language=details.get('original_language') or '',
            tagline=details.get('tagline') or '',
            vote_average=float(details.get('vote_average') or 0.0),
            runtime=int(details.get('runtime') or 0),
        )

    async def aclose(self) -> None:
        await self._client.aclose()
