from datetime import datetime
from typing import Any, Dict, List, Optional

import attrs


@attrs.define
class Movie:
    """Movie as produced by the metadata provider; id is the provider's id."""

    id: str
    title: str
    overview: str = ''
    poster_path: str = ''
    backdrop_path: str = ''
    genres: List[Dict[str, Any]] = attrs.field(factory=list)
    casts: List[Dict[str, Any]] = attrs.field(factory=list)
    release_date: str = ''
    original_language: str = ''
    tagline: str = ''
    vote_average: float = 0.0
    runtime: int = 0
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return attrs.asdict(self)
