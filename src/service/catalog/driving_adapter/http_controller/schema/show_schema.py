from typing import Any, Dict, List, Union

from pydantic import BaseModel


class ShowSlotInput(BaseModel):
    date: str = ''
    time: Union[str, List[str]] = []


class ShowAddRequest(BaseModel):
    # Missing fields are reported by the use case as a ValidationError
    movie_id: str = ''
    show_price: int = 0  # whole currency units
    shows_input: List[ShowSlotInput] = []

    class Config:
        json_schema_extra = {
            'example': {
                'movie_id': '1232546',
                'show_price': 200,
                'shows_input': [
                    {'date': '2030-07-01', 'time': ['18:30', '21:00']},
                    {'date': '2030-07-02', 'time': '19:00'},
                ],
            }
        }


class ShowAddResponse(BaseModel):
    success: bool = True
    message: str


class NowPlayingResponse(BaseModel):
    success: bool = True
    movies: List[Dict[str, Any]]


class ShowListResponse(BaseModel):
    success: bool = True
    shows: List[Dict[str, Any]]


class ShowTimesResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'success': True,
                'movie': {'id': '1232546', 'title': 'Until Dawn'},
                'date_time': {
                    '2030-07-01': [
                        {'time': '18:30', 'show_id': '01936d8f-5e73-7c4e-a9c5-123456789abc'}
                    ]
                },
            }
        },
    }

    success: bool = True
    movie: Dict[str, Any]
    date_time: Dict[str, List[Dict[str, str]]]
