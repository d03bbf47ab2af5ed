from uuid_utils import UUID

from src.service.catalog.domain.entity.show_entity import Show
from src.service.catalog.driven_adapter.model.show_model import ShowModel


def show_model_to_entity(show_model: ShowModel) -> Show:
    return Show(
        id=UUID(str(show_model.id)),
        movie_id=show_model.movie_id,
        show_date_time=show_model.show_date_time,
        show_price=show_model.show_price,
        created_at=show_model.created_at,
    )
