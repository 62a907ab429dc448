from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PaginationMeta(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    current_page: int
    page_size: int
    total_courses: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool
