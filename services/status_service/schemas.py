from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ServiceStatus(BaseModel):
    is_service_open: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True
