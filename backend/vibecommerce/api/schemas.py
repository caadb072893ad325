from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for request/response bodies.

    The storefront client speaks camelCase (productId, cartItems, itemCount);
    Python code keeps snake_case attribute names. Either form is accepted on input,
    responses are written with the camelCase aliases.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
