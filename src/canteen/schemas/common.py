from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing_extensions import Annotated

# предел колонок Numeric(10, 2)
MAX_AMOUNT = 99999999.99

# деньги: конечное неотрицательное число, влезающее в Numeric(10, 2)
Money = Annotated[float, Field(ge=0, le=MAX_AMOUNT, allow_inf_nan=False)]


class CamelModel(BaseModel):
    """
    База для схем API: наружу camelCase (tableId, createdAt),
    на вход принимаются и camelCase, и snake_case имена.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
