import math
from typing import Union

from pydantic import BaseModel, StrictFloat, StrictInt, field_validator


class PaymentIntentRequest(BaseModel):
    # Price in major currency units
    price: Union[StrictInt, StrictFloat]

    @field_validator("price")
    @classmethod
    def _finite_non_negative(cls, v):
        if math.isnan(v) or math.isinf(v) or v < 0:
            raise ValueError("price must be a non-negative number")
        return v


class PaymentIntentResponse(BaseModel):
    clientSecret: str
