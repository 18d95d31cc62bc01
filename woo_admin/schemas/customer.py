from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional

# Customer record derived from order history (output)
class CustomerAggregate(BaseModel):
    id: str
    name: str = ""
    email: str = ""
    phone: str = ""
    city: str = ""
    state: str = ""
    total_orders: int = 1
    total_spent: float = 0.0
    last_order_date: Optional[str] = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True
    }
