from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional

# Fields are optional so that a missing value is reported as 400, not 422
class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class LoginResponse(BaseModel):
    success: bool = True
    user_id: int
    access_token: str
    token_type: str = "bearer"

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True
    }
