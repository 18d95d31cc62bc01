from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Dict, Optional

class SaveTokenRequest(BaseModel):
    fcm_token: Optional[str] = None
    expo_push_token: Optional[str] = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True
    }

    @property
    def token(self) -> Optional[str]:
        return self.fcm_token or self.expo_push_token

class PushNotification(BaseModel):
    title: str
    body: str
    data: Dict[str, str] = Field(default_factory=dict)
