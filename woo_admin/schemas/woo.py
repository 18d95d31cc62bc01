from pydantic import BaseModel

class WooCredentials(BaseModel):
    """The credential triple used to call one WooCommerce store."""
    base_url: str
    consumer_key: str
    consumer_secret: str

    model_config = {
        "frozen": True
    }
