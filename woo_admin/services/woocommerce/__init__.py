from .client import (
    Ok,
    UpstreamError,
    WooResult,
    WooCommerceClient,
    build_proxy_url,
)

__all__ = [
    'Ok',
    'UpstreamError',
    'WooResult',
    'WooCommerceClient',
    'build_proxy_url',
]
