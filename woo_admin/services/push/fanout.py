import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import httpx

from .base import PushSender
from woo_admin.schemas.push import PushNotification

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 10

@dataclass
class DeliveryResult:
    token: str
    ok: bool
    status_code: Optional[int] = None
    error: Optional[str] = None

@dataclass
class FanoutReport:
    results: List[DeliveryResult] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        """Number of tokens a send was attempted for."""
        return len(self.results)

    @property
    def delivered(self) -> int:
        """Number of sends the gateway answered with a 2xx status."""
        return sum(1 for result in self.results if result.ok)

    @property
    def failed_tokens(self) -> List[str]:
        return [result.token for result in self.results if not result.ok]


async def notify(
    sender: PushSender,
    tokens: Sequence[str],
    notification: PushNotification,
    concurrency: int = DEFAULT_CONCURRENCY
) -> FanoutReport:
    """
    Send one notification to every token with at most `concurrency` requests in flight.

    The sender is authorized once for the whole flush; an authorization failure
    propagates. Per-token failures are recorded in the report and never retried.
    """
    if not tokens:
        return FanoutReport()

    semaphore = asyncio.Semaphore(max(1, concurrency))

    async with sender.client() as client:
        headers = await sender.authorize(client)

        async def deliver(token: str) -> DeliveryResult:
            async with semaphore:
                try:
                    response = await sender.send(client, headers, token, notification)
                except httpx.HTTPError as e:
                    logger.warning(f"Push delivery raised for token {token[:12]}...: {e}")
                    return DeliveryResult(token=token, ok=False, error=str(e))
                except Exception as e:
                    logger.exception(f"Unexpected push delivery error for token {token[:12]}...")
                    return DeliveryResult(token=token, ok=False, error=str(e))

            if not response.is_success:
                logger.warning(f"Push delivery for token {token[:12]}... failed with status {response.status_code}")
                return DeliveryResult(token=token, ok=False, status_code=response.status_code, error=response.text)
            return DeliveryResult(token=token, ok=True, status_code=response.status_code)

        results = await asyncio.gather(*(deliver(token) for token in tokens))

    report = FanoutReport(results=list(results))
    logger.info(f"Push flush via {await sender.get_platform_name()}: {report.delivered}/{report.attempted} delivered")
    return report
