"""
Sale processing service.

Fans one validated sale event out to the two sinks and reconciles the results:
- The ledger receives the event's row projection.
- The notifier receives the event's message projection.

Both calls are always attempted exactly once and run concurrently on a worker
pool; a failure in one never prevents or cancels the other. The outcome is
decided only after both calls have finished. There is no retry and no
rollback of a sink call that succeeded.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Tuple

from domain.sale import SaleEvent

logger = logging.getLogger(__name__)

LEDGER_APPEND: str = "ledger_append"
NOTIFICATION_SEND: str = "notification_send"


class Ledger(Protocol):
    def append_row(self, row: List[str]) -> None: ...


class Notifier(Protocol):
    def send_message(self, text: str) -> None: ...


class SaleStatus(str, Enum):
    SUCCEEDED = "succeeded"
    PARTIAL_FAILURE = "partial_failure"


@dataclass(frozen=True, slots=True)
class SaleOutcome:
    """
    Result of processing one sale event.

    failed_operations names which dispatched calls errored; it is kept for
    logging and is not exposed to the caller.
    """
    status: SaleStatus
    failed_operations: Tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.status is SaleStatus.SUCCEEDED


class SaleProcessor:
    """
    Processes sale events of any product line against one ledger and one notifier.

    The processor owns its thread pool unless an executor is passed in.
    """

    def __init__(
        self,
        ledger: Ledger,
        notifier: Notifier,
        executor: Optional[Executor] = None,
        max_workers: int = 16,
    ) -> None:
        self.ledger = ledger
        self.notifier = notifier
        self._owns_executor = executor is None
        self._executor = executor if executor is not None else ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="sale-sink"
        )

    def process(self, event: SaleEvent) -> SaleOutcome:
        """
        Validate the event, dispatch it to both sinks, and join.

        Raises:
            ValidationError: `item` is empty (nothing is dispatched)
        """

        event.validate()
        event = event.with_default_timestamp()

        row = event.to_row()
        message = event.to_message()

        futures = {
            LEDGER_APPEND: self._executor.submit(self.ledger.append_row, row),
            NOTIFICATION_SEND: self._executor.submit(self.notifier.send_message, message),
        }
        wait(futures.values())

        failed = _collect_failures(futures)
        line = event.product_line.value

        if failed:
            logger.warning("Processed %s sale with %d errors", line, len(failed))
            return SaleOutcome(status=SaleStatus.PARTIAL_FAILURE, failed_operations=tuple(failed))

        logger.info("Successfully processed %s sale: %s", line, event.describe())
        return SaleOutcome(status=SaleStatus.SUCCEEDED)

    def shutdown(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)


def _collect_failures(futures: "dict[str, Future[None]]") -> List[str]:
    # Only called after the join, so every future is done.
    failed: List[str] = []
    for operation, future in futures.items():
        error = future.exception()
        if error is not None:
            logger.error("Error in %s: %s", operation, error)
            failed.append(operation)
    return failed


__all__ = [
    "LEDGER_APPEND",
    "NOTIFICATION_SEND",
    "SaleOutcome",
    "SaleProcessor",
    "SaleStatus",
]
