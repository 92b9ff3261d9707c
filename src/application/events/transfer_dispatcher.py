"""Transfer dispatch pipeline.

Every transfer passes a chain of async admission filters, then fans out to a
fixed set of handlers running concurrently. Handlers flagged with
``throw_error_on_failure`` surface their failures to the caller; the others
are logged and ignored.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Sequence

from domain.models import Transfer
from observability import transfer_handler_failures, transfers_filtered, transfers_received

log = logging.getLogger(__name__)

TransferFilter = Callable[[Transfer], Awaitable[bool]]


@dataclass(frozen=True)
class TransferHandlerFn:
    """A named transfer handler and its failure criticality.

    ``fn`` may be a coroutine function or a plain function.
    """

    fn: Callable[[Transfer], Awaitable[None] | None]
    name: str
    throw_error_on_failure: bool


@dataclass(frozen=True)
class HandlerOutcome:
    name: str
    throw_error_on_failure: bool
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def is_critical_failure(self) -> bool:
        return not self.succeeded and self.throw_error_on_failure


@dataclass(frozen=True)
class DispatchResult:
    """What happened to one transfer.

    ``handled`` is False when an admission filter dropped the transfer, in
    which case no handler ran and ``outcomes`` is empty.
    """

    transfer: Transfer
    handled: bool
    outcomes: list[HandlerOutcome] = field(default_factory=list)

    @property
    def failures(self) -> list[HandlerOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    @property
    def critical_failures(self) -> list[HandlerOutcome]:
        return [outcome for outcome in self.outcomes if outcome.is_critical_failure]


class TransferDispatchError(Exception):
    """One or more critical handlers failed to handle a transfer.

    Attributes:
        handler_name: Name of the first failed handler
        cause: Exception raised by the first failed handler
        failures: Every critical failure, in handler registration order
    """

    def __init__(self, failures: Sequence[HandlerOutcome]):
        self.failures = list(failures)
        first = self.failures[0]
        self.handler_name = first.name
        self.cause = first.error
        details = "; ".join(f"{failure.name} failed to handle transfer. {failure.error}" for failure in self.failures)
        super().__init__(details)


class TransferDispatcher:
    """Runs admission filters and handlers for each transfer.

    Events are independent: the dispatcher keeps no state between transfers.
    """

    def __init__(self, handlers: Sequence[TransferHandlerFn], filters: Sequence[TransferFilter] = ()):
        self._handlers = list(handlers)
        self._filters = list(filters)

    @property
    def handlers(self) -> list[TransferHandlerFn]:
        return list(self._handlers)

    async def dispatch(self, transfer: Transfer) -> DispatchResult:
        """Filter then handle ``transfer``, collecting every handler outcome."""
        transfers_received.add(1, {"chain_id": transfer.chain_id})

        for transfer_filter in self._filters:
            should_handle = await transfer_filter(transfer)
            if not should_handle:
                log.debug(f"Transfer dropped by filter {getattr(transfer_filter, '__name__', transfer_filter)}: {transfer}")
                transfers_filtered.add(1, {"chain_id": transfer.chain_id})
                return DispatchResult(transfer=transfer, handled=False)

        results = await asyncio.gather(
            *(self._run_handler(handler, transfer) for handler in self._handlers),
            return_exceptions=True,
        )

        outcomes = []
        for handler, result in zip(self._handlers, results):
            if isinstance(result, Exception):
                transfer_handler_failures.add(1, {"handler": handler.name})
                outcomes.append(HandlerOutcome(name=handler.name, throw_error_on_failure=handler.throw_error_on_failure, error=result))
            elif isinstance(result, BaseException):
                raise result
            else:
                outcomes.append(HandlerOutcome(name=handler.name, throw_error_on_failure=handler.throw_error_on_failure))

        return DispatchResult(transfer=transfer, handled=True, outcomes=outcomes)

    async def handle_async(self, transfer: Transfer) -> DispatchResult:
        """Dispatch ``transfer`` and raise if a critical handler failed.

        Raises:
            TransferDispatchError: a handler flagged ``throw_error_on_failure`` failed
        """
        result = await self.dispatch(transfer)

        for failure in result.failures:
            if not failure.throw_error_on_failure:
                log.warning(f"⚠️ {failure.name} failed to handle transfer {transfer.token_key}: {failure.error}")

        if result.critical_failures:
            error = TransferDispatchError(result.critical_failures)
            log.error(f"❌ {error}")
            raise error

        return result

    @staticmethod
    async def _run_handler(handler: TransferHandlerFn, transfer: Transfer) -> None:
        result = handler.fn(transfer)
        if inspect.isawaitable(result):
            await result
