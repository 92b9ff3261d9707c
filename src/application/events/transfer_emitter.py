"""Transfer event source.

The ingestion boundary emits normalized transfers here. ``emit`` reports a
failed transfer to its caller (for example so a webhook can answer 500);
``consume`` drains a stream and keeps going past failed transfers.
"""

import logging
from dataclasses import dataclass
from typing import AsyncIterable, Awaitable, Callable, Sequence

from application.events.transfer_dispatcher import TransferDispatcher, TransferFilter, TransferHandlerFn
from domain.models import Transfer

log = logging.getLogger(__name__)

TransferListener = Callable[[Transfer], Awaitable[object]]


@dataclass(frozen=True)
class ConsumeSummary:
    processed: int
    failed: int


class TransferEmitter:
    def __init__(self) -> None:
        self._listeners: list[TransferListener] = []

    def on(self, listener: TransferListener) -> None:
        """Subscribe ``listener`` to every emitted transfer."""
        self._listeners.append(listener)

    async def emit(self, transfer: Transfer) -> None:
        """Deliver ``transfer`` to every listener in subscription order.

        The first listener failure is propagated to the caller.
        """
        for listener in self._listeners:
            await listener(transfer)

    async def consume(self, transfers: AsyncIterable[Transfer]) -> ConsumeSummary:
        """Emit every transfer of ``transfers``.

        A failed transfer is logged and counted; it never stops the transfers
        that follow it.
        """
        processed = 0
        failed = 0
        async for transfer in transfers:
            processed += 1
            try:
                await self.emit(transfer)
            except Exception as e:
                failed += 1
                log.error(f"❌ Failed to process transfer {transfer}: {e}")
        log.info(f"Consumed {processed} transfers ({failed} failed)")
        return ConsumeSummary(processed=processed, failed=failed)


def register_transfer_handler(
    transfer_emitter: TransferEmitter,
    handler_fns: Sequence[TransferHandlerFn],
    filters: Sequence[TransferFilter] = (),
) -> TransferDispatcher:
    """Subscribe a dispatcher running ``handler_fns`` behind ``filters``."""
    dispatcher = TransferDispatcher(handler_fns, filters)
    transfer_emitter.on(dispatcher.handle_async)
    return dispatcher
