"""Provider fallback and batch comparison for transcription."""

import asyncio
import logging
import time

from speech_coach.domain.models import (
    AudioClip,
    ProviderDescriptor,
    ProviderKind,
    TranscriptionAttempt,
    TranscriptionResult,
)
from speech_coach.domain.normalizer import ResultNormalizer
from speech_coach.domain.poller import AsyncJobPoller
from speech_coach.domain.registry import ProviderRegistry
from speech_coach.exceptions import (
    AllProvidersFailed,
    ConfigurationError,
    ProviderUnavailable,
    TimedOut,
)

logger = logging.getLogger(__name__)


class FallbackSequencer:
    """Runs providers from the registry in sequence or all at once."""

    def __init__(
        self,
        registry: ProviderRegistry,
        normalizer: ResultNormalizer,
        poller: AsyncJobPoller,
    ):
        self._registry = registry
        self._normalizer = normalizer
        self._poller = poller

    async def transcribe(self, clip: AudioClip) -> TranscriptionResult:
        """
        Returns the first successful transcript in priority order.

        Raises:
            AllProvidersFailed: If every provider failed; carries one attempt
                per provider.
            ConfigurationError: If a provider is misconfigured.
        """
        failures: list[TranscriptionAttempt] = []

        for descriptor in self._registry.list_providers():
            attempt = await self._attempt(descriptor, clip)
            if attempt.success and attempt.result is not None:
                return attempt.result.model_copy(
                    update={"used_fallback": bool(failures)}
                )
            failures.append(attempt)

        logger.error(
            "All transcription providers failed",
            extra={"providers": [a.provider_id for a in failures]},
        )
        raise AllProvidersFailed(failures)

    async def transcribe_batch(self, clip: AudioClip) -> dict[str, TranscriptionAttempt]:
        """
        Runs every provider concurrently and reports each outcome.

        Individual failures are returned as unsuccessful attempts, never raised.
        """
        descriptors = self._registry.list_providers()
        attempts = await asyncio.gather(
            *(self._attempt(descriptor, clip) for descriptor in descriptors)
        )
        return {attempt.provider_id: attempt for attempt in attempts}

    async def _attempt(
        self, descriptor: ProviderDescriptor, clip: AudioClip
    ) -> TranscriptionAttempt:
        start = time.monotonic()
        error: ProviderUnavailable | None = None
        result: TranscriptionResult | None = None

        try:
            result = await asyncio.wait_for(
                self._invoke(descriptor, clip), timeout=descriptor.timeout_seconds
            )
        except asyncio.TimeoutError:
            error = TimedOut(
                descriptor.id, f"no response within {descriptor.timeout_seconds}s"
            )
        except ConfigurationError:
            raise
        except ProviderUnavailable as e:
            error = e
        except Exception as e:
            logger.exception(
                "Unexpected provider failure", extra={"provider_id": descriptor.id}
            )
            error = ProviderUnavailable(descriptor.id, f"unexpected error: {e}", e)

        elapsed_ms = int((time.monotonic() - start) * 1000)

        if error is not None:
            logger.warning(
                "Transcription attempt failed",
                extra={
                    "provider_id": descriptor.id,
                    "elapsed_ms": elapsed_ms,
                    "error_type": type(error).__name__,
                    "reason": error.reason,
                },
            )
            return TranscriptionAttempt(
                provider_id=descriptor.id,
                success=False,
                elapsed_ms=elapsed_ms,
                error=error.reason,
                error_type=type(error).__name__,
            )

        logger.info(
            "Transcription attempt succeeded",
            extra={"provider_id": descriptor.id, "elapsed_ms": elapsed_ms},
        )
        return TranscriptionAttempt(
            provider_id=descriptor.id,
            success=True,
            elapsed_ms=elapsed_ms,
            result=result.model_copy(update={"elapsed_ms": elapsed_ms}),
        )

    async def _invoke(
        self, descriptor: ProviderDescriptor, clip: AudioClip
    ) -> TranscriptionResult:
        client = self._registry.get_client(descriptor.id)
        try:
            if descriptor.kind is ProviderKind.ASYNC_JOB:
                raw = await self._poller.run(descriptor.id, client, clip)
            else:
                raw = await client.transcribe(clip)
        except (asyncio.TimeoutError, TimeoutError) as e:
            # Raised by the client itself; the deadline in _attempt cancels
            # this coroutine instead.
            raise TimedOut(descriptor.id, f"client timed out: {e}", e) from e
        return self._normalizer.normalize(descriptor.id, raw)
