import pytest

from speech_coach.config import PollingConfig
from speech_coach.domain import (
    AsyncJobPoller,
    AudioClip,
    FallbackSequencer,
    ProviderDescriptor,
    ProviderKind,
    ProviderRegistry,
    ResultNormalizer,
)

from fakes import SleepRecorder


@pytest.fixture
def clip():
    return AudioClip(data=b"\x01" * 2048, mime_type="audio/wav", duration_seconds=60.0)


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def poller(sleep_recorder):
    return AsyncJobPoller(PollingConfig(), sleep=sleep_recorder)


@pytest.fixture
def make_sequencer(poller):
    """Builds a sequencer from ``(provider_id, client)`` pairs in priority order."""

    def _make(*clients, timeout=1.0, job_poller=None):
        entries = []
        for priority, (provider_id, client) in enumerate(clients):
            kind = (
                ProviderKind.ASYNC_JOB
                if hasattr(client, "submit")
                else ProviderKind.SYNC
            )
            entries.append(
                (
                    ProviderDescriptor(
                        id=provider_id,
                        label=provider_id,
                        kind=kind,
                        priority=priority,
                        timeout_seconds=timeout,
                    ),
                    client,
                )
            )
        return FallbackSequencer(
            ProviderRegistry(entries), ResultNormalizer(), job_poller or poller
        )

    return _make
