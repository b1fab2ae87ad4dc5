import asyncio

import pytest

from speech_coach.config import PollingConfig
from speech_coach.domain import AsyncJobPoller
from speech_coach.domain.models import AssemblyAIResponse, JobStatus
from speech_coach.exceptions import ProviderUnavailable, TimedOut

from fakes import FakeJobClient, SleepRecorder


async def test_completes_after_five_pending_polls(poller, sleep_recorder, clip):
    client = FakeJobClient(pending_polls=5, text="finished")

    payload = await poller.run("assemblyai", client, clip)

    assert isinstance(payload, AssemblyAIResponse)
    assert payload.text == "finished"
    assert client.submitted == 1
    assert client.polls == 6
    assert sleep_recorder.delays == pytest.approx([2.0, 2.4, 2.88, 3.456, 4.1472])


async def test_gives_up_after_thirty_polls(poller, sleep_recorder, clip):
    client = FakeJobClient(pending_polls=1000)

    with pytest.raises(TimedOut) as exc_info:
        await poller.run("assemblyai", client, clip)

    assert client.polls == 30
    assert exc_info.value.provider_id == "assemblyai"
    # No sleep after the final poll.
    assert len(sleep_recorder.delays) == 29


async def test_delay_is_capped(poller, sleep_recorder, clip):
    await poller.run("assemblyai", FakeJobClient(pending_polls=15), clip)

    assert max(sleep_recorder.delays) == 10.0
    assert sleep_recorder.delays[-3:] == [10.0, 10.0, 10.0]


async def test_provider_error_is_propagated_verbatim(poller, clip):
    client = FakeJobClient(pending_polls=2, final=JobStatus.ERROR, error="Audio file is corrupt")

    with pytest.raises(ProviderUnavailable) as exc_info:
        await poller.run("assemblyai", client, clip)

    assert not isinstance(exc_info.value, TimedOut)
    assert exc_info.value.reason == "Audio file is corrupt"
    assert exc_info.value.provider_id == "assemblyai"
    assert client.polls == 3


async def test_immediate_completion_does_not_sleep(poller, sleep_recorder, clip):
    await poller.run("assemblyai", FakeJobClient(), clip)
    assert sleep_recorder.delays == []


async def test_cancellation_stops_polling(clip):
    client = FakeJobClient(pending_polls=1000)
    poller = AsyncJobPoller(
        PollingConfig(initial_delay_seconds=0.01, max_delay_seconds=0.01)
    )

    task = asyncio.create_task(poller.run("assemblyai", client, clip))
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    polls_at_cancel = client.polls
    await asyncio.sleep(0.05)
    assert client.polls == polls_at_cancel
    assert polls_at_cancel < 30


async def test_custom_policy(clip):
    sleep = SleepRecorder()
    poller = AsyncJobPoller(PollingConfig(max_attempts=3), sleep=sleep)

    with pytest.raises(TimedOut):
        await poller.run("assemblyai", FakeJobClient(pending_polls=10), clip)
    assert sleep.delays == pytest.approx([2.0, 2.4])
