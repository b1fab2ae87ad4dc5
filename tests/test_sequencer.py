import asyncio
import time

import httpx
import pytest

from speech_coach.config import PollingConfig
from speech_coach.domain import AsyncJobPoller
from speech_coach.domain.models import JobStatus, LocalServerResponse
from speech_coach.exceptions import AllProvidersFailed, ConfigurationError
from speech_coach.infrastructure import HuggingFaceTranscriber

from fakes import FakeJobClient, FakeTranscriber, mock_factory


async def test_first_success_wins(make_sequencer, clip):
    first, second = FakeTranscriber(text="first"), FakeTranscriber(text="second")
    sequencer = make_sequencer(("a", first), ("b", second))

    result = await sequencer.transcribe(clip)

    assert result.text == "first"
    assert result.provider_id == "a"
    assert result.used_fallback is False
    assert second.calls == 0


@pytest.mark.parametrize("failing", [1, 2, 3])
async def test_failure_advances_to_next_provider(make_sequencer, clip, failing):
    clients = [
        FakeTranscriber(error="boom") if i <= failing else FakeTranscriber(text=f"p{i}")
        for i in range(1, 5)
    ]
    sequencer = make_sequencer(*[(f"p{i}", c) for i, c in enumerate(clients, start=1)])

    result = await sequencer.transcribe(clip)

    assert result.provider_id == f"p{failing + 1}"
    assert result.used_fallback is True
    assert [c.calls for c in clients] == [1] * (failing + 1) + [0] * (3 - failing)


async def test_all_failures_raise_aggregate(make_sequencer, clip):
    sequencer = make_sequencer(
        ("a", FakeTranscriber(error="network down")),
        ("b", FakeTranscriber(text=None)),
        ("c", FakeJobClient(final=JobStatus.ERROR, error="bad audio")),
    )

    with pytest.raises(AllProvidersFailed) as exc_info:
        await sequencer.transcribe(clip)

    error = exc_info.value
    assert [a.provider_id for a in error.attempts] == ["a", "b", "c"]
    assert error.reasons == ["network down", "response has no transcript text", "bad audio"]
    assert [a.error_type for a in error.attempts] == [
        "ProviderUnavailable",
        "MalformedResponseError",
        "ProviderUnavailable",
    ]
    assert "network down" in str(error)
    assert "bad audio" in str(error)


async def test_timeout_falls_through(make_sequencer, clip):
    slow = FakeTranscriber(text="late", delay=1.0)
    sequencer = make_sequencer(("slow", slow), ("fast", FakeTranscriber(text="ok")), timeout=0.05)

    result = await sequencer.transcribe(clip)

    assert result.provider_id == "fast"
    assert result.used_fallback is True


async def test_async_job_provider_is_polled(make_sequencer, clip, sleep_recorder):
    job = FakeJobClient(pending_polls=2, text="from job")
    sequencer = make_sequencer(("a", FakeTranscriber(error="down")), ("job", job))

    result = await sequencer.transcribe(clip)

    assert result.text == "from job"
    assert result.confidence == 0.9
    assert job.polls == 3
    assert len(sleep_recorder.delays) == 2


async def test_unexpected_exception_is_recorded_as_failure(make_sequencer, clip):
    class Broken(FakeTranscriber):
        async def transcribe(self, clip):
            raise RuntimeError("kaput")

    sequencer = make_sequencer(("broken", Broken()), ("ok", FakeTranscriber(text="fine")))
    result = await sequencer.transcribe(clip)
    assert result.provider_id == "ok"


async def test_configuration_error_is_not_swallowed(make_sequencer, clip):
    class Misconfigured(FakeTranscriber):
        async def transcribe(self, clip):
            raise ConfigurationError("missing model")

    sequencer = make_sequencer(("bad", Misconfigured()), ("ok", FakeTranscriber(text="fine")))
    with pytest.raises(ConfigurationError):
        await sequencer.transcribe(clip)


async def test_elapsed_time_is_recorded(make_sequencer, clip):
    sequencer = make_sequencer(("slow", FakeTranscriber(text="x", delay=0.02)))
    result = await sequencer.transcribe(clip)
    assert result.elapsed_ms >= 10


async def test_batch_reports_every_provider(make_sequencer, clip):
    sequencer = make_sequencer(
        ("p1", FakeTranscriber(text="one")),
        ("p2", FakeTranscriber(text="two", delay=1.0)),
        ("p3", FakeTranscriber(response=LocalServerResponse(text="three"))),
        timeout=0.05,
    )

    outcomes = await sequencer.transcribe_batch(clip)

    assert len(outcomes) == 3
    failed = [o for o in outcomes.values() if not o.success]
    assert len(failed) == 1
    assert failed[0].provider_id == "p2"
    assert failed[0].error_type == "TimedOut"
    assert outcomes["p1"].text == "one"
    assert outcomes["p3"].text == "three"
    assert outcomes["p3"].confidence == 0.85


async def test_batch_never_raises(make_sequencer, clip):
    sequencer = make_sequencer(
        ("a", FakeTranscriber(error="x")), ("b", FakeTranscriber(error="y"))
    )
    outcomes = await sequencer.transcribe_batch(clip)
    assert {k: v.success for k, v in outcomes.items()} == {"a": False, "b": False}


async def test_batch_runs_providers_concurrently(make_sequencer, clip):
    sequencer = make_sequencer(
        *[(f"p{i}", FakeTranscriber(text="x", delay=0.1)) for i in range(5)]
    )
    start = time.monotonic()
    await sequencer.transcribe_batch(clip)
    assert time.monotonic() - start < 0.4


async def test_http_client_timeout_is_reported_as_timed_out(make_sequencer, clip):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    sequencer = make_sequencer(
        ("hf", HuggingFaceTranscriber("hf", "m", client_factory=mock_factory(handler))),
        ("ok", FakeTranscriber(text="fine")),
    )

    outcomes = await sequencer.transcribe_batch(clip)

    assert outcomes["hf"].success is False
    assert outcomes["hf"].error_type == "TimedOut"
    assert outcomes["ok"].success is True


async def test_timeout_raised_by_client_keeps_its_reason(make_sequencer, clip):
    class SocketTimeout(FakeTranscriber):
        async def transcribe(self, clip):
            raise TimeoutError("socket read timed out")

    sequencer = make_sequencer(("slow", SocketTimeout()), ("ok", FakeTranscriber(text="fine")))

    outcomes = await sequencer.transcribe_batch(clip)

    assert outcomes["slow"].error_type == "TimedOut"
    assert outcomes["slow"].error == "client timed out: socket read timed out"


async def test_deadline_stops_job_polling(make_sequencer, clip):
    job = FakeJobClient(pending_polls=1000)
    quick_poller = AsyncJobPoller(
        PollingConfig(
            initial_delay_seconds=0.01,
            growth_factor=1.0,
            max_delay_seconds=0.01,
            max_attempts=1000,
        )
    )
    sequencer = make_sequencer(("job", job), timeout=0.1, job_poller=quick_poller)

    outcomes = await sequencer.transcribe_batch(clip)

    assert outcomes["job"].error_type == "TimedOut"
    assert outcomes["job"].error == "no response within 0.1s"
    polls = job.polls
    assert 0 < polls < 1000
    await asyncio.sleep(0.1)
    assert job.polls == polls


async def test_exhausted_polls_fall_through_to_next_provider(make_sequencer, clip, sleep_recorder):
    job = FakeJobClient(pending_polls=1000)
    backup = FakeTranscriber(text="backup")
    sequencer = make_sequencer(
        ("job", job),
        ("backup", backup),
        job_poller=AsyncJobPoller(PollingConfig(max_attempts=3), sleep=sleep_recorder),
    )

    result = await sequencer.transcribe(clip)

    assert result.provider_id == "backup"
    assert result.used_fallback is True
    assert job.polls == 3
    assert sleep_recorder.delays == pytest.approx([2.0, 2.4])
    assert backup.calls == 1


async def test_exhausted_polls_are_recorded_as_timed_out(make_sequencer, clip, sleep_recorder):
    sequencer = make_sequencer(
        ("job", FakeJobClient(pending_polls=1000)),
        ("down", FakeTranscriber(error="offline")),
        job_poller=AsyncJobPoller(PollingConfig(max_attempts=3), sleep=sleep_recorder),
    )

    with pytest.raises(AllProvidersFailed) as exc_info:
        await sequencer.transcribe(clip)

    assert [a.error_type for a in exc_info.value.attempts] == ["TimedOut", "ProviderUnavailable"]
