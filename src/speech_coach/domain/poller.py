"""Drives asynchronous transcription jobs to completion."""

import asyncio
import logging
from typing import Awaitable, Callable

from speech_coach.config import PollingConfig
from speech_coach.domain.models import (
    AsyncJob,
    AudioClip,
    JobState,
    JobStatus,
    RawProviderResponse,
)
from speech_coach.exceptions import MalformedResponseError, ProviderUnavailable, TimedOut
from speech_coach.infrastructure.interfaces import AsyncJobClient

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class AsyncJobPoller:
    """
    Submits a job and polls it on a growing delay until it finishes.

    Each poll that reports a non-terminal status is followed by a sleep of
    the current delay, after which the delay is multiplied by the growth
    factor and capped. Polling stops after ``max_attempts`` polls; no sleep
    follows the final one.
    """

    def __init__(self, policy: PollingConfig, sleep: Sleep = asyncio.sleep):
        self._policy = policy
        self._sleep = sleep

    async def run(
        self, provider_id: str, client: AsyncJobClient, clip: AudioClip
    ) -> RawProviderResponse:
        """
        Runs one job from submission to a terminal state.

        Returns:
            The provider payload of the completed job.

        Raises:
            ProviderUnavailable: If the provider reports the job failed.
            MalformedResponseError: If a completed job has no payload.
            TimedOut: If the job is still pending after the last allowed poll.
        """
        job_id = await client.submit(clip)
        job = AsyncJob(
            job_id=job_id,
            provider_id=provider_id,
            next_delay_seconds=self._policy.initial_delay_seconds,
        )

        try:
            return await self._poll_until_done(client, job)
        except asyncio.CancelledError:
            logger.info(
                "Job polling cancelled",
                extra={"provider_id": provider_id, "job_id": job_id, "attempts": job.attempts},
            )
            raise

    async def _poll_until_done(
        self, client: AsyncJobClient, job: AsyncJob
    ) -> RawProviderResponse:
        policy = self._policy

        while job.attempts < policy.max_attempts:
            snapshot = await client.poll(job.job_id)
            job.attempts += 1

            if snapshot.status is JobStatus.COMPLETED:
                job.state = JobState.COMPLETED
                logger.info(
                    "Job completed",
                    extra={
                        "provider_id": job.provider_id,
                        "job_id": job.job_id,
                        "attempts": job.attempts,
                    },
                )
                if snapshot.payload is None:
                    raise MalformedResponseError(
                        job.provider_id, f"job {job.job_id} completed without a payload"
                    )
                return snapshot.payload

            if snapshot.status is JobStatus.ERROR:
                job.state = JobState.ERROR
                raise ProviderUnavailable(
                    job.provider_id, snapshot.error or f"job {job.job_id} failed"
                )

            job.state = JobState.PROCESSING
            if job.attempts >= policy.max_attempts:
                break

            logger.debug(
                "Job still pending",
                extra={
                    "provider_id": job.provider_id,
                    "job_id": job.job_id,
                    "status": snapshot.status.value,
                    "attempt": job.attempts,
                    "delay_seconds": job.next_delay_seconds,
                },
            )
            await self._sleep(job.next_delay_seconds)
            job.next_delay_seconds = min(
                job.next_delay_seconds * policy.growth_factor, policy.max_delay_seconds
            )

        job.state = JobState.TIMED_OUT
        raise TimedOut(
            job.provider_id,
            f"job {job.job_id} did not complete after {job.attempts} polls",
        )
