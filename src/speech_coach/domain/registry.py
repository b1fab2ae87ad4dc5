"""Ordered set of transcription providers and their clients."""

from typing import Iterable, Union

from speech_coach.domain.models import ProviderDescriptor, ProviderKind
from speech_coach.exceptions import ConfigurationError
from speech_coach.infrastructure.interfaces import AsyncJobClient, TranscriptionClient

ProviderClient = Union[TranscriptionClient, AsyncJobClient]

_EXPECTED_CLIENT = {
    ProviderKind.SYNC: TranscriptionClient,
    ProviderKind.ASYNC_JOB: AsyncJobClient,
}


class ProviderRegistry:
    """Read-only lookup of providers in priority order."""

    def __init__(self, entries: Iterable[tuple[ProviderDescriptor, ProviderClient]]):
        self._descriptors: list[ProviderDescriptor] = []
        self._clients: dict[str, ProviderClient] = {}

        for descriptor, client in entries:
            if descriptor.id in self._clients:
                raise ConfigurationError(f"Duplicate provider id '{descriptor.id}'")
            expected = _EXPECTED_CLIENT[descriptor.kind]
            if not isinstance(client, expected):
                raise ConfigurationError(
                    f"Provider '{descriptor.id}' is declared {descriptor.kind.value} "
                    f"but its client is {type(client).__name__}"
                )
            self._descriptors.append(descriptor)
            self._clients[descriptor.id] = client

        # sorted() is stable, so equal priorities keep registration order.
        self._descriptors = sorted(self._descriptors, key=lambda d: d.priority)

    def list_providers(self) -> list[ProviderDescriptor]:
        return list(self._descriptors)

    def get_client(self, provider_id: str) -> ProviderClient:
        try:
            return self._clients[provider_id]
        except KeyError:
            raise ConfigurationError(f"Unknown provider '{provider_id}'") from None

    def __len__(self) -> int:
        return len(self._descriptors)
