"""Shared fixtures: in-memory store and services wired to test doubles."""

from typing import Optional

import pytest

from marketwire.analysis import LLMProvider, MockLLMProvider
from marketwire.config import Config, ConfigModel
from marketwire.db import MemoryDocumentStore
from marketwire.services import Services

from tests.helpers import FakeHTTP


@pytest.fixture
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def config() -> Config:
    return Config.from_model(ConfigModel(llm={"provider": "mock"}))


@pytest.fixture
def make_services(store, config):
    def build(
        http: Optional[FakeHTTP] = None,
        llm_provider: Optional[LLMProvider] = None,
        socket_connect=None,
    ) -> Services:
        return Services(
            config,
            store=store,
            llm_provider=llm_provider or MockLLMProvider(),
            transport=(http or FakeHTTP()).transport,
            socket_connect=socket_connect,
            echo=False,
        )

    return build
