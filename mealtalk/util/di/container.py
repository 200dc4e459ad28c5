"""Container wiring for the forum API process."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from mealtalk.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Assemble the forum's production container.

    Config, PostgreSQL persistence, domain services and forum use cases
    all come from the prod side of each provider in ``PROVIDERS``; tests
    build their own container with in-memory repositories instead.

    Returns:
        Container whose REQUEST scope yields one DB session per HTTP call
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    # Exposes the current Request to request-scoped factories
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach ``container`` so ``FromDishka`` route parameters resolve."""
    setup_dishka(container, app)
