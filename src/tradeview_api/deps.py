from fastapi import Request

from tradeview.infrastructure.database import IDatabaseAdapter
from tradeview.queries import QueryDispatcher


def get_dispatcher(request: Request) -> QueryDispatcher:
    # One dispatcher per app, built by create_app around the injected database
    return request.app.state.dispatcher


def get_database(request: Request) -> IDatabaseAdapter:
    return request.app.state.db
