"""Request-scoped access to the process-wide services on app.state."""

from fastapi import Request

from services.cache import ResultCache
from services.metricool_client import MetricoolClient


def get_cache(request: Request) -> ResultCache:
    return request.app.state.cache


def get_metricool(request: Request) -> MetricoolClient:
    return request.app.state.metricool
