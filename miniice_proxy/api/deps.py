from functools import partial

from fastapi import Request

from miniice_proxy.core import config
from miniice_proxy.providers import mini_ice
from miniice_proxy.providers.base import GenerateFn
from miniice_proxy.services.limiter import ProcessLimiter


def get_limiter(request: Request) -> ProcessLimiter:
    return request.app.state.limiter


def get_generate() -> GenerateFn:
    return partial(
        mini_ice.generate,
        python=config.MINI_ICE_PYTHON,
        script=config.MINI_ICE_SCRIPT,
        timeout=config.MINI_ICE_TIMEOUT_SECONDS,
    )
