# tests/conftest.py
import os
import sys
import logging
import textwrap
from functools import partial
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Ensure test-friendly env before the app reads its config
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("MINI_ICE_SCRIPT", "/nonexistent/mini_ice.py")
os.environ.setdefault("MAX_CONCURRENT_PROCESSES", "8")
os.environ.setdefault("QUEUE_TIMEOUT_SECONDS", "5")

# IMPORTANT: import the app after envs are set
from miniice_proxy.main import create_app
from miniice_proxy.api.deps import get_generate
from miniice_proxy.providers import mini_ice


@pytest_asyncio.fixture
async def app():
    # a fresh app per test so the limiter never outlives its event loop
    return create_app()


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_script(tmp_path):
    # writes a throwaway generation script and returns its path
    def _make(body: str) -> str:
        path = tmp_path / f"gen_{uuid4().hex}.py"
        path.write_text(textwrap.dedent(body), encoding="utf-8")
        return str(path)
    return _make


@pytest.fixture
def use_script(app):
    # points POST /api/mini-ice at a real script run by the current interpreter
    def _use(script: str, timeout: float = 10.0) -> None:
        app.dependency_overrides[get_generate] = lambda: partial(
            mini_ice.generate, python=sys.executable, script=script, timeout=timeout
        )
    yield _use
    app.dependency_overrides.clear()


@pytest.fixture
def caplog_info(caplog):
    caplog.set_level(logging.INFO)
    return caplog
