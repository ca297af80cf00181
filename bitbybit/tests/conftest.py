"""Shared pytest fixtures for bitbybit tests."""

from __future__ import annotations

import pytest

from bitbybit.config import reset_settings_cache
from bitbybit.courses.models import TeeColor
from bitbybit.courses.service import CourseService, get_course_service
from bitbybit.rounds.service import RoundService, get_round_service
from bitbybit.storage.kv import JsonFileStore, get_store


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("BITBYBIT_DATA_DIR", str(tmp_path / "default-store"))
    monkeypatch.delenv("BITBYBIT_HOLES_PER_ROUND", raising=False)
    reset_settings_cache()
    get_store.cache_clear()
    get_course_service.cache_clear()
    get_round_service.cache_clear()
    yield
    reset_settings_cache()
    get_store.cache_clear()
    get_course_service.cache_clear()
    get_round_service.cache_clear()


@pytest.fixture
def store(tmp_path) -> JsonFileStore:
    return JsonFileStore(tmp_path / "store")


@pytest.fixture
def course_service(store) -> CourseService:
    return CourseService(store)


@pytest.fixture
def round_service(store, course_service) -> RoundService:
    return RoundService(store, course_service)


@pytest.fixture
def course(course_service):
    return course_service.add_course(
        name="Pebble Creek", tee_colors=[TeeColor.WHITE, TeeColor.BLUE]
    )
