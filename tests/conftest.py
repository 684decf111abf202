"""
Pytest configuration for mock-factory.

Provides fixtures for:
- Settings isolation (the cached settings are rebuilt per test)
- Ready-made factories covering every attribute kind
- An importable module of factories for runner/CLI tests
"""

from __future__ import annotations

import random
import sys
import textwrap
from pathlib import Path
from typing import Generator

import pytest

from mock_factory.config import get_settings
from mock_factory.factory import Factory


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch) -> Generator[None, None, None]:
    """
    Clear cached settings around each test so env overrides take effect.

    Logging is kept quiet so CLI output only contains command output.
    """
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def user_factory() -> Factory:
    """
    Factory exercising static, dynamic, sequence and relationship attributes.
    """
    return Factory.create(
        attrs={
            "name": Factory.sequence_item("admin", lambda prev: f"user-{len(prev) + 1}"),
            "role": "member",
            "score": lambda: random.randint(1, 100),
            "label": lambda rec: f"{rec.name}:{rec.score}",
            "manager": Factory.has_one("user", "reports", {"reflexive": True, "depth": 3}),
            "posts": Factory.has_many("post", "author"),
        },
        create_related={"posts": 2},
    )


@pytest.fixture
def factories_module(tmp_path: Path, monkeypatch) -> Generator[str, None, None]:
    """
    Write an importable module with sample factories and yield its name.

    The module is evicted from sys.modules afterwards so sequence history does
    not leak between tests.
    """
    module_name = "sample_factories"
    source = textwrap.dedent(
        """
        from mock_factory import Factory


        user = Factory.create(
            attrs={
                "name": Factory.sequence_item("admin", lambda prev: f"user-{len(prev) + 1}"),
                "role": "member",
                "posts": Factory.has_many("post", "author"),
            },
            create_related={"posts": lambda record_id: int(record_id) * 2},
            after_create=lambda record: {**record, "created": True},
        )

        broken = Factory.create(attrs={"id": 42, "name": "nope"})


        class Tag(Factory):
            attrs = {"label": "tag"}


        not_a_factory = {"name": "plain dict"}
        """
    )
    (tmp_path / f"{module_name}.py").write_text(source, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    sys.modules.pop(module_name, None)
    yield module_name
    sys.modules.pop(module_name, None)
