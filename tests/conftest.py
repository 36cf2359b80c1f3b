"""Pytest configuration and fixtures."""

import pytest
from loguru import logger

from kmp_catalog.models import LibraryRecord

SAMPLE_README = """\
# Kotlin Multiplatform Libraries

Intro paragraph with a [link](https://example.com).

## Contents

* [Libraries](#libraries)

## Libraries

### Architecture

* [Decompose](https://github.com/arkivanov/Decompose) - Lifecycle-aware business logic components
![badge][badge-android]
![badge][badge-ios]
![badge][badge-js]

#### Navigation

* [Voyager](https://github.com/adrielcafe/voyager) - A pragmatic navigation library - for Compose
![badge][badge-android]
![badge][badge-jvm]

### Network

* [Ktor](https://ktor.io) - Framework for `async` clients and servers
![badge][badge-android]

## License

* [Not a library](https://github.com/x/y) - Should never be extracted

"""


@pytest.fixture
def sample_readme():
    """Small README covering categories, sub-categories and badges."""
    return SAMPLE_README


@pytest.fixture
def make_record():
    """Factory for LibraryRecord with sensible defaults."""

    def _make(id="0", name="lib", category="Core", **kwargs):
        kwargs.setdefault("url", f"https://github.com/owner/{name}")
        kwargs.setdefault("description", f"{name} description")
        return LibraryRecord(id=id, name=name, category=category, **kwargs)

    return _make


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
