"""Pytest configuration and fixtures for the test suite."""

import pytest

from obsidian_workbench.domain.entities.card import Card
from obsidian_workbench.workbench.store import WorkbenchStore
from tests.fixtures import MockOutlineHost, MockSnapshotRepository


@pytest.fixture
def mock_repository():
    """Provide an in-memory snapshot repository."""
    return MockSnapshotRepository()


@pytest.fixture
def mock_host():
    """Provide an in-memory outline host."""
    return MockOutlineHost()


@pytest.fixture
def store(mock_repository):
    """Provide an empty store backed by the mock repository."""
    return WorkbenchStore(mock_repository).load()


@pytest.fixture
def make_card():
    """Factory for cards with sensible defaults."""

    def _make(title: str, **kwargs) -> Card:
        kwargs.setdefault("content", f"Body of {title}")
        return Card(title=title, **kwargs)

    return _make


@pytest.fixture
def sample_note_content():
    """Provide a note with frontmatter, nested headings and a code fence."""
    return """---
title: Distributed Systems
tags: [notes]
---

# Consensus ^wb-consensus

Agreement between replicas.

## Raft

Leader election and log replication.

```python
# not a heading
print("hi")
```

## Paxos ^wb-paxos

Single-decree agreement.

# Storage

LSM trees and B-trees.
"""
