"""
Shared fixtures for the trie root test suite.
"""

import pytest

from trie_roots.hash_builder import HashBuilder


class RecordingHashBuilder(HashBuilder):
    """HashBuilder that remembers every leaf it was given"""

    instances = []

    def __init__(self, check_order=True):
        super().__init__(check_order)
        self.leaves = []
        RecordingHashBuilder.instances.append(self)

    def add_leaf(self, path, value, is_private=False):
        self.leaves.append((tuple(path), bytes(value), is_private))
        super().add_leaf(path, value, is_private)


@pytest.fixture
def recording_builder(monkeypatch):
    """Swap the trie engine in every root module for a recording one"""
    RecordingHashBuilder.instances = []
    for module in ('ordered_root', 'storage', 'state'):
        monkeypatch.setattr(f'trie_roots.{module}.HashBuilder', RecordingHashBuilder)
    return RecordingHashBuilder.instances
