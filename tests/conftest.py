"""
Shared pytest fixtures for the design guidance server tests.
"""
import os
import sys

import pytest

# Ensure the package is importable without an install
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from design_guidance.dispatcher import Dispatcher
from design_guidance.knowledge import KnowledgeBase


@pytest.fixture(scope="session")
def kb():
    return KnowledgeBase.load()


@pytest.fixture
def dispatcher(kb):
    return Dispatcher(kb)
