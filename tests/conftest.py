"""Shared fixtures for the calculator tests."""

import logging

import pytest
from fastapi.testclient import TestClient

from history import CalculationHistory
from logger import LOGGERS
from main import create_app
from operand_stack import OperandStack


@pytest.fixture
def stack():
    return OperandStack()


@pytest.fixture
def history():
    return CalculationHistory()


@pytest.fixture
def client(stack, history):
    """Test client over a fresh app wired to the stack and history fixtures."""
    return TestClient(create_app(stack=stack, history=history))


@pytest.fixture(autouse=True)
def restore_logger_levels():
    levels = {name: logger.level for name, logger in LOGGERS.items()}
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
