"""
Pytest configuration and shared fixtures for ensemble-fusion tests.
"""

import pytest


@pytest.fixture
def iris_records():
    """Three classification votes with confidences."""
    return [
        {"prediction": "setosa", "confidence": 0.9},
        {"prediction": "setosa", "confidence": 0.8},
        {"prediction": "versicolor", "confidence": 0.95},
    ]


@pytest.fixture
def tree_records():
    """Classification votes carrying leaf distributions and counts."""
    return [
        {
            "prediction": "setosa",
            "confidence": 0.7,
            "distribution": [["setosa", 7], ["versicolor", 3]],
            "count": 10,
        },
        {
            "prediction": "versicolor",
            "confidence": 0.6,
            "distribution": [["versicolor", 6], ["setosa", 4]],
            "count": 10,
        },
        {
            "prediction": "versicolor",
            "confidence": 0.5,
            "distribution": [["versicolor", 5], ["virginica", 5]],
            "count": 10,
        },
    ]


@pytest.fixture
def regression_records():
    """Regression votes with errors and node extras."""
    return [
        {
            "prediction": 10.0,
            "confidence": 1.0,
            "distribution": [[10.0, 4]],
            "count": 4,
            "median": 9.0,
            "min": 5.0,
            "max": 15.0,
        },
        {
            "prediction": 20.0,
            "confidence": 3.0,
            "distribution": [[20.0, 6]],
            "count": 6,
            "median": 21.0,
            "min": 12.0,
            "max": 30.0,
        },
    ]
