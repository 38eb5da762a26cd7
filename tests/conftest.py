import os

import pytest


@pytest.fixture(autouse=True)
def clean_swearfilter_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("SWEARFILTER_"):
            monkeypatch.delenv(name, raising=False)
