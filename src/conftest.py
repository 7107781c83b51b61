import pytest

_PROBE_ENVS = ("MODE", "SPEED", "EXPECT", "INS", "OUTS", "LOG_PATH")


@pytest.fixture(autouse=True)
def clean_probe_env(monkeypatch):
    for name in _PROBE_ENVS:
        monkeypatch.delenv(name, raising=False)
