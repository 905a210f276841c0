from __future__ import annotations

import threading

import pytest

from core.config import ConfigStore, OffloadConfig, validate_config
from core.errors import ConfigError


def test_replace_returns_previous_snapshot() -> None:
    first = OffloadConfig(api_key="one")
    second = OffloadConfig(api_key="two")
    store = ConfigStore(first)

    assert store.replace(second) is first
    assert store.snapshot() is second


def test_concurrent_reloads_never_expose_mixed_config() -> None:
    # Each generation pairs a cutoff with a matching key so a torn read shows up.
    configs = [
        OffloadConfig(api_key=f"key-{n}", cutoff_length=100 + n, snippet_length=n)
        for n in range(50)
    ]
    store = ConfigStore(configs[0])
    stop = threading.Event()
    mismatches: list[OffloadConfig] = []

    def reader() -> None:
        while not stop.is_set():
            snapshot = store.snapshot()
            n = snapshot.snippet_length
            if snapshot.api_key != f"key-{n}" or snapshot.cutoff_length != 100 + n:
                mismatches.append(snapshot)

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for thread in readers:
        thread.start()
    for _ in range(20):
        for config in configs:
            store.replace(config)
    stop.set()
    for thread in readers:
        thread.join()

    assert not mismatches


def test_validate_accepts_defaults_but_warns_about_key() -> None:
    warnings = validate_config(OffloadConfig())
    assert any("apikey" in warning for warning in warnings)


def test_validate_warns_when_snippet_exceeds_cutoff() -> None:
    warnings = validate_config(OffloadConfig(api_key="k", snippet_length=400, cutoff_length=300))
    assert warnings == ["sniplen (400) is larger than cutofflen (300)"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"snippet_length": -1},
        {"cutoff_length": 0},
        {"timeout_seconds": 0},
        {"service_url": "ftp://paste.example/"},
        {"service_url": "not a url"},
    ],
)
def test_validate_rejects_unusable_values(overrides) -> None:
    with pytest.raises(ConfigError):
        validate_config(OffloadConfig(api_key="k", **overrides))
