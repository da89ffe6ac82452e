from __future__ import annotations

import pytest

from sessionizer.runtime import telemetry


def test_span_reraises_and_keeps_metadata() -> None:
    with pytest.raises(RuntimeError, match="boom"):
        with telemetry.span("test::fail", component=True, metadata={"key": 1}) as handle:
            handle.add_metadata("status", "started")
            raise RuntimeError("boom")

    assert handle.metadata == {"key": "1", "status": "started"}


def test_configure_rejects_unknown_or_conflicting_presets() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="production")
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="quiet")
