import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for p in (SRC, ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

import pytest  # noqa: E402
from core.config import _reset_settings_cache_for_tests  # noqa: E402
from core.models import Fixture  # noqa: E402


@pytest.fixture(autouse=True)
def reset_settings_cache():
    _reset_settings_cache_for_tests()
    yield
    _reset_settings_cache_for_tests()


@pytest.fixture
def make_fixture():
    def _make(fid: str = "fx-1", start: str = "2026-03-05T03:30:00Z", **kw) -> Fixture:
        base = {
            "id": fid,
            "startTime": start,
            "format": "ODI",
            "opponent": "India",
            "homeAway": "home",
            "venue": "MCG",
            "city": "Melbourne",
            "country": "Australia",
            "competition": "",
            "status": "scheduled",
        }
        base.update(kw)
        return Fixture.from_dict(base)

    return _make
