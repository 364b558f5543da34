from datetime import date

import pytest

from panchang import PanchangElement, PanchangReading


class StubPanchang:
    """
    Scripted PanchangProvider.

    masa_starts: [(first day, masa name), ...]; a date belongs to the latest
    start on or before it.  tithis / nakshatras override the defaults
    ("Panchami" / "Ashwini") for specific dates.
    """

    def __init__(self, masa_starts, tithis=None, nakshatras=None):
        self.masa_starts = sorted(masa_starts)
        self.tithis = tithis or {}
        self.nakshatras = nakshatras or {}
        self.calls = []

    def _masa(self, day):
        current = "Unknown"
        for start, masa in self.masa_starts:
            if start <= day:
                current = masa
        return current

    def calendar(self, day, latitude, longitude):
        self.calls.append((day, latitude, longitude))
        tithi = self.tithis.get(day, "Panchami")
        waxing = tithi != "Amavasya"

        def el(name):
            return PanchangElement(name, name)

        return PanchangReading(
            masa=el(self._masa(day)),
            tithi=el(tithi),
            paksha=el("Shukla" if waxing else "Krishna"),
            nakshatra=el(self.nakshatras.get(day, "Ashwini")),
            yoga=el("Siddhi"),
            karana=el("Bava"),
            raasi=el("Leo"),
            ritu=el("Monsoon"),
            moon_phase="Waxing" if waxing else "Waning",
        )


class FailingPanchang:
    def calendar(self, day, latitude, longitude):
        raise RuntimeError("ephemeris unavailable")


# 2024 amanta month starts (approximate new moons)
MASA_STARTS_2024 = [
    (date(2024, 3, 10), "Phalguna"),
    (date(2024, 4, 9), "Chaitra"),
    (date(2024, 5, 8), "Baisakha"),
    (date(2024, 6, 6), "Jyestha"),
    (date(2024, 7, 5), "Asadha"),
    (date(2024, 8, 4), "Srabana"),
    (date(2024, 9, 3), "Bhadraba"),
    (date(2024, 10, 2), "Aswina"),
    (date(2024, 11, 1), "Karttika"),
    (date(2024, 12, 1), "Margasira"),
    (date(2024, 12, 31), "Pausa"),
]


@pytest.fixture
def stub_panchang():
    """Stub provider over 2024 with a few scripted lunar days."""
    return StubPanchang(
        MASA_STARTS_2024,
        tithis={
            date(2024, 9, 2): "Amavasya",    # Srabana → Aadi
            date(2024, 10, 31): "Amavasya",  # Aswina → Purattasi
            date(2024, 8, 19): "Punnami",    # Srabana → Aadi
            date(2024, 12, 15): "Punnami",   # Margasira → Karthikai
            date(2025, 1, 10): "Ekadasi",    # Pausa → Maargazhi
        },
        nakshatras={date(2024, 6, 20): "Vishakha"},   # Jyestha → Vaikaasi
    )


@pytest.fixture
def failing_panchang():
    return FailingPanchang()


@pytest.fixture
def make_stub():
    """Factory for ad-hoc stub providers: make_stub([(date, masa), ...], tithis=...)."""
    return StubPanchang
