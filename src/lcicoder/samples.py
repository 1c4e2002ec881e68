"""Example locations and LCI strings seen in hostapd configurations."""
from __future__ import annotations

from .models.location import FloorInfo, LocationConfiguration, LocationRecord

# Sydney Opera House, from hostapd's test_gas.py (after fixing the Z subelement)
SYDNEY_LCI = "010008001052834d12efd2b08b9b4bf1cc2c0000410406000000000012060101"

# From hostap tests/hwsim/test_rrm.py: 5-octet Z subelement, no Usage subelement
US_MTV_LCI = "01000800101298c0b512926666f6c2f1001c00004104050000c00012"


def sydney_opera_house() -> LocationRecord:
    return LocationRecord(
        lci=LocationConfiguration(
            latitude=-33.8570095,
            longitude=151.2152005,
            altitude=11.2,
            latitude_uncertainty=0.0007105,
            longitude_uncertainty=0.0007055,
            altitude_uncertainty=33.7,
        ),
        floor=FloorInfo(height_above_floor_uncertainty=0.0078125),
    )


def us_mtv() -> LocationRecord:
    return LocationRecord(
        lci=LocationConfiguration(
            latitude=37.41994,
            longitude=-122.075,
            altitude=7.0,
            latitude_uncertainty=0.000976563,
            longitude_uncertainty=0.000976563,
            altitude_uncertainty=64,
        ),
        floor=FloorInfo(height_above_floor_uncertainty=0.0078125),
    )


SCENARIOS = {
    "sydney": (sydney_opera_house, SYDNEY_LCI),
    "mtv": (us_mtv, US_MTV_LCI),
}
