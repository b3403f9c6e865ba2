# tests/conftest.py

import pytest

from leapcal import api
from leapcal.reference.leapfile import load_context

# IETF/IERS leap-seconds.list data lines (NTP seconds, TAI-UTC)
LEAP_LINES = [
    "2272060800\t10\t# 1 Jan 1972",
    "2287785600\t11\t# 1 Jul 1972",
    "2303683200\t12\t# 1 Jan 1973",
    "2335219200\t13\t# 1 Jan 1974",
    "2366755200\t14\t# 1 Jan 1975",
    "2398291200\t15\t# 1 Jan 1976",
    "2429913600\t16\t# 1 Jan 1977",
    "2461449600\t17\t# 1 Jan 1978",
    "2492985600\t18\t# 1 Jan 1979",
    "2524521600\t19\t# 1 Jan 1980",
    "2571782400\t20\t# 1 Jul 1981",
    "2603318400\t21\t# 1 Jul 1982",
    "2634854400\t22\t# 1 Jul 1983",
    "2698012800\t23\t# 1 Jul 1985",
    "2776982400\t24\t# 1 Jan 1988",
    "2840140800\t25\t# 1 Jan 1990",
    "2871676800\t26\t# 1 Jan 1991",
    "2918937600\t27\t# 1 Jul 1992",
    "2950473600\t28\t# 1 Jul 1993",
    "2982009600\t29\t# 1 Jul 1994",
    "3029443200\t30\t# 1 Jan 1996",
    "3076704000\t31\t# 1 Jul 1997",
    "3124137600\t32\t# 1 Jan 1999",
    "3345062400\t33\t# 1 Jan 2006",
    "3439756800\t34\t# 1 Jan 2009",
    "3550089600\t35\t# 1 Jul 2012",
    "3644697600\t36\t# 1 Jul 2015",
    "3692217600\t37\t# 1 Jan 2017",
]


@pytest.fixture
def leap_file(tmp_path):
    path = tmp_path / "leap-seconds.list"
    header = ["#", "#\tleap-seconds.list (test copy)", "#$\t 3676924800", "#"]
    path.write_text("\n".join(header + LEAP_LINES) + "\n", encoding="ascii")
    return path


@pytest.fixture
def ctx1990(leap_file):
    return load_context(1990, leap_file)


@pytest.fixture(autouse=True)
def _default_context():
    api.reset()
    yield
    api.reset()
