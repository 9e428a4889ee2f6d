"""Shared Brisnet PP text samples for the parser tests."""

import pytest

SAMPLE_CARD = """Ultimate PP's w/ QuickPlay Comments Aqueduct Alw 62000 6 Furlongs 3yo Fillies Race 5

1   Way of Appeal (S 3)
Own: Trinity Elite Llc
7/2 Red, Red Cap
BARRIOS RICARDO (254 58-42-39 23%)
B. f. 3 (Mar)
Sire : Appeal (Not for Love) $25,000
Dam: Appealing (Storm Cat)
Brdr: Smith Racing (WV)
Trnr: Cady Khalil (150 18-24-31 12%)
Prime Power: 101.5 (4th)
Life: 6 2 - 1 - 1 $70,038 89
2025 4 1 - 1 - 0 $42,150 89
2024 2 1 - 0 - 1 $27,888 84
Fst 4 1-1-0 $42,150 89
Trf 2 1-0-1 $27,888 84
ñ Won last race
× Moves up in class
JKYw/ Sprints 217 12% 39% -0.32
DATE TRK DIST RR RACETYPE
09Oct25Aqu  6f  :22 :45 1:10  OC40k  86  3  VelazquezJR  3.20  bumped start
12Sep25Sar  6f  :22 :46 1:11  Mdn 62k  80  1  OrtizI  *1.40  rallied wide
25Oct SA 4f ft :47 H 12/62
18Oct SA 5f ft 1:02 H 37/48

2   Seabiscuit (E/P 7)
Own: Howard Stable
5/1 Blue, Yellow Diamonds
POLLARD RED (142 28-19-17 20%)
Dkbbr. h. 5
Trnr: Smith Tom (89 12-18-14 13%)
Prime Power: 131.9 (2nd)
"""

SCENARIO_A = (
    "3   SECRETARIAT (A1)\nOwn: Meadow Stable\nTrnr: Lucien Laurin\n"
    "5   SEABISCUIT (B2)\nOwn: Charles Howard\nTrnr: Tom Smith\n"
)

SCENARIO_C_ROW = "09Oct25Aqu  6f  1:10  OC40k  JKY Velazquez  3.20  bumped start"

FALLBACK_CARD = """1

Way Of Appeal
Own: Trinity Elite Llc
Trnr: Cady Khalil

2

Second Wind
Own: Howard Stable
"""


@pytest.fixture
def sample_card() -> str:
    return SAMPLE_CARD


@pytest.fixture
def scenario_a() -> str:
    return SCENARIO_A


@pytest.fixture
def scenario_c_row() -> str:
    return SCENARIO_C_ROW


@pytest.fixture
def fallback_card() -> str:
    return FALLBACK_CARD
