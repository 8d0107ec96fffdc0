import pytest

from rhyme_core.index_builder import build_from_cmu_lines

SAMPLE_CMU = """\
;;; # CMUdict excerpt used by the test-suite
CAT  K AE1 T
BAT  B AE1 T
HAT  HH AE1 T
MAT  M AE1 T
FLAT  F L AE1 T
PAT  P AE1 T
PAT  P AA1 T
DOG  D AO1 G
FOG  F AO1 G
ACT  AE1 K T
FACT  F AE1 K T
CATTLE  K AE1 T AH0 L
BATTLE  B AE1 T AH0 L
TESTING  T EH1 S T IH0 NG
RESTING  R EH1 S T IH0 NG
WALKING  W AO1 K IH0 NG
TALKING  T AO1 K IH0 NG
MESSAGE  M EH1 S AH0 JH
WATER  W AO1 T ER0
SLAUGHTER  S L AO1 T ER0
ORANGE  AO1 R AH0 N JH
HINGE  HH IH1 N JH
TOMATO  T AH0 M EY1 T OW2
TOMATO(1)  T AH0 M AA1 T OW2
EITHER  IY1 DH ER0
EITHER(1)  AY1 DH ER0
HMM  HH M
SH  SH
BROKEN
"""

FREQUENCY = ["MAT", "HAT", "BAT", "DOG"]


@pytest.fixture
def cmu_lines():
    return SAMPLE_CMU.splitlines()


@pytest.fixture
def context(cmu_lines):
    ranks = {w: i for i, w in enumerate(FREQUENCY)}
    return build_from_cmu_lines(cmu_lines, frequency_ranks=ranks)
