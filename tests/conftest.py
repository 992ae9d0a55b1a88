"""
Pytest configuration and fixtures for tests
"""
import pytest

from handreplay.parse import PokerStarsParser

HEADS_UP = """PokerStars Hand #1001: Hold'em No Limit ($1/$2 USD) - 2024/01/15 20:30:00 ET
Table 'Alpha' 6-max Seat #1 is the button
Seat 1: Alice (200 in chips)
Seat 2: Bob (200 in chips)
Alice: posts small blind $1
Bob: posts big blind $2
*** HOLE CARDS ***
Dealt to Alice [Ah Kd]
Alice: calls $1
Bob: checks
*** FLOP *** [2c 7h 9s]
Bob: checks
Alice: checks
*** TURN *** [2c 7h 9s] [Jd]
Bob: checks
Alice: checks
*** RIVER *** [2c 7h 9s Jd] [3h]
Bob: checks
Alice: checks
*** SHOW DOWN ***
Bob: shows [Qs Qc] (a pair of Queens)
Alice: shows [Ah Kd] (high card Ace)
Bob collected $4 from pot
*** SUMMARY ***
Total pot $4 | Rake $0
Board [2c 7h 9s Jd 3h]
Seat 1: Alice (button) (small blind) showed [Ah Kd] and lost with high card Ace
Seat 2: Bob (big blind) showed [Qs Qc] and won ($4) with a pair of Queens"""

THREE_ALL_INS = """PokerStars Hand #123456900: Tournament #987654340, $50+$5 USD Hold'em No Limit - Level X (500/1000) - 2024/01/15 20:00:00 ET
Table '987654340 15' 9-max Seat #3 is the button
Seat 1: SmallStack (800 in chips)
Seat 2: MediumStack (2500 in chips)
Seat 3: LargeStack (4000 in chips)
Seat 4: BigStack (10000 in chips)
SmallStack: posts small blind 500
MediumStack: posts big blind 1000
*** HOLE CARDS ***
Dealt to BigStack [Ah Ad]
LargeStack: raises 3000 to 4000 and is all-in
BigStack: calls 4000
SmallStack: calls 300 and is all-in
MediumStack: calls 1500 and is all-in
*** FLOP *** [Kh 9s 3d]
*** TURN *** [Kh 9s 3d] [2h]
*** RIVER *** [Kh 9s 3d 2h] [7c]
*** SHOW DOWN ***
SmallStack: shows [Qh Qs] (a pair of Queens)
MediumStack: shows [Jc Jd] (a pair of Jacks)
LargeStack: shows [Ac Ks] (a pair of Aces)
BigStack: shows [Ah Ad] (a pair of Aces)
BigStack collected 3200 from side pot-2
BigStack collected 5100 from side pot-1
BigStack collected 3200 from main pot
*** SUMMARY ***
Total pot 11500 Main pot 3200. Side pot-1 5100. Side pot-2 3200. | Rake 0
Board [Kh 9s 3d 2h 7c]
Seat 1: SmallStack (small blind) showed [Qh Qs] and lost with a pair of Queens
Seat 2: MediumStack (big blind) showed [Jc Jd] and lost with a pair of Jacks
Seat 3: LargeStack (button) showed [Ac Ks] and lost with a pair of Aces
Seat 4: BigStack showed [Ah Ad] and won (11500) with a pair of Aces"""

EVEN_SPLIT = """PokerStars Hand #2001: Hold'em No Limit ($1/$2 USD) - 2024/02/01 18:00:00 ET
Table 'Beta' 6-max Seat #1 is the button
Seat 1: Alice (100 in chips)
Seat 2: Bob (100 in chips)
Seat 3: Carol (100 in chips)
Bob: posts small blind 1
Carol: posts big blind 2
*** HOLE CARDS ***
Dealt to Alice [Ah Kd]
Alice: raises 20 to 22
Bob: calls 21
Carol: calls 20
*** FLOP *** [2c 7h 9s]
Bob: checks
Carol: checks
Alice: checks
*** TURN *** [2c 7h 9s] [Jd]
Bob: checks
Carol: checks
Alice: checks
*** RIVER *** [2c 7h 9s Jd] [3h]
Bob: checks
Carol: checks
Alice: checks
*** SHOW DOWN ***
Alice: shows [Ah Kd] (high card Ace)
Carol: shows [As Kc] (high card Ace)
Bob: mucks hand
Alice collected 33 from pot
Carol collected 33 from pot
*** SUMMARY ***
Total pot 66 | Rake 0
Board [2c 7h 9s Jd 3h]
Seat 1: Alice (button) showed [Ah Kd] and won (33) with high card Ace
Seat 2: Bob (small blind) mucked
Seat 3: Carol (big blind) showed [As Kc] and won (33) with high card Ace"""

ODD_CHIP_SPLIT = """PokerStars Hand #2002: Hold'em No Limit ($1/$2 USD) - 2024/02/01 18:05:00 ET
Table 'Beta' 6-max Seat #2 is the button
Seat 1: Alice (100 in chips)
Seat 2: Bob (100 in chips)
Seat 3: Carol (100 in chips)
Bob: posts small blind 1
Carol: posts big blind 2
*** HOLE CARDS ***
Dealt to Alice [Ah Kd]
Alice: raises 31 to 33
Bob: folds
Carol: calls 31
*** FLOP *** [2c 7h 9s]
Carol: checks
Alice: checks
*** TURN *** [2c 7h 9s] [Jd]
Carol: checks
Alice: checks
*** RIVER *** [2c 7h 9s Jd] [3h]
Carol: checks
Alice: checks
*** SHOW DOWN ***
Carol: shows [As Kc] (high card Ace)
Alice: shows [Ah Kd] (high card Ace)
Alice collected 34 from pot
Carol collected 33 from pot
*** SUMMARY ***
Total pot 67 | Rake 0
Board [2c 7h 9s Jd 3h]
Seat 1: Alice showed [Ah Kd] and won (34) with high card Ace
Seat 2: Bob (button) (small blind) folded before Flop
Seat 3: Carol (big blind) showed [As Kc] and won (33) with high card Ace"""

WALK = """PokerStars Hand #3001: Hold'em No Limit ($1/$2 USD) - 2024/03/01 09:15:00 ET
Table 'Gamma' 6-max Seat #1 is the button
Seat 1: Alice (100 in chips)
Seat 2: Bob (100 in chips)
Alice: posts small blind 1
Bob: posts big blind 2
*** HOLE CARDS ***
Dealt to Bob [7c 2d]
Alice: folds
Uncalled bet (1) returned to Bob
Bob collected 2 from pot
Bob: doesn't show hand
*** SUMMARY ***
Total pot 2 | Rake 0
Seat 1: Alice (button) (small blind) folded before Flop
Seat 2: Bob (big blind) collected (2)"""

TOURNAMENT_ANTES = """PokerStars Hand #4001: Tournament #5001, $10+$1 USD Hold'em No Limit - Level V (300/600) - 2024/04/01 14:00:00 ET
Table '5001 3' 9-max Seat #3 is the button
Seat 1: John Smith (10000 in chips)
Seat 2: Hero (8000 in chips)
Seat 3: Villain (12000 in chips) is sitting out
John Smith: posts the ante 60
Hero: posts the ante 60
Villain: posts the ante 60
John Smith: posts small blind 300
Hero: posts big blind 600
*** HOLE CARDS ***
Dealt to Hero [Tc Th]
Villain: folds
John Smith said, "good luck: raises 10 to 20"
John Smith: raises 1200 to 1800
Hero: raises 6140 to 7940 and is all-in
John Smith: calls 6140
*** FLOP *** [4d 8s Kh]
*** TURN *** [4d 8s Kh] [2s]
*** RIVER *** [4d 8s Kh 2s] [5c]
*** SHOW DOWN ***
John Smith: shows [Ac Ad] (a pair of Aces)
Hero: shows [Tc Th] (a pair of Tens)
John Smith collected 16060 from pot
*** SUMMARY ***
Total pot 16060 | Rake 0
Board [4d 8s Kh 2s 5c]
Seat 1: John Smith (small blind) showed [Ac Ad] and won (16060) with a pair of Aces
Seat 2: Hero (big blind) showed [Tc Th] and lost with a pair of Tens
Seat 3: Villain (button) folded before Flop (didn't bet)"""

ALL_HANDS = {
    'heads_up': HEADS_UP,
    'three_all_ins': THREE_ALL_INS,
    'even_split': EVEN_SPLIT,
    'odd_chip_split': ODD_CHIP_SPLIT,
    'walk': WALK,
    'tournament_antes': TOURNAMENT_ANTES,
}


@pytest.fixture
def parser():
    """Parser with default configuration"""
    return PokerStarsParser()


@pytest.fixture(params=sorted(ALL_HANDS))
def any_hand(request):
    """Each sample transcript in turn"""
    return ALL_HANDS[request.param]


def parse_ok(text, parser=None):
    """Parse a hand that must succeed and return (hand, warnings)."""
    result = (parser or PokerStarsParser()).parse(text)
    assert result.success, result.error.message
    return result.hand, result.warnings
