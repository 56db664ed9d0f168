from __future__ import annotations

# ------------------------------------------------------------
# 64-bit card layout: 13 rank nibbles, Ace in the top nibble.
# Inside a nibble: spade 0x8, heart 0x4, diamond 0x2, club 0x1
# ------------------------------------------------------------

FULL_DECK = 0xFFFFFFFFFFFFF

SPADE = 0x8888888888888
HEART = 0x4444444444444
DIAMOND = 0x2222222222222
CLUB = 0x1111111111111

ACE = 0xF000000000000
KING = 0x0F00000000000
QUEEN = 0x00F0000000000
JACK = 0x000F000000000
TEN = 0x0000F00000000
NINE = 0x00000F0000000
EIGHT = 0x000000F000000
SEVEN = 0x0000000F00000
SIX = 0x00000000F0000
FIVE = 0x000000000F000
FOUR = 0x0000000000F00
THREE = 0x00000000000F0
TWO = 0x000000000000F

# high to low
RANKS = (ACE, KING, QUEEN, JACK, TEN, NINE, EIGHT, SEVEN, SIX, FIVE, FOUR, THREE, TWO)
RANK_NAMES = "AKQJT98765432"

SUITS = (SPADE, HEART, DIAMOND, CLUB)
SUIT_NAMES = "shdc"

RANK_BY_NAME = dict(zip(RANK_NAMES, RANKS))
SUIT_BY_NAME = dict(zip(SUIT_NAMES, SUITS))
