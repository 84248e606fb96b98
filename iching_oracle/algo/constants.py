LE_GRAND_YAN = 50  # the number of the great expansion
LE_YONG = 49  # of which forty-nine are used

# stalks still in hand after each of the three changes
VALID_YONG_RETURNS = (
    frozenset({40, 44}),
    frozenset({32, 36, 40}),
    frozenset({24, 28, 32, 36}),
)

COIN_HEADS = 3
COIN_TAILS = 2
COINS_PER_LINE = 3

LINES_PER_HEXAGRAM = 6
LINES_PER_TRIGRAM = 3
HEXAGRAM_MASK = 0b111111
TRIGRAM_MASK = 0b111
