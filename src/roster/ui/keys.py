"""Key symbols used by the input systems.

Values match ``arcade.key`` (which re-exports pyglet's table) so the systems can
be driven without importing arcade.
"""

BACKSPACE = 65288
TAB = 65289
ENTER = 65293
ESCAPE = 65307
UP = 65362
DOWN = 65364
DELETE = 65535
NUM_ENTER = 65421
N = 110

MOD_SHIFT = 1
MOD_CTRL = 2

CONFIRM_KEYS = (ENTER, NUM_ENTER)
