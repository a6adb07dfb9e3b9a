"""Game-wide constants: screen layout, physics tuning, level data and texts."""

from enum import IntEnum
from math import pi

FRAC_PI_2 = pi / 2.0
FRAC_PI_4 = pi / 4.0
FRAC_PI_8 = pi / 8.0

SAVE_FILENAME = ".merino_breakout.txt"

NLEVELS = 8
NLIVES = 3

SCREEN_WIDTH = 800.0
SCREEN_HEIGHT = 640.0

GAMEAREA_MINX = -SCREEN_WIDTH / 2.0
GAMEAREA_MAXX = GAMEAREA_MINX + 640.0
GAMEAREA_MINY = -SCREEN_HEIGHT / 2.0
GAMEAREA_MAXY = SCREEN_HEIGHT / 2.0
GAMEAREA_WIDTH = GAMEAREA_MAXX - GAMEAREA_MINX
GAMEAREA_HEIGHT = GAMEAREA_MAXY - GAMEAREA_MINY
GAMEAREA_CENTER_X = GAMEAREA_MINX + GAMEAREA_WIDTH / 2.0
GAMEAREA_CENTER_Y = GAMEAREA_MINY + GAMEAREA_HEIGHT / 2.0
BALLAREA_MINX = GAMEAREA_MINX + 20.0
BALLAREA_MAXX = GAMEAREA_MAXX - 20.0
BALLAREA_MAXY = GAMEAREA_MAXY - 40.0
INFOAREA_CENTER_X = (SCREEN_WIDTH / 2.0 + GAMEAREA_MAXX) / 2.0
INFOAREA_LOGO_Y = 250.0
INFOAREA_HEADER_Y = 150.0
INFOAREA_MSG_Y = -250.0
INFOAREA_TIMER_Y = 75.0
INFOAREA_LIVES_Y = 0.0
INFOAREA_TIMER = 3.0

GRID_ROWS = 22
GRID_COLS = 15

BRICK_WIDTH = 40.0
BRICK_HEIGHT = 20.0
BRICK_SIZE = (BRICK_WIDTH - 2.0, BRICK_HEIGHT - 2.0)
BRICK_TYPES = 15
BRICK_FRAMES = 4
IBRICK_FRAMES = 4
BRICK_FRAMERATE = 20.0

PORTAL_FRAMES = 4
PORTAL_FRAMERATE = 20.0

BARREL_TYPES = 10
BARREL_TITLES = (
    "Extended!",  # Brown
    "Gun!",  # Red
    "Shrinked!",  # Yellow
    "Magnet!",  # Purple
    "Multiball!",  # Violet
    "Fast!",  # Dark Blue
    "Slow!",  # Light Blue
    "Portal!",  # Light Green
    "Extra Live!",  # Green
    "Extra Time!",  # Grey
)
BARREL_FRAMERATE = 9.0
BARREL_FRAMES = 10
BARREL_SPEED = 150.0
BARREL_CHANCE = 0.15
BARREL_SIZE = (40.0, 18.0)
BARREL_WEIGHTS = (4, 0, 2, 0, 0, 2, 2, 0, 0, 0)

LAYER_BG = 0.0
LAYER_PORTAL_BG = 1.0
LAYER_SHADOWS = 2.0
LAYER_PADDLE = 3.0
LAYER_BALL = 3.0
LAYER_BRICKS = 3.0
LAYER_BARRELS = 4.0
LAYER_MEANIES = 4.0
LAYER_GUN = 5.0
LAYER_EXPLOSIONS = 6.0
LAYER_PORTAL_FG = 6.0
LAYER_BANNER = 7.0

SHADOW_DX = 10.0
SHADOW_DY = -10.0

BALL_RADIUS = 10.0
BALL_INITIAL_SPEED = 350.0
BALL_INITIAL_ANGLE = 3.0 * FRAC_PI_8
BALL_MIN_SPEED = 200.0
BALL_MAX_SPEED = 800.0
BALL_SPEED_DELTA = 1.15
BALL_SPEEDUP_IMPACTS = 50
BALL_NUDGE_IMPACTS = 75
MULTIBALL_MAX = 27
MULTIBALL_ANGLE_RANGE = FRAC_PI_4
BALL_IMPACT_FRAMES = 4

PADDLE_NORMAL = 0
PADDLE_LARGE = 1
PADDLE_GUN = 2
PADDLE_SMALL = 3
PADDLE_MAGNET = 4
PADDLE_MAGNET_BORDER = 5.0
PADDLE_Y = GAMEAREA_MINY + 30.0
PADDLE_MIN_ANGLE = 0.5 * FRAC_PI_8
PADDLE_MAX_ANGLE = pi - PADDLE_MIN_ANGLE
PADDLE_MIN_SPEED = 400.0
PADDLE_MAX_SPEED = 800.0

MEANIES_TYPES = 3
MEANIES_FRAMERATE = 8.0
MEANIES_MAX = 0
MEANIES_SPEED = 40.0
MEANIES_NFRAMES = (8, 8, 10)
MEANIES_PORTAL_X = (GAMEAREA_CENTER_X - 165.0, GAMEAREA_CENTER_X + 165.0)
MEANIES_PORTAL_Y = 300.0
MEANIES_MIN_ANGLE = -pi - FRAC_PI_8
MEANIES_MAX_ANGLE = FRAC_PI_8
MEANIES_MINY = GAMEAREA_MINY + 2.0 * BRICK_HEIGHT
MEANIES_MAXY = BALLAREA_MAXY - 2.0 * BRICK_HEIGHT
MEANIES_MINX = BALLAREA_MINX + BRICK_WIDTH
MEANIES_MAXX = BALLAREA_MAXX - BRICK_WIDTH
MEANIES_PER_SECOND = 1.0
MEANIES_SIZES = (
    (
        (49.0, 40.0),
        (52.0, 43.0),
        (50.0, 39.0),
        (42.0, 37.0),
        (48.0, 43.0),
        (52.0, 47.0),
        (52.0, 43.0),
        (42.0, 37.0),
    ),
    (
        (44.0, 36.0),
        (54.0, 37.0),
        (57.0, 41.0),
        (52.0, 41.0),
        (40.0, 37.0),
        (59.0, 41.0),
        (57.0, 46.0),
        (54.0, 36.0),
    ),
    (
        (36.0, 36.0),
        (51.0, 45.0),
        (61.0, 48.0),
        (57.0, 52.0),
        (36.0, 36.0),
        (57.0, 49.0),
        (61.0, 48.0),
        (51.0, 45.0),
        (36.0, 36.0),
        (51.0, 47.0),
        (61.0, 50.0),
        (57.0, 47.0),
        (37.0, 36.0),
        (57.0, 47.0),
        (61.0, 48.0),
        (51.0, 47.0),
    ),
)

# The paddle is slightly shorter vertically than its image to improve impacts.
PADDLE_SIZES = (
    (90.0, 20.0),
    (150.0, 20.0),  # Extended paddle
    (92.0, 20.0),  # Gun
    (50.0, 20.0),  # Shrunk paddle
    (94.0, 20.0),  # Magnet
)

GUN_TIMER_SECS = 0.5
GUN_LEFT_X = -21.0
GUN_RIGHT_X = 19.0
GUN_Y = 25.0

BULLET_IMPACT_FRAMES = 4
BULLET_SPEED = 400.0
BULLET_SIZE = (7.0, 20.0)

TRANSITION_BANNER_SECS = 4.0

CIPHER_KEY = "RUMPLESTILTSKIN"
USERNAME_LEN = 6
CODE_LEN = USERNAME_LEN + 3

SECRETS = (
    "Multiball",
    "The Magnet",
    "Portal to Hell",
    "The Gun",
    "Arkanoid Tribute",
    "Meanies",
    "X Ray",
    "Credits",
)


class Secret(IntEnum):
    """Index of each secret in the progress tables."""

    MULTIBALL = 0
    MAGNET = 1
    HELL = 2
    GUN = 3
    ARKANOID = 4
    MEANIES = 5
    XRAY = 6
    CREDITS = 7


HINTS = (
    "Press left shift to move faster",
    "When you unlock a level, the portal\nwill remain open in following games",
    "Unlock all levels to claim a phonetool icon",
    "To finish the game you need to\ninsert codes from other players\nin the shop",
    "Grey barrels will give you 30 extra seconds",
    "Game progress is autosaved",
    "Beat the countdown a second time\nto permanently unlock the portal",
    "You get an extra life when\nyou destroy all bricks in a level",
)

LEVEL_TITLES = (
    "Angry Peccy",
    "Free Bananas",
    "Mochinuts",
    "Hell\n(crank sound up to 11 for this one)",
    "Lipu",
    "The Toxic Cloud of Capitalism",
    "Tensors... so complex",
    "PRISM-S Invisible Bug",
)

# RGBA colours, components in 0..1.
LEVEL_COLORS = (
    (1.0, 0.1, 0.1, 1.0),
    (1.0, 0.9, 0.2, 1.0),
    (1.0, 0.0, 0.5, 1.0),
    (0.0, 0.5, 0.5, 1.0),
    (0.9, 0.6, 0.1, 1.0),
    (1.0, 1.0, 1.0, 1.0),
    (1.0, 0.0, 0.0, 1.0),
    (0.2, 0.2, 0.2, 1.0),
)

LEVEL_TIMERS = (210.0, 150.0, 150.0, 150.0, 150.0, 150.0, 150.0, 150.0)
UNLOCKED_PORTAL_TIMER = 10.0

# Brick characters:
# 0 yellow, 1 green, 2 blue, 3 red, 4 magenta, 5 dark yellow, 6 dark green,
# 7 dark blue, 8 dark red, 9 dark purple, a grey, b dark grey (1 hit),
# c dark grey (2 hits), d gold (indestructible), e invisible.
LEVELS = (
    (
        "               ",
        "               ",
        "               ",
        "    0000000    ",
        "   000000000   ",
        "   0bbb0bbb0   ",
        "   003000300   ",
        "   000000000   ",
        "   000000000   ",
        "   00     00   ",
        "   0 00000 0   ",
        "  00000000000  ",
        "  00000000000  ",
        "  00000000000  ",
        "               ",
        "  99999999999  ",
        "               ",
        "   000   000   ",
        "   000   000   ",
        "   000   000   ",
        "   000   000   ",
        "               ",
    ),
    (
        "               ",
        "               ",
        "               ",
        "  5            ",
        "  0        00  ",
        "  000     000  ",
        "   000000000   ",
        "    0000000    ",
        "  5   0000     ",
        "  0        00  ",
        "  000     000  ",
        "   000000000   ",
        "    0000000    ",
        "  5   0000     ",
        "  0        00  ",
        "  000     000  ",
        "   000000000   ",
        "    0000000    ",
        "      0000     ",
        "               ",
        "               ",
        "               ",
    ),
    (
        "               ",
        "               ",
        "  222     333  ",
        " 22 22   33 33 ",
        "2     2 3     3",
        "2     2 3     3",
        "2     2 3     3",
        " 22 22   33 33 ",
        "  222     333  ",
        "               ",
        "               ",
        "               ",
        "  444     111  ",
        " 44 44   11 11 ",
        "4     4 1     1",
        "d     d d     d",
        "d     d d     d",
        " dd dd   dd dd ",
        "  ddd     ddd  ",
        "               ",
        "               ",
        "               ",
    ),
    (
        "               ",
        "               ",
        "        11     ",
        "        11     ",
        "       71      ",
        "  71   71      ",
        "  771  71  771 ",
        "   771 71 771  ",
        "    77171771   ",
        " 1   77 777    ",
        " 11111   7777  ",
        " 11111   11111 ",
        "  77777 711111 ",
        "     17177   1 ",
        "    1771777    ",
        "   177 17177   ",
        "  177  17 177  ",
        "       17  17  ",
        "      11       ",
        "      11       ",
        "               ",
        "               ",
    ),
    (
        "               ",
        "               ",
        "   b bbbbb b   ",
        "  b b     b b  ",
        " b           b ",
        " b0         0b ",
        " b0 000 000 0b ",
        " b000b0 0b000b ",
        " b0b0b0 0b0b0b ",
        " b0b       b0b ",
        " b0b       b0b ",
        " bbb  bbb  bbb ",
        "   b  bbb  b   ",
        "    b  b  b    ",
        "    b  b  b    ",
        "     bbbbb     ",
        "      3 3      ",
        "      3 3      ",
        "      3 3      ",
        "       3       ",
        "               ",
        "               ",
    ),
    (
        "               ",
        "               ",
        "               ",
        "               ",
        "    ccccccc    ",
        "  ccbbbbbbbcc  ",
        " cbbbbbbbbbbbc ",
        " c   bbbbb   c ",
        " c   bbbbb   c ",
        " cbbbbbbbbbbbc ",
        " cbbbb   bbbbc ",
        "  cbb     bbc  ",
        "  ccbbbbbbbcc  ",
        "    ccccccc    ",
        "               ",
        "   d       d   ",
        "   ddddddddd   ",
        "    ddddddd    ",
        "               ",
        "               ",
        "               ",
        "               ",
    ),
    (
        "               ",
        " 77  1         ",
        "  77 4         ",
        " 17714         ",
        "3  77 40       ",
        "  477  2       ",
        "   177 4       ",
        "  4 77 4       ",
        "    077  1     ",
        "  24 77 4      ",
        "   4 1770      ",
        "    4 77 12    ",
        "   3  077 4    ",
        "     1 77 2    ",
        "      4 7731   ",
        "     2  77 4   ",
        "       4 7701  ",
        "        177 4  ",
        "      2  0772  ",
        "        4 77 1 ",
        "         3 77  ",
        "        4 1770 ",
    ),
    (
        "               ",
        "               ",
        "               ",
        "   e       e   ",
        "  e e     e e  ",
        "  e e     e e  ",
        "  e  d   d  e  ",
        "  e   d d   e  ",
        "   eed   dee   ",
        "  e  d e d  e  ",
        "  e         e  ",
        "   e  ddd  e   ",
        "  e  d   d  e  ",
        " e  e     e  e ",
        " e  e     e  e ",
        " e  e     e  e ",
        " e  e     e  e ",
        "  e  e   e  e  ",
        "   e e   e e   ",
        "    ee   ee    ",
        "               ",
        "               ",
    ),
)

CREDITS = (
    "CREDITS\n"
    "\n"
    "Arkanoid tunes included as a tribute\n"
    "to the genius of their composer.\n"
    "\n"
    "The author of the Chime ringtone is unknown;\n"
    "it may be best that they remain anonymous.\n"
    "\n"
    "All other assets are from Code The Classics Vol 2,\n"
    "used for non-commercial purposes. Thank you."
)