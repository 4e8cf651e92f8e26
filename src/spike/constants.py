from __future__ import annotations

SPIKE_VERSION = "0.0.1"
SPIKE_TAB_STOP = 8
SPIKE_QUIT_TIMES = 3
SPIKE_QUERY_LEN = 256
STATUS_TIMEOUT = 5.0
FILLER = "-_-"

# Highlight types.
HL_NORMAL = 0
HL_NUMBER = 1
HL_MATCH = 2

# Key actions.
CTRL_H = 8
CTRL_L = 12
ENTER = 13
ESC = 27
BACKSPACE = 127

ARROW_LEFT = 1000
ARROW_RIGHT = 1001
ARROW_UP = 1002
ARROW_DOWN = 1003
DEL_KEY = 1004
HOME_KEY = 1005
END_KEY = 1006
PAGE_UP = 1007
PAGE_DOWN = 1008
# Not a key: the idle read was woken up, e.g. by a resize.
KEY_WAKE = 1009

CSI_SIMPLE_MAP = {
    ord("A"): ARROW_UP,
    ord("B"): ARROW_DOWN,
    ord("C"): ARROW_RIGHT,
    ord("D"): ARROW_LEFT,
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}
CSI_TILDE_MAP = {
    ord("1"): HOME_KEY,
    ord("3"): DEL_KEY,
    ord("4"): END_KEY,
    ord("5"): PAGE_UP,
    ord("6"): PAGE_DOWN,
    ord("7"): HOME_KEY,
    ord("8"): END_KEY,
}
SS3_SIMPLE_MAP = {
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}

ANSI_HIDE_CURSOR = "\x1b[?25l"
ANSI_SHOW_CURSOR = "\x1b[?25h"
ANSI_CURSOR_HOME = "\x1b[H"
ANSI_CLEAR_SCREEN = "\x1b[2J"
ANSI_CLEAR_LINE = "\x1b[K"
ANSI_INVERT_ON = "\x1b[7m"
ANSI_RESET = "\x1b[m"
ANSI_DEFAULT_FG = "\x1b[39m"


def ctrl(ch: str) -> int:
    return ord(ch.upper()) & 0x1F


CTRL_F = ctrl("f")
CTRL_Q = ctrl("q")
CTRL_S = ctrl("s")
