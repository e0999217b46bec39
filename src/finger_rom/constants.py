LANDMARK_COUNT = 21

WRIST = 0
INDEX_MCP = 5
MIDDLE_MCP = 9
RING_MCP = 13
RING_PIP = 14
RING_DIP = 15
RING_TIP = 16
PINKY_MCP = 17
PINKY_PIP = 18
PINKY_DIP = 19
PINKY_TIP = 20

PALM_CENTER_INDICES: tuple[int, ...] = (WRIST, INDEX_MCP, MIDDLE_MCP, RING_MCP, PINKY_MCP)

# Norms at or below this value are treated as zero-length.
DEGENERATE_EPSILON = 1e-12

DEFAULT_ROM_ID = "12ROM"
DEFAULT_VERSION = "v1.0.0"
DEFAULT_BUILD = "2026-01-02T07:30"
DEFAULT_REPEAT_COUNT = 10
DEFAULT_REPEAT_INTERVAL_MS = 300
