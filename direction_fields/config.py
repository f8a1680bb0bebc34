# config.py
OBSTRUCTION_P = 0.2  # chance a generated cell is obstructed

# all-pairs memory grows with free_cells ** 2
MAX_FREE_CELLS = 4096

DEFAULT_POOL = "thread"  # "thread" | "process"
MAX_WORKERS = None       # None -> executor default

# Flask API limits
API_DEFAULT_GRID = 20
API_MAX_GRID = 128
SNAP_RADIUS = 25
PNG_DEFAULT_SCALE = 8
PNG_MAX_SCALE = 32  # pixels per cell

BENCH_SIZES = (20, 50, 60)

# ASCII rendering
SOURCE_GLYPH = "0"
OBSTRUCTED_GLYPH = "#"
UNREACHED_GLYPH = "."
