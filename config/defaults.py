"""MetricGraph — All default threshold values and configuration constants.

All tuneable values live here. Never hard-code magic numbers in source files.
Import constants from this module; override via RunConfig at runtime.
"""

# ── Dataset files ──────────────────────────────────────────────────────────────
# Directory searched for the dataset files below (relative paths resolve here)
DATA_DIR: str = "data"

# Tourism revenue: country,revenue,<3 further columns>
TOURISM_FILE: str = "tourism.csv"
TOURISM_FIELDS: int = 5
TOURISM_VALUE_COLUMN: int = 1

# GDP per capita: country,gdp_per_capita
GDP_FILE: str = "gdp_per_capita.csv"
GDP_FIELDS: int = 2
GDP_VALUE_COLUMN: int = 1

# Unemployment rate: country,unemployment_rate
UNEMPLOYMENT_FILE: str = "unemployment.csv"
UNEMPLOYMENT_FIELDS: int = 2
UNEMPLOYMENT_VALUE_COLUMN: int = 1

# Cost of living: country,cost_of_living_index,rent_index,purchasing_power_index
PURCHASING_POWER_FILE: str = "cost_of_living.csv"
PURCHASING_POWER_FIELDS: int = 4
PURCHASING_POWER_VALUE_COLUMN: int = 3

# Field delimiter for every dataset file
DATASET_DELIMITER: str = ","

# ── Merge and normalization ────────────────────────────────────────────────────
# "positive" drops countries with a non-positive value on either side;
# "unconditional" keeps every matched country with a finite score
MERGE_POLICY: str = "positive"

# "midpoint" maps an all-equal score set to 0.5; "raise" fails the task
DEGENERATE_POLICY: str = "midpoint"

# Normalized scores are mapped to 0.5 when every score is identical
DEGENERATE_MIDPOINT: float = 0.5

# ── Edge thresholds ────────────────────────────────────────────────────────────
# Raw tourism revenue difference for the single-metric tourism graph
TOURISM_THRESHOLD: float = 50.0

# Raw tourism-to-GDP ratio difference
TOURISM_GDP_THRESHOLD: float = 0.5

# Normalized ratio difference for the normalized comparison graphs
NORMALIZED_THRESHOLD: float = 0.2

# ── Edge weighting ─────────────────────────────────────────────────────────────
# Stepped weighting: weight = 1 + clamp(STEP_CEILING - int(|diff|), 1, STEP_CEILING)
STEP_CEILING: int = 5
STEP_MAX_WEIGHT: int = 1 + STEP_CEILING

# Linear weighting floor so a pair exactly one unit apart still draws faintly
LINEAR_MIN_INTENSITY: float = 0.05

# ── Layout and canvas ──────────────────────────────────────────────────────────
WIDE_RADIUS: int = 200
WIDE_CANVAS_HALF_EXTENT: int = 250
WIDE_IMAGE_SIZE: tuple = (1000, 1000)

COMPACT_RADIUS: int = 90
COMPACT_CANVAS_HALF_EXTENT: int = 100
COMPACT_IMAGE_SIZE: tuple = (800, 600)

# Pixels per inch used to convert image sizes to matplotlib figure sizes
RENDER_DPI: int = 100

# ── Node sizing ────────────────────────────────────────────────────────────────
# Tourism node radius is revenue / 100
TOURISM_SIZE_SCALE: float = 0.01
TOURISM_SIZE_RANGE: tuple = (3, 10)

RATIO_SIZE_SCALE: float = 10.0
RATIO_SIZE_RANGE: tuple = (3, 10)

NORMALIZED_SIZE_SCALE: float = 20.0
NORMALIZED_SIZE_RANGE: tuple = (5, 20)

# ── Scatter plot ───────────────────────────────────────────────────────────────
SCATTER_X_RANGE: tuple = (0.0, 120.0)
SCATTER_Y_RANGE: tuple = (0.0, 50.0)
SCATTER_POINT_SIZE: int = 5
SCATTER_IMAGE_SIZE: tuple = (800, 600)

# ── Path statistics ────────────────────────────────────────────────────────────
# Count distance-0 (node, node) pairs in the average shortest path
INCLUDE_SELF_PAIRS: bool = False

# ── Output paths ──────────────────────────────────────────────────────────────
# Root directory for all run outputs
OUTPUT_ROOT: str = "outputs/runs"

# ── Logging ────────────────────────────────────────────────────────────────────
DEFAULT_LOG_LEVEL: str = "INFO"

# ── Accepted option names ──────────────────────────────────────────────────────
SCORE_FUNCTIONS: tuple = ("ratio", "primary", "secondary")
MERGE_POLICIES: tuple = ("positive", "unconditional")
DEGENERATE_POLICIES: tuple = ("midpoint", "raise")
WEIGHTINGS: tuple = ("linear", "stepped")
