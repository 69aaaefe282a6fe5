# Window types
WINDOW_AYAH = "ayah"
WINDOW_SURAH = "surah"
WINDOW_DISTANCE = "distance"
WINDOW_TYPES = (WINDOW_AYAH, WINDOW_SURAH, WINDOW_DISTANCE)

# Distance units
UNIT_TOKEN = "token"
UNIT_AYAH = "ayah"
DISTANCE_UNITS = (UNIT_TOKEN, UNIT_AYAH)

# Term kinds / grouping
KIND_ROOT = "root"
KIND_LEMMA = "lemma"
TERM_KINDS = (KIND_ROOT, KIND_LEMMA)

# Collocation defaults
DEFAULT_DISTANCE = 3
DEFAULT_MIN_FREQUENCY = 2
SAMPLE_CAP = 6

# Corpus formats
FORMAT_MORPHOLOGY = "morphology"
FORMAT_JSON = "json"

# Sankey
FLOW_BASE_WIDTH = 4.0
FLOW_WIDTH_SPAN = 14.0
