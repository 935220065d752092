# circle_matching/config.py

# Matching preference defaults
TARGET_INTERNATIONAL_RATIO_DEFAULT = 0.5
TARGET_GENDER_RATIO_DEFAULT = 0.5
MAX_GROUP_SIZE_DEFAULT = 6

# Hard floor: groups of 1-2 are never proposed
MIN_GROUP_SIZE = 3

# Composite score weights (not renormalised when a toggle is off)
WEIGHT_INTERNATIONAL_RATIO = 0.3
WEIGHT_GENDER_RATIO = 0.2
WEIGHT_LANGUAGE = 0.3
WEIGHT_SCHEDULE = 0.2

# Language compatibility knobs
SHARED_LANGUAGE_FACTOR = 0.5
PRIMARY_LANGUAGE_BONUS = 0.3
LANGUAGE_DIVERSITY_FACTOR = 0.2

# Fallback sub-score when there is not enough data to compare
NEUTRAL_SCORE = 0.5

# Schedule buckets (1-hour slots per day, days 0..6)
HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7

# Recognised attribute values
STUDENT_TYPES = ("international", "domestic")
GENDERS = ("male", "female", "other", "prefer_not_to_say")
PROFICIENCY_LEVELS = ("beginner", "intermediate", "advanced", "native")
PARTICIPANT_STATUSES = ("registered", "confirmed", "cancelled")

# Toy data knobs
NUM_PARTICIPANTS_DEFAULT = 9
DEFAULT_SEED = 42

# Languages for toy participants
DEFAULT_LANGUAGES = [
    "ja", "en", "zh", "ko", "vi", "es", "fr", "de",
]

# Exhaustive search budget used by the runner script.
# Sum of C(n, s) for s in 3..6 is ~0.77M at n = 30.
MAX_COMBINATIONS_DEFAULT = 1_500_000

# Path to participants CSV for the toy runner (if any)
PARTICIPANTS_CSV_PATH = "circle_matching/data_generation/participants.csv"
