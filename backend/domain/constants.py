# Generation request limits
TOPIC_MAX_LENGTH = 150
MIN_STANZA_COUNT = 4
MAX_STANZA_COUNT = 16
SEARCH_MIN_QUERY_LENGTH = 3

# Prompt composition
DEFAULT_LINE_COUNT = 8
MAX_WORDS_PER_LINE = 12
RHYME_SCHEMES = ("AABB", "ABAB")
EXPLICIT_ALLOWED = "You can use explicit language appropriate for the genre"
EXPLICIT_MODERATED = "Keep the content PG-13, no explicit language"

# Provider sampling parameters
PRIMARY_TEMPERATURE = 0.9
PRIMARY_TOP_P = 0.95
FALLBACK_TEMPERATURE = 0.9
MAX_OUTPUT_TOKENS = 1024

# Returned when no provider attempt produced text
SAMPLE_RAP = """
1. Flowing through life, chasing dreams like shadows
   Got the beat in my heart, rhythm in my soul

2. Words carry power, express what I feel inside
   Music is my language, on this lyrical ride

3. Each day a struggle, but I keep pushing forward
   Turning pain to poetry, my spirit won't be lowered

4. This is my story, written in rhymes and flow
   Standing in my truth, watching my talent grow
"""

AVATAR_URL_TEMPLATE = "https://api.dicebear.com/7.x/avataaars/svg?seed={seed}"
