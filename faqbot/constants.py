# constants.py

# Matcher scoring tiers
EXACT_MATCH_SCORE = 100
SUBSTRING_MATCH_SCORE = 50
WORD_OVERLAP_MAX_SCORE = 30
# A best candidate is accepted only when its score is strictly above this
MATCH_ACCEPTANCE_THRESHOLD = 10
MIN_TOKEN_LENGTH = 3

# Reactions
POSITIVE_REACTIONS = frozenset({"thumbsup", "+1"})
NEGATIVE_REACTIONS = frozenset({"thumbsdown", "-1"})
FEEDBACK_REACTIONS = ("thumbsup", "thumbsdown")

# User-facing texts
ESCALATION_MESSAGE = "I'll connect you with our HR team for help with that question."
FAQ_UNAVAILABLE_MESSAGE = (
    "I'm having trouble accessing the FAQ database. Please contact IT support."
)
GENERIC_ERROR_MESSAGE = (
    "I encountered an error. Please try again or contact IT support."
)
FEEDBACK_PROMPT_MESSAGE = (
    "Sorry that didn't help. Could you reply in this thread and describe "
    "what you were looking for? I'll pass it on to the HR team."
)
FEEDBACK_THANKS_MESSAGE = (
    "Thanks for the details! The HR team will use this to improve our answers."
)

# Response types stored with each conversation
RESPONSE_TYPE_FAQ_MATCH = "faq_match"
RESPONSE_TYPE_NO_MATCH = "no_match"

# MongoDB
MONGODB_SERVER_SELECTION_TIMEOUT_MS = 5000
DEFAULT_MONGO_DB_NAME = "hrbot"
FAQS_COLLECTION = "faqs"
CONVERSATIONS_COLLECTION = "slack_conversations"
FEEDBACK_COLLECTION = "slack_feedback"

# Remembered thread roots of threaded answers (oldest dropped first)
THREAD_ROOTS_MAX_ITEMS = 10000
