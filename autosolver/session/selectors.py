"""CSS selectors for the exercise and navigation pages."""

# Exercise container; its data-test attribute carries the marker,
# e.g. "challenge challenge-select".
CHALLENGE = "[data-test~='challenge']"
CHALLENGE_MARKER_ATTRIBUTE = "data-test"

CHALLENGE_HEADER = "[data-test='challenge-header']"
CHOICE = "[data-test='challenge-choice']"
HINT_TOKEN = "[data-test='hint-token']"
TAP_TOKEN = "[data-test$='challenge-tap-token']"
TRANSLATE_INPUT = "[data-test='challenge-translate-input']"
PARTIAL_INPUT = "[data-test='challenge-partialReverseTranslate'] [contenteditable='true']"
PARTIAL_REMAINDER = "[data-test='challenge-partialReverseTranslate'] label"

NEXT_BUTTON = "[data-test='player-next']"
SKIP_BUTTON = "[data-test='player-skip']"
INCORRECT_BANNER = "[data-test~='blame-incorrect']"
REFERENCE_SOLUTION = "[data-test~='blame-incorrect'] h2 + div"

# Login
HAVE_ACCOUNT_BUTTON = "[data-test='have-account']"
EMAIL_INPUT = "[data-test='email-input']"
PASSWORD_INPUT = "[data-test='password-input']"
LOGIN_BUTTON = "[data-test='register-button']"

# Learn page
LESSON_NODE = "[data-test~='skill-path-level']"
START_LESSON_BUTTON = "[data-test='start-button']"
