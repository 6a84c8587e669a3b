"""Application constants."""

# Document store collections
USERS_COLLECTION = "users"
SPLITS_COLLECTION = "splits"
SPLIT_DAYS_COLLECTION = "split_days"
EXERCISES_COLLECTION = "exercises"
SESSIONS_COLLECTION = "sessions"
SETS_COLLECTION = "sets"
PROGRESS_PHOTOS_COLLECTION = "progress_photos"

# Session listing
RECENT_SESSIONS_DEFAULT_LIMIT = 10
PROGRESS_SESSIONS_LIMIT = 100
# How far back "previous sets" looks for the last completed session of an exercise
PREVIOUS_SETS_SESSIONS_LIMIT = 20

# Not derived from data yet; reported as-is in progress stats
PLACEHOLDER_AVERAGE_WORKOUT_MINUTES = 60

# Routine names offered when assigning split days
AVAILABLE_ROUTINE_NAMES = (
    "Push",
    "Pull",
    "Legs",
    "Upper Body",
    "Lower Body",
    "Full Body",
    "Core",
    "Cardio",
)
