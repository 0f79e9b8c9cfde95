# connectn/engine/constants.py

# --- Default Board Dimensions ---
DEFAULT_WIDTH = 7
DEFAULT_HEIGHT = 6
DEFAULT_WIN_CONDITION = 4

# --- Scoring System ---
# Win  = WIN_SCORE + depth_left  (faster wins rank higher)
# Loss = -WIN_SCORE - depth_left
WIN_SCORE = 1000
CENTER_WEIGHT = 5

# Streak heuristic, keyed by how many pieces short of a win the run is
STREAK_COMPLETE = 100
STREAK_WEIGHTS = {1: 50, 2: 10, 3: 1}

# Returned by choose_move when the board is full
NO_MOVE = -1
