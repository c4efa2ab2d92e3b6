"""
constants.py: Centralized configuration for game, input and storage settings.
"""

# -------- Timing Config --------
RENDER_FPS = 60                 # Nominal frame rate; one simulation step per frame
START_DELAY_FRAMES = 120        # "Get Ready!" window (2 seconds at 60 FPS)

# -------- Game World Config --------
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
GROUND_HEIGHT = 135             # Strip at the bottom that pipes and the bird never enter
BIRD_X = 50                     # Fixed bird X position
BIRD_SIZE = 50                  # Sprite is drawn from its top-left corner
RESPAWN_Y = SCREEN_HEIGHT / 2

# -------- Pipe Config --------
PIPE_WIDTH = 40
PIPE_GAP_MIN = 150
PIPE_GAP_MAX = 200
PIPE_GAP_MARGIN = 50            # Minimum solid segment above the gap
PIPE_BASE_SPEED = 3.0           # Horizontal speed (pixels/frame) at score 0
PIPE_SPEED_STEP = 0.01          # +1% speed per point scored
PIPE_SPAWN_INTERVAL_FRAMES = 100

# -------- Physics Config (Pixels / Frame) --------
GRAVITY = 0.2                   # Added to velocity every silent frame
MAX_FALL_VELOCITY = None        # None keeps the fall unbounded

# -------- Microphone Config --------
MIC_THRESHOLD = 0.05            # Levels at or below this count as silence
MIC_LEVEL_LOW = 0.02            # Input range mapped onto the thrust range
MIC_LEVEL_HIGH = 0.3
THRUST_LOW = -3.0               # Velocity at MIC_LEVEL_LOW
THRUST_HIGH = -8.0              # Velocity at MIC_LEVEL_HIGH
MIC_SAMPLE_RATE = 44100
MIC_BLOCK_SIZE = 1024

# -------- Storage Config --------
DB_FILE = "voice_flappy.db"
HIGH_SCORE_KEY = "highScore"
