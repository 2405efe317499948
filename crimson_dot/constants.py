# --- LEVEL GEOMETRY ---
TILE_SIZE = 32              # Size of each tile in pixels
LEVEL_WIDTH = 22            # Level dimensions in tiles
LEVEL_HEIGHT = 10
MIN_ZOOM = 1                # Minimum zoom factor to ensure visibility
VERTICAL_FILL = 0.8         # Share of the window height the level may use
FPS = 60
MAX_FRAME_GAP = 1.0         # Seconds; longer gaps (lost focus) are dropped
WINDOW_SIZE = (1408, 800)
RESIZE_DEBOUNCE = 0.1       # Seconds

# Unscaled sprite sizes (pixels)
CAT_SIZE = (TILE_SIZE, TILE_SIZE)
COUCH_SIZE = (2 * TILE_SIZE, TILE_SIZE)
FOOD_SIZE = (TILE_SIZE // 2, TILE_SIZE // 2)

# --- BEHAVIOUR TUNING (reference values) ---
ACTIVATION_DISTANCE_TILES = 3
MAX_FOLLOW_DISTANCE_TILES = 6
MIN_DISTANCE_TILES = 0.125
REENGAGEMENT_DISTANCE_TILES = 1     # Closer distance required to re-engage the cat
COUCH_THRESHOLD = 10                # Distance to consider the cat has reached the couch
FOOD_THRESHOLD = TILE_SIZE          # Distance to consider the cat has reached the food
FOOD_MIN_SEPARATION = 4 * TILE_SIZE # Minimum distance from couch to food bowl
FOOD_PLACEMENT_ATTEMPTS = 20
EATING_DURATION = 3.0
EVOLUTION_BASE_TIME = 20.0
EXHAUST_FACTOR = 0.1                # Pixel distance -> exhaust units
EXHAUST_THRESHOLD = 333.0
HUNGER_THRESHOLD = 433.0            # Food bowl appears
SLEEP_THRESHOLD = 500.0
IDLE_TIMEOUT = 1.0
IDLE_TO_SLEEP_TIMEOUT = 10.0
RECOVERY_RATE = 5.0
SLEEP_DURATION = 10.0
MIN_SPEED = 0.5
MAX_SPEED = 5.0

# --- EVOLUTION ---
LEVELS = ("kitten", "cat", "storm", "order")
STORM_LEVEL = 2
FINAL_LEVEL = 2

# --- PERSISTENCE ---
BEST_TIME_KEY = "ootcdBest"
SAVE_FILE = "crimson_dot_save.json"

# --- SCENE TEXT ---
INTRO_TEXT = "NOTHING MAKES THIS LITTLE KITTEN HAPPIER\nTHAN CHASING THE LITTLE RED DOT :)"
BRIEFING_TEXT = (
    "A WISE OLD CAT APPEARS BEFORE YOU...\n"
    "\"IT HAS BEEN EONS SINCE CATS HAVE CLASPED\n"
    "THE CRIMSON DOT IN THEIR CLAWS... DO YOU\n"
    "HAVE WHAT IT TAKES TO JOIN THE ORDER?\""
)
EVOLVE_TEXTS = {
    1: "SO... THE KITTEN HAS BECOME A CAT\nYOUR PAWS GROW SWIFT, YOUR EYES SHARP\nBUT THE CRIMSON DOT STILL ELUDES YOU...",
    2: "IMPRESSIVE, BUT BEFORE YOU CAN ASCEND SMALL\nCREATURE, YOU MUST WEATHER THE STORM...",
}
ASCENDED_TEXT = "AT LAST, THE CRIMSON DOT IS YOURS!"
RESULT_TEXT = "YOU ASCENDED IN {time}\nTHE ORDER WELCOMES YOU, BUT\nCHALLENGES YOU TO DO BETTER..."
PAUSED_TEXT = "GAME PAWSED"

# --- RETRO UI PALETTE ---
COLOR_BG = (60, 52, 74)
COLOR_BG_STORM = (24, 26, 40)
COLOR_BG_LIGHTNING = (214, 214, 236)
COLOR_CAT = (235, 170, 90)
COLOR_CAT_SLEEPY = (190, 140, 90)
COLOR_CAT_EYES = (33, 37, 43)
COLOR_COUCH = (120, 60, 150)
COLOR_FOOD = (200, 200, 210)
COLOR_DOT = (255, 0, 0)
COLOR_UI_BAR_BG = (62, 68, 81)
COLOR_HAPPY = (229, 192, 123)
COLOR_EVOLVE = (198, 120, 221)
COLOR_STAMINA = (97, 175, 239)
COLOR_TEXT = (255, 255, 255)
COLOR_SCENE_BG = (187, 187, 187)
COLOR_SCENE_TEXT = (0, 0, 0)
COLOR_SCENE_ALERT = (255, 0, 0)
