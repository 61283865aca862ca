# --- Display ---
WIDTH = 960                 # default viewport (the window is resizable)
HEIGHT = 540
FPS = 60
TITLE = "Striped runner — prototype"

# --- World / Ground ---
WORLD_WIDTH_FACTOR = 100    # world is 100 viewports wide
STRIPE_W = 100
GROUND_THICKNESS = 200
SEED_DEFAULT = 12345

# --- Columns & branches (variant "columns") ---
COLUMN_W = 50
COLUMN_SPACING = 300
COLUMN_MIN_H_FRAC = 0.3     # fraction of viewport height
COLUMN_MAX_H_FRAC = 0.7
COLUMN_SHADE_MIN = 0x33     # grey level of a column
COLUMN_SHADE_MAX = 0x99
BRANCHES_MIN = 2
BRANCHES_MAX = 5
BRANCH_MIN_LEN = 50
BRANCH_MAX_LEN = 150
BRANCH_THICKNESS = 20
BRANCH_MIN_Y_FRAC = 0.3     # lowest branch sits 0.3*h above the ground line
ONE_WAY_TOLERANCE = 10      # px above a branch top still counted as "landing"

# --- Player ---
PLAYER_W = 50
PLAYER_H = 164
PLAYER_SPAWN_X = 100
PLAYER_SPAWN_ABOVE_GROUND = 200

# --- Physics ---
WORLD_GRAVITY = 300.0       # px/s^2, applied to every dynamic body
PLAYER_GRAVITY = 300.0      # extra gravity on the player body
ACCEL_X = 800.0
DRAG_X = 800.0
MAX_VX = 300.0
JUMP_VY = -1260.0
BOUNCE = 0.2

# --- Camera ---
FOLLOW_LERP = 0.1
BOUNDS_TOP_FACTOR = -50     # bounds.y = -50 * h (room for high jumps)
BOUNDS_HEIGHT_FACTOR = 100
ZOOM_START_FRAC = 0.4       # start zooming out when player y < 0.4*h
ZOOM_END_FRAC = 0.2         # fully zoomed out at 0.2*h
MAX_ZOOM_OUT = 0.3
ZOOM_SMOOTHING = 0.1        # per frame
ZOOM_REFERENCE_FPS = 60

# --- Variants ---
VARIANT_COLUMNS = "columns"  # decorations, fixed zoom
VARIANT_ZOOM = "zoom"        # bare ground, dynamic zoom
VARIANTS = (VARIANT_COLUMNS, VARIANT_ZOOM)

# --- Colors (RGB) ---
COLOR_BG = (0, 0, 0)
COLOR_STRIPE_A = (0x66, 0x66, 0x66)
COLOR_STRIPE_B = (0x00, 0xAA, 0x00)
COLOR_BRANCH = (0x88, 0x88, 0x88)
COLOR_PLAYER = (0xFF, 0x00, 0x00)
COLOR_FG = (220, 232, 255)
COLOR_HINT = (160, 180, 210)

# --- Debug ---
DEBUG_LAYOUT = False        # print a summary on every layout (re)generation
