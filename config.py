WINDOW_NAME = "ScratchOff"
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720

# Hidden image (scaled to fill the window, center-cropped)
BACKGROUND_IMAGE = "assets/background.jpg"

# Cover layer: diagonal gradient, top-left -> bottom-right (BGR)
COVER_COLOR_START = (0, 0, 0)
COVER_COLOR_END = (26, 26, 26)

# Fade points
FADE_DURATION = 0.25        # seconds a point stays alive
DECAY_INTERVAL = 0.001      # sweep interval of the decay timer
DECAY_ACTIVE_AT_START = True
REVEAL_RADIUS = 35          # base radius of each reveal circle (pixels)

# Staggered reset
RESET_STEP_DELAY = 0.0075   # delay before each single-point removal

# Control bar (top-right)
BUTTON_SIZE = 32
BUTTON_SPACING = 8
CONTROL_BAR_PADDING_X = 32
CONTROL_BAR_PADDING_Y = 64
BUTTON_COLOR = (255, 255, 255)
DISABLED_OPACITY = 0.3

# Logging
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
